from datetime import date, datetime, timezone
from decimal import Decimal
import unittest

from kitcha.domain.Budget import CostRecord
from kitcha.domain.Ingredient import RecipeIngredient, Unit, parse_quantity
from kitcha.domain.Pantry import Pantry, PantryItem
from kitcha.domain.Plan import MealPlan, MealPlanEntry, MealType
from kitcha.domain.Recipe import Recipe
from kitcha.domain.errors import UnresolvedReference
from kitcha.logic.providers import MappingRecipeProvider, resolve_recipe


class TestUnit(unittest.TestCase):
    def test_aliases(self):
        self.assertEqual(Unit.parse('g'), Unit.GRAMS)
        self.assertEqual(Unit.parse(' Cup '), Unit.CUPS)
        self.assertEqual(Unit.parse('pcs'), Unit.PIECES)
        self.assertEqual(Unit.parse(Unit.ML), Unit.ML)
        self.assertEqual(Unit.LITERS.kind, 'volume')
        self.assertEqual(Unit.KG.kind, 'mass')
        self.assertEqual(Unit.ITEMS.kind, 'count')

    def test_unknown_unit(self):
        with self.assertRaises(ValueError):
            Unit.parse('handful')
        with self.assertRaises(ValueError):
            Unit.parse('')


class TestQuantities(unittest.TestCase):
    def test_parse(self):
        self.assertEqual(parse_quantity('1.5'), Decimal('1.5'))
        self.assertEqual(parse_quantity(0.1), Decimal('0.1'))
        self.assertEqual(parse_quantity(0, allow_zero=True), Decimal(0))

    def test_rejects_junk(self):
        for bad in (0, -1, 'abc', None, True, float('nan')):
            with self.assertRaises(ValueError):
                parse_quantity(bad)


class TestRecipe(unittest.TestCase):
    def test_ingredient_key_is_normalized(self):
        ing = RecipeIngredient('  Brown Sugar ', 2, 'cup')
        self.assertEqual(ing.key, ('brown sugar', Unit.CUPS))
        self.assertEqual(ing.name, 'Brown Sugar')

    def test_requires_ingredients(self):
        with self.assertRaises(ValueError):
            Recipe(id='r', name='Empty', ingredients=())

    def test_servings_must_be_positive(self):
        with self.assertRaises(ValueError):
            Recipe(id='r', name='Soup', servings=0, ingredients=(RecipeIngredient('Water', 1, 'l'),))

    def test_dict_roundtrip_keeps_identity(self):
        recipe = Recipe(id='r1', name='Soup', servings=4, tags=('easy',),
                        ingredients=(RecipeIngredient('Water', '1.25', 'liters', category='other'),))
        self.assertEqual(Recipe.from_dict(recipe.to_dict()), recipe)

    def test_from_dict_generates_id(self):
        recipe = Recipe.from_dict({'name': 'Toast', 'ingredients': [{'ingredientName': 'Bread', 'quantity': 2,
                                                                      'unit': 'pieces'}]})
        self.assertTrue(recipe.id)
        self.assertEqual(recipe.ingredients[0].name, 'Bread')


class TestPantry(unittest.TestCase):
    def test_category_and_location(self):
        item = PantryItem(name='Milk', quantity=1, unit='l', category='DAIRY', location='Fridge',
                          expiry_date='2024-05-01')
        self.assertEqual(item.category, 'dairy')
        self.assertEqual(item.location, 'fridge')
        self.assertEqual(item.expiry_date, date(2024, 5, 1))
        self.assertEqual(PantryItem(name='X', quantity=1, unit='g', category='mystery').category, 'other')
        with self.assertRaises(ValueError):
            PantryItem(name='X', quantity=1, unit='g', location='garage')

    def test_negative_quantity_rejected(self):
        with self.assertRaises(ValueError):
            PantryItem(name='Rice', quantity=-1, unit='cups')

    def test_quantities_by_key(self):
        pantry = Pantry([PantryItem(name='Rice', quantity=1, unit='cups'),
                         PantryItem(name='rice ', quantity=2, unit='cups'),
                         PantryItem(name='Rice', quantity=100, unit='grams')])
        totals = pantry.quantities_by_key()
        self.assertEqual(totals[('rice', Unit.CUPS)], Decimal(3))
        self.assertEqual(totals[('rice', Unit.GRAMS)], Decimal(100))
        self.assertEqual(len(pantry), 3)


class TestPlan(unittest.TestCase):
    def test_entry_validation(self):
        entry = MealPlanEntry(recipe_id='r1', day_of_week=6, meal_type='Dinner')
        self.assertEqual(entry.meal_type, MealType.DINNER)
        self.assertEqual(entry.day_name, 'Sunday')
        self.assertEqual(entry.servings, 1)
        for kwargs in ({'day_of_week': 7}, {'meal_type': 'brunch'}, {'servings': 0}, {'recipe_id': ''}):
            args = dict(recipe_id='r1', day_of_week=0, meal_type='lunch')
            args.update(kwargs)
            with self.assertRaises(ValueError):
                MealPlanEntry(**args)

    def test_plan_dates(self):
        with self.assertRaises(ValueError):
            MealPlan(id='p', user_id='u', name='Week', start_date='2024-03-17', end_date='2024-03-11')
        plan = MealPlan.from_dict({'id': 'p', 'user_id': 'u', 'name': 'Week', 'start_date': '2024-03-11',
                                   'end_date': '2024-03-17',
                                   'entries': [{'recipeId': 'r1', 'dayOfWeek': 2, 'mealType': 'lunch'}]})
        self.assertEqual(plan.entries[0].recipe_id, 'r1')
        self.assertEqual(plan.version, 1)


class TestCostRecord(unittest.TestCase):
    def test_coercion(self):
        self.assertEqual(CostRecord(amount_cents=5, occurred_at='2024-03-11T10:00:00').occurred_at,
                         datetime(2024, 3, 11, 10))
        self.assertEqual(CostRecord(amount_cents=5, occurred_at=date(2024, 3, 11)).occurred_at,
                         datetime(2024, 3, 11))
        aware = datetime(2024, 3, 11, tzinfo=timezone.utc)
        self.assertEqual(CostRecord(amount_cents=5, occurred_at=aware).occurred_at, aware)

    def test_rejects_bad_amounts(self):
        for bad in (-1, 1.5, True, '100'):
            with self.assertRaises(ValueError):
                CostRecord(amount_cents=bad, occurred_at=datetime(2024, 3, 11))


class TestProviders(unittest.TestCase):
    def test_resolve_recipe(self):
        recipe = Recipe(id='r1', name='Tea', ingredients=(RecipeIngredient('Tea leaves', 1, 'tsp'),))
        provider = MappingRecipeProvider([recipe])
        self.assertIs(resolve_recipe(provider, 'r1'), recipe)
        with self.assertRaises(UnresolvedReference) as ctx:
            resolve_recipe(provider, 'gone')
        self.assertEqual(ctx.exception.recipe_id, 'gone')
