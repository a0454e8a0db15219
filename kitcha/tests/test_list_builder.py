import unittest
from decimal import Decimal

from kitcha.domain.Ingredient import RecipeIngredient, Unit
from kitcha.domain.Pantry import Pantry, PantryItem
from kitcha.domain.Plan import MealPlanEntry
from kitcha.domain.Recipe import Recipe
from kitcha.logic.providers import MappingRecipeProvider
from kitcha.logic.shopping.list_builder import aggregate, required_by_key, scale_factor


def _recipe(rid, name, ingredients, servings=1):
    return Recipe(id=rid, name=name, servings=servings,
                  ingredients=tuple(RecipeIngredient(*ing) for ing in ingredients))


def _entry(rid, day=0, meal='dinner', servings=1):
    return MealPlanEntry(recipe_id=rid, day_of_week=day, meal_type=meal, servings=servings)


class TestAggregate(unittest.TestCase):
    def setUp(self):
        self.recipes = {
            'a': _recipe('a', 'Recipe A', [('Flour', 2, 'cups', None, 'baking'), ('Eggs', 3, 'pieces')]),
            'b': _recipe('b', 'Pancakes', [('flour ', '1.5', 'cup', None, 'baking'), ('Milk', 250, 'ml')],
                         servings=2),
            'c': _recipe('c', 'Omelette', [('eggs', 2, 'pcs'), ('Salt', 1, 'tsp')]),
        }

    def test_same_recipe_twice_sums_and_lists_recipe_once(self):
        entries = [_entry('a', 0, servings=1), _entry('a', 2, servings=2)]
        pantry = [PantryItem(name='flour', quantity=1, unit='cups')]
        result = aggregate(entries, self.recipes, pantry)
        flour = [i for i in result.items if i.name == 'flour'][0]
        self.assertEqual(flour.required_quantity, Decimal(6))
        self.assertEqual(flour.pantry_quantity, Decimal(1))
        self.assertEqual(flour.quantity, Decimal(5))
        self.assertEqual(flour.unit, Unit.CUPS)
        self.assertEqual(flour.recipes, ('Recipe A',))
        self.assertEqual(result.skipped_count, 0)

    def test_missing_recipe_is_skipped_and_counted(self):
        entries = [_entry('a'), _entry('deleted', 1), _entry('c', 2)]
        result = aggregate(entries, self.recipes, [])
        self.assertEqual(result.skipped_count, 1)
        self.assertEqual(result.skipped_recipe_ids, ('deleted',))
        names = {i.name for i in result.items}
        self.assertEqual(names, {'flour', 'eggs', 'salt'})

    def test_empty_plan_gives_empty_list(self):
        result = aggregate([], self.recipes, [PantryItem(name='Flour', quantity=3, unit='cups')])
        self.assertEqual(len(result), 0)
        self.assertEqual(result.skipped_count, 0)
        self.assertIsNone(result.total_estimated_cost_cents)

    def test_only_unresolved_entries(self):
        result = aggregate([_entry('x'), _entry('y')], self.recipes)
        self.assertEqual(result.items, ())
        self.assertEqual(result.skipped_count, 2)

    def test_scaling_by_base_servings(self):
        # Pancakes serve 2: 3 servings -> 1.5x
        result = aggregate([_entry('b', servings=3)], self.recipes)
        by_name = {i.name: i for i in result.items}
        self.assertEqual(by_name['flour'].quantity, Decimal('2.25'))
        self.assertEqual(by_name['milk'].quantity, Decimal(375))

    def test_scale_factor_without_base_servings(self):
        recipe = Recipe(id='n', name='No servings', ingredients=(RecipeIngredient('Rice', 1, 'cups'),))
        self.assertEqual(scale_factor(recipe, 4), Decimal(4))
        self.assertEqual(scale_factor(self.recipes['b'], 1), Decimal('0.5'))

    def test_names_merge_case_insensitively_across_recipes(self):
        result = aggregate([_entry('a'), _entry('c', 1)], self.recipes)
        eggs = [i for i in result.items if i.name == 'eggs']
        self.assertEqual(len(eggs), 1)
        self.assertEqual(eggs[0].quantity, Decimal(5))
        self.assertEqual(eggs[0].recipes, ('Recipe A', 'Omelette'))

    def test_different_units_stay_separate(self):
        recipes = {
            'x': _recipe('x', 'X', [('Milk', 1, 'cups')]),
            'y': _recipe('y', 'Y', [('Milk', 100, 'ml')]),
        }
        result = aggregate([_entry('x'), _entry('y')], recipes)
        self.assertEqual(sorted((i.name, i.unit.value) for i in result.items),
                         [('milk', 'cups'), ('milk', 'ml')])

    def test_fully_covered_line_is_dropped(self):
        pantry = [PantryItem(name='Eggs', quantity=12, unit='pieces')]
        result = aggregate([_entry('a')], self.recipes, pantry)
        self.assertNotIn('eggs', [i.name for i in result.items])

    def test_pantry_duplicates_are_summed(self):
        pantry = [PantryItem(name='Flour', quantity=1, unit='cups'),
                  PantryItem(name='flour', quantity='0.5', unit='cups')]
        result = aggregate([_entry('a')], self.recipes, Pantry(pantry))
        flour = [i for i in result.items if i.name == 'flour'][0]
        self.assertEqual(flour.quantity, Decimal('0.5'))
        self.assertEqual(flour.pantry_quantity, Decimal('1.5'))

    def test_pantry_in_other_unit_is_not_used(self):
        pantry = [PantryItem(name='Flour', quantity=500, unit='grams')]
        result = aggregate([_entry('a')], self.recipes, pantry)
        flour = [i for i in result.items if i.name == 'flour'][0]
        self.assertEqual(flour.quantity, Decimal(2))

    def test_conservation_and_bounds(self):
        entries = [_entry('a'), _entry('b', 1, servings=4), _entry('c', 2, servings=2)]
        pantry = [PantryItem(name='Flour', quantity=2, unit='cups'),
                  PantryItem(name='Milk', quantity=100, unit='ml'),
                  PantryItem(name='Eggs', quantity=1, unit='pieces')]
        required = required_by_key(entries, self.recipes)
        have = Pantry(pantry).quantities_by_key()
        result = aggregate(entries, self.recipes, pantry)
        for item in result.items:
            self.assertGreater(item.quantity, 0)
            self.assertEqual(item.required_quantity, required[item.key])
            self.assertEqual(item.quantity + item.pantry_quantity, item.required_quantity)
            self.assertEqual(item.pantry_quantity, min(have.get(item.key, Decimal(0)), required[item.key]))
        listed = {i.key for i in result.items}
        for key, qty in required.items():
            if key not in listed:
                self.assertGreaterEqual(have.get(key, Decimal(0)), qty)

    def test_ordering_is_deterministic(self):
        entries = [_entry('c'), _entry('b', 1), _entry('a', 2)]
        result = aggregate(entries, self.recipes)
        again = aggregate(list(reversed(entries)), self.recipes)
        self.assertEqual([i.key for i in result.items], [i.key for i in again.items])
        # categorized lines first
        self.assertEqual(result.items[0].category, 'baking')
        uncategorized = [i.name for i in result.items if i.category is None]
        self.assertEqual(uncategorized, sorted(uncategorized))

    def test_category_falls_back_to_pantry(self):
        pantry = [PantryItem(name='Milk', quantity=50, unit='ml', category='dairy')]
        result = aggregate([_entry('b')], self.recipes, pantry)
        milk = [i for i in result.items if i.name == 'milk'][0]
        self.assertEqual(milk.category, 'dairy')

    def test_inputs_are_not_mutated(self):
        entries = [_entry('a'), _entry('b')]
        pantry = [PantryItem(name='Flour', quantity=1, unit='cups')]
        aggregate(entries, self.recipes, pantry)
        self.assertEqual(pantry[0].quantity, Decimal(1))
        self.assertEqual(len(entries), 2)

    def test_accepts_recipe_provider(self):
        provider = MappingRecipeProvider(self.recipes.values())
        result = aggregate([_entry('a')], provider)
        self.assertEqual({i.name for i in result.items}, {'flour', 'eggs'})

    def test_result_serialization(self):
        result = aggregate([_entry('b')], self.recipes)
        data = result.to_dict()
        self.assertEqual(data['skippedCount'], 0)
        self.assertIsNone(data['totalEstimatedCostCents'])
        flour = [i for i in data['items'] if i['ingredientName'] == 'flour'][0]
        self.assertEqual(flour['quantity'], 0.75)
        self.assertEqual(flour['unit'], 'cups')
        self.assertEqual(flour['recipes'], ['Pancakes'])
