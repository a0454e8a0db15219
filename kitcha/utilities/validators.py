"""
Input validation schemas using Pydantic for the REST layer.

Each schema converts into the matching immutable domain value through
``to_domain()``.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from kitcha.domain.Budget import BudgetConfiguration, CostRecord
from kitcha.domain.Ingredient import RecipeIngredient, Unit
from kitcha.domain.Pantry import PantryItem
from kitcha.domain.Plan import MealPlan, MealPlanEntry
from kitcha.domain.Recipe import Recipe
from kitcha.utilities.constants import DEFAULT_ALERT_THRESHOLD, PANTRY_LOCATIONS


def _check_unit(v):
    return Unit.parse(v).value


class PantryItemInput(BaseModel):
    """Schema for pantry item input validation."""
    name: str = Field(..., min_length=1, max_length=100)
    quantity: Decimal = Field(..., ge=0, le=100000)
    unit: str
    category: str = 'other'
    expiry_date: Optional[date] = None
    location: Optional[str] = None

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        v = v.strip()
        if not v:
            raise ValueError('Name cannot be empty')
        return v

    @field_validator('unit')
    @classmethod
    def validate_unit(cls, v):
        return _check_unit(v)

    @field_validator('location')
    @classmethod
    def validate_location(cls, v):
        if v is not None and v.strip().lower() not in PANTRY_LOCATIONS:
            raise ValueError(f"Location must be one of {', '.join(PANTRY_LOCATIONS)}")
        return v

    def to_domain(self) -> PantryItem:
        return PantryItem(name=self.name, quantity=self.quantity, unit=self.unit,
                          category=self.category, expiry_date=self.expiry_date, location=self.location)


class RecipeIngredientInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    quantity: Decimal = Field(..., gt=0, le=100000)
    unit: str
    note: Optional[str] = None
    category: Optional[str] = None

    @field_validator('unit')
    @classmethod
    def validate_unit(cls, v):
        return _check_unit(v)

    def to_domain(self) -> RecipeIngredient:
        return RecipeIngredient(name=self.name, quantity=self.quantity, unit=self.unit,
                                note=self.note, category=self.category)


class RecipeInput(BaseModel):
    """Schema for recipe input validation."""
    name: str = Field(..., min_length=1, max_length=200)
    servings: Optional[int] = Field(None, ge=1, le=50)
    ingredients: List[RecipeIngredientInput]
    tags: List[str] = Field(default_factory=list)
    estimated_total_cost_cents: Optional[int] = Field(None, ge=0)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate recipe name."""
        if not v.strip():
            raise ValueError('Recipe name cannot be empty')
        return v.strip()

    @field_validator('ingredients')
    @classmethod
    def validate_ingredients(cls, v):
        """Ensure recipe has at least one ingredient."""
        if not v:
            raise ValueError('Recipe must have at least one ingredient')
        return v

    def to_domain(self, recipe_id: str) -> Recipe:
        return Recipe(id=recipe_id, name=self.name, servings=self.servings,
                      ingredients=tuple(i.to_domain() for i in self.ingredients),
                      tags=tuple(self.tags),
                      estimated_total_cost_cents=self.estimated_total_cost_cents)


class MealPlanEntryInput(BaseModel):
    recipe_id: str = Field(..., min_length=1)
    day_of_week: int = Field(..., ge=0, le=6)
    meal_type: str = Field(..., pattern=r'^(breakfast|lunch|dinner|snack)$')
    servings: int = Field(1, ge=1)

    def to_domain(self) -> MealPlanEntry:
        return MealPlanEntry(recipe_id=self.recipe_id, day_of_week=self.day_of_week,
                             meal_type=self.meal_type, servings=self.servings)


class MealPlanInput(BaseModel):
    """Schema for meal plan creation."""
    name: str = Field(..., min_length=1, max_length=200)
    start_date: date
    end_date: date
    notes: Optional[str] = None
    entries: List[MealPlanEntryInput] = Field(default_factory=list)

    def to_domain(self, plan_id: str, user_id: str) -> MealPlan:
        return MealPlan(id=plan_id, user_id=user_id, name=self.name,
                        start_date=self.start_date, end_date=self.end_date,
                        entries=tuple(e.to_domain() for e in self.entries), notes=self.notes)


class BudgetConfigInput(BaseModel):
    """Schema for budget preference updates. A zero budget means 'not set'."""
    weekly_budget_cents: int = Field(..., ge=0)
    alert_enabled: bool = True
    alert_threshold_percentage: int = Field(DEFAULT_ALERT_THRESHOLD, ge=1, le=100)

    def to_domain(self) -> BudgetConfiguration:
        return BudgetConfiguration(weekly_budget_cents=self.weekly_budget_cents,
                                   alert_enabled=self.alert_enabled,
                                   alert_threshold_percentage=self.alert_threshold_percentage)


class CostRecordInput(BaseModel):
    """Schema for a shopping history entry."""
    amount_cents: int = Field(..., ge=0)
    occurred_at: datetime
    description: Optional[str] = Field(None, max_length=200)

    def to_domain(self) -> CostRecord:
        return CostRecord(amount_cents=self.amount_cents, occurred_at=self.occurred_at,
                          description=self.description)
