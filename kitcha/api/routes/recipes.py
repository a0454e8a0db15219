import logging
from uuid import uuid4

from fastapi import APIRouter, HTTPException

from kitcha.domain.Recipe import Recipe
from kitcha.infra.Recipe_Repository import RecipeRepository
from kitcha.utilities.formatting import quantity_to_json
from kitcha.utilities.validators import RecipeInput

router = APIRouter(prefix='/recipes', tags=['recipes'])
logger = logging.getLogger(__name__)


def recipe_json(recipe: Recipe) -> dict:
    data = recipe.to_dict()
    for raw, ing in zip(data['ingredients'], recipe.ingredients):
        raw['quantity'] = quantity_to_json(ing.quantity)
    return data


@router.get('')
def list_recipes():
    recipes = RecipeRepository().list_recipes()
    return {"recipes": [recipe_json(r) for r in recipes], "count": len(recipes)}


@router.post('', status_code=201)
def create_recipe(payload: RecipeInput):
    try:
        recipe = payload.to_domain(str(uuid4()))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    try:
        RecipeRepository().add_recipe(recipe)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("Recipe '%s' saved as %s", recipe.name, recipe.id)
    return recipe_json(recipe)


@router.get('/{recipe_id}')
def get_recipe(recipe_id: str):
    recipe = RecipeRepository().get_recipe(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe_json(recipe)


@router.delete('/{recipe_id}')
def delete_recipe(recipe_id: str):
    # meal plans keep pointing at the id; their shopping lists skip it
    if not RecipeRepository().delete_recipe(recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"success": True}
