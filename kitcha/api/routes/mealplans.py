import logging
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException

from kitcha.api.users import current_user
from kitcha.domain.Plan import MealPlan
from kitcha.infra.Plan_Repository import PlanRepository
from kitcha.utilities.validators import MealPlanInput

router = APIRouter(prefix='/mealplans', tags=['mealplans'])
logger = logging.getLogger(__name__)


def _to_plan(payload: MealPlanInput, plan_id: str, user_id: str) -> MealPlan:
    try:
        return payload.to_domain(plan_id, user_id)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get('')
def list_meal_plans(user_id: str = Depends(current_user)):
    plans = PlanRepository().list_plans(user_id)
    return {"mealplans": [p.to_dict() for p in plans], "count": len(plans)}


@router.post('', status_code=201)
def create_meal_plan(payload: MealPlanInput, user_id: str = Depends(current_user)):
    plan = PlanRepository().save_plan(_to_plan(payload, str(uuid4()), user_id))
    logger.info("Meal plan %s created for %s (%d entries)", plan.id, user_id, len(plan.entries))
    return plan.to_dict()


@router.get('/{plan_id}')
def get_meal_plan(plan_id: str, user_id: str = Depends(current_user)):
    plan = PlanRepository().get_plan(plan_id, user_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Meal plan not found")
    return plan.to_dict()


@router.put('/{plan_id}')
def replace_meal_plan(plan_id: str, payload: MealPlanInput, user_id: str = Depends(current_user)):
    """Replace a meal plan; the stored version is bumped."""
    repo = PlanRepository()
    if repo.get_plan(plan_id, user_id) is None:
        raise HTTPException(status_code=404, detail="Meal plan not found")
    return repo.save_plan(_to_plan(payload, plan_id, user_id)).to_dict()


@router.delete('/{plan_id}')
def delete_meal_plan(plan_id: str, user_id: str = Depends(current_user)):
    if not PlanRepository().delete_plan(plan_id, user_id):
        raise HTTPException(status_code=404, detail="Meal plan not found")
    return {"success": True}
