import logging

from fastapi import APIRouter, Depends, HTTPException

from kitcha.api.users import current_user
from kitcha.infra.Budget_Repository import BudgetRepository
from kitcha.utilities.validators import BudgetConfigInput, CostRecordInput

router = APIRouter(tags=['budget'])
logger = logging.getLogger(__name__)


@router.get('/users/me/budget')
def get_budget(user_id: str = Depends(current_user)):
    return BudgetRepository().get_config(user_id).to_dict()


@router.put('/users/me/budget')
def update_budget(payload: BudgetConfigInput, user_id: str = Depends(current_user)):
    config = BudgetRepository().save_config(user_id, payload.to_domain())
    logger.info("Budget preferences updated for %s", user_id)
    return config.to_dict()


@router.get('/shopping-history')
def list_shopping_history(user_id: str = Depends(current_user)):
    records = BudgetRepository().list_records(user_id)
    return {"records": [r.to_dict() for r in records], "count": len(records)}


@router.post('/shopping-history', status_code=201)
def add_shopping_history(payload: CostRecordInput, user_id: str = Depends(current_user)):
    try:
        record = payload.to_domain()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    BudgetRepository().add_record(user_id, record)
    return record.to_dict()
