import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from kitcha.api.users import current_user
from kitcha.domain.Ingredient import Unit
from kitcha.domain.Pantry import PantryItem
from kitcha.events.event_helpers import publish_near_expiry
from kitcha.infra.Pantry_Repository import PantryRepository
from kitcha.logic.pantry.analysis import compute_pantry_snapshots
from kitcha.utilities.config import DAYS_BEFORE_EXPIRY
from kitcha.utilities.formatting import quantity_to_json
from kitcha.utilities.validators import PantryItemInput

router = APIRouter(prefix='/pantry', tags=['pantry'])
logger = logging.getLogger(__name__)


def pantry_item_json(item: PantryItem) -> dict:
    data = item.to_dict()
    data['quantity'] = quantity_to_json(item.quantity)
    return data


def _to_item(payload: PantryItemInput) -> PantryItem:
    try:
        return payload.to_domain()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _parse_unit(unit: Optional[str]) -> Optional[Unit]:
    if unit is None:
        return None
    try:
        return Unit.parse(unit)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get('')
def list_pantry(user_id: str = Depends(current_user)):
    items = PantryRepository().get_snapshot(user_id)
    return {"items": [pantry_item_json(i) for i in items], "count": len(items)}


@router.post('', status_code=201)
def add_pantry_item(payload: PantryItemInput, user_id: str = Depends(current_user)):
    item = _to_item(payload)
    try:
        PantryRepository().add_item(user_id, item)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "item": pantry_item_json(item)}


@router.get('/expiring')
def pantry_expiring(days: Optional[int] = Query(default=None, ge=0, le=365),
                    user_id: str = Depends(current_user)):
    """Expiring-soon and low-stock snapshot; expiring items are also pushed to the alert feed."""
    window = days if days is not None else DAYS_BEFORE_EXPIRY
    expiring, low_stock = compute_pantry_snapshots(PantryRepository().get_snapshot(user_id), window=window)
    for entry in expiring:
        publish_near_expiry(user_id, entry, window)
    return {"window": window, "expiring": expiring, "low_stock": low_stock}


@router.put('/{name}')
def edit_pantry_item(name: str, payload: PantryItemInput,
                     unit: Optional[str] = Query(default=None, description="Unit of the stored item"),
                     user_id: str = Depends(current_user)):
    item = _to_item(payload)
    try:
        PantryRepository().update_item(user_id, name, item, unit=_parse_unit(unit))
    except KeyError:
        raise HTTPException(status_code=404, detail='Ingredient not found')
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "item": pantry_item_json(item)}


@router.delete('/{name}')
def delete_pantry_item(name: str, unit: Optional[str] = Query(default=None),
                       user_id: str = Depends(current_user)):
    """Delete the item in the given unit, or in every unit when none is given."""
    if not PantryRepository().delete_item(user_id, name, unit=_parse_unit(unit)):
        raise HTTPException(status_code=404, detail='Ingredient not found')
    return {"success": True}
