from fastapi import FastAPI, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from datetime import date as _date
from typing import Optional
import logging

from kitcha.api.users import current_user
from kitcha.domain.errors import InvalidConfiguration
from kitcha.infra.Budget_Repository import BudgetRepository
from kitcha.infra.Pantry_Repository import PantryRepository
from kitcha.infra.Plan_Repository import PlanRepository
from kitcha.infra.Recipe_Repository import RecipeRepository
from kitcha.infra.price_client import default_price_estimator
from kitcha.logic.budget.evaluator import compare_weeks, evaluate, should_alert, week_bounds
from kitcha.logic.shopping.cache import ShoppingListCache
from kitcha.logic.shopping.cost import price_shopping_list
from kitcha.logic.shopping.list_builder import aggregate
from kitcha.events.event_helpers import publish_budget_alert
from kitcha.events.web_observers import start as start_event_observers, get_events as get_web_events

# Routers
from kitcha.api.routes import budget, mealplans, pantry, recipes

# Logging
logger = logging.getLogger("kitcha_app")

# Initialize FastAPI app
app = FastAPI(title="Kitcha Shopping & Budget API")

# Include routers
app.include_router(pantry.router)
app.include_router(recipes.router)
app.include_router(mealplans.router)
app.include_router(budget.router)

shopping_cache = ShoppingListCache()


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web alerts when the app starts."""
    start_event_observers()
    logger.info("Web observers for budget and pantry alerts started")


@app.exception_handler(InvalidConfiguration)
async def _invalid_configuration(request: Request, exc: InvalidConfiguration):
    logger.warning("Invalid configuration on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# -------------------- API: Shopping List --------------------
@app.get('/mealplans/{plan_id}/shopping-list')
def api_shopping_list(plan_id: str, user_id: str = Depends(current_user)):
    """Shopping list for a meal plan: scaled demand minus pantry, with cost estimates.

    Entries whose recipe was deleted are skipped and counted in skippedCount.
    The aggregation is cached; prices are looked up on every request.
    """
    plan = PlanRepository().get_plan(plan_id, user_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Meal plan not found")
    recipes = {r.id: r for r in RecipeRepository().list_recipes()}
    pantry_items = PantryRepository().get_snapshot(user_id)

    key = ShoppingListCache.make_key(plan.id, plan.version, recipes.values(), pantry_items)
    unpriced = shopping_cache.get(key)
    if unpriced is None:
        unpriced = aggregate(plan.entries, recipes, pantry_items)
        shopping_cache.put(key, unpriced)
    estimator = default_price_estimator()
    try:
        result = price_shopping_list(unpriced, estimator)
    finally:
        close = getattr(estimator, 'close', None)
        if close is not None:
            close()
    if result.skipped_count:
        logger.info("Shopping list for %s skipped %d entries: %s",
                    plan_id, result.skipped_count, ", ".join(result.skipped_recipe_ids))
    return result.to_dict()


# -------------------- API: Budget analytics --------------------
@app.get('/analytics/budget-status')
def api_budget_status(week_start: Optional[_date] = Query(default=None, alias="weekStart"),
                      user_id: str = Depends(current_user)):
    """Spending of the current week (or the week starting at weekStart) against the budget.

    A firing alert decision is published to the alert feed.
    """
    repo = BudgetRepository()
    config = repo.get_config(user_id)
    start, end = week_bounds(week_start)
    records = repo.get_for_week(user_id, start, end)
    status = evaluate(config, records, week_start=week_start)
    decision = should_alert(status, config)
    if publish_budget_alert(user_id, decision, status):
        logger.info("Budget alert for %s: %s", user_id, decision.title)
    return status.to_dict()


@app.get('/analytics/budget-comparison')
def api_budget_comparison(count: int = Query(default=4, ge=1, le=52),
                          user_id: str = Depends(current_user)):
    repo = BudgetRepository()
    weeks = compare_weeks(repo.get_config(user_id), repo.list_records(user_id), count=count)
    return {"weeks": [w.to_dict() for w in weeks], "count": len(weeks)}


# -------------------- API: Alerts --------------------
@app.get('/api/alerts')
def api_alerts(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value"),
    user_id: str = Depends(current_user),
):
    """
    Return recent budget and pantry alert events for the user.

    Client polling strategy:
        1. First call without 'since' to load current backlog.
        2. Store 'next_cursor' from response.
        3. Subsequent polls: /api/alerts?since=<next_cursor>
    """
    return get_web_events(since, user_id=user_id)
