"""Dashboard stats and cooking history endpoints."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fridgemate.api.schemas import CookingHistoryResponse, StatsResponse
from fridgemate.config import settings
from fridgemate.database import get_db
from fridgemate.services.history_service import CookingHistoryService
from fridgemate.services.inventory_service import InventoryService
from fridgemate.services.recipe_service import RecipeService

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats", response_model=StatsResponse)
async def get_stats(db: Session = Depends(get_db)):
    """Inventory size, items expiring soon and number of stored recipes."""
    return StatsResponse(
        total_items=len(InventoryService.list_ingredients(db)),
        expiring_items=len(
            InventoryService.get_expiring_ingredients(db, settings.stats_expiring_days)
        ),
        suggested_recipes=RecipeService.count_recipes(db),
    )


@router.get("/cooking-history", response_model=List[CookingHistoryResponse])
async def list_cooking_history(db: Session = Depends(get_db)):
    """Every cooked recipe, newest first."""
    return CookingHistoryService.list_history(db)
