"""API endpoints for the fridge inventory."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fridgemate.api.schemas import IngredientCreate, IngredientResponse, IngredientUpdate
from fridgemate.config import settings
from fridgemate.database import get_db
from fridgemate.services.inventory_service import InventoryService

router = APIRouter(prefix="/api/ingredients", tags=["ingredients"])


@router.get("", response_model=List[IngredientResponse])
async def list_ingredients(db: Session = Depends(get_db)):
    """All ingredients, newest first."""
    return InventoryService.list_ingredients(db)


@router.post("", response_model=IngredientResponse)
async def create_ingredient(payload: IngredientCreate, db: Session = Depends(get_db)):
    try:
        return InventoryService.create_ingredient(db, **payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/expiring", response_model=List[IngredientResponse])
async def list_expiring_ingredients(
    days: Optional[int] = Query(default=None, ge=0),
    db: Session = Depends(get_db),
):
    """Ingredients expiring within `days` (default 7). Undated items are never included."""
    if days is None:
        days = settings.default_expiring_days
    return InventoryService.get_expiring_ingredients(db, days)


@router.get("/{ingredient_id}", response_model=IngredientResponse)
async def get_ingredient(ingredient_id: str, db: Session = Depends(get_db)):
    ingredient = InventoryService.get_ingredient(db, ingredient_id)
    if not ingredient:
        raise HTTPException(status_code=404, detail="Ingredient not found")
    return ingredient


@router.patch("/{ingredient_id}", response_model=IngredientResponse)
async def update_ingredient(
    ingredient_id: str, payload: IngredientUpdate, db: Session = Depends(get_db)
):
    """Merge the provided fields onto the ingredient."""
    try:
        ingredient = InventoryService.update_ingredient(
            db, ingredient_id, **payload.model_dump(exclude_unset=True)
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not ingredient:
        raise HTTPException(status_code=404, detail="Ingredient not found")
    return ingredient


@router.delete("/{ingredient_id}")
async def delete_ingredient(ingredient_id: str, db: Session = Depends(get_db)):
    """Delete an ingredient. Deleting an unknown id is a no-op."""
    InventoryService.delete_ingredient(db, ingredient_id)
    return {"success": True}
