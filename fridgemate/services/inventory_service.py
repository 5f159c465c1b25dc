"""Business logic for the fridge inventory."""

from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from fridgemate.models.ingredient import Ingredient, IngredientCategory
from fridgemate.models._columns import utcnow


# Fields a partial update may touch
UPDATABLE_FIELDS = {
    "name",
    "quantity",
    "category",
    "purchase_date",
    "expiration_date",
    "is_low_stock",
}
REQUIRED_TEXT_FIELDS = ("name", "quantity", "category")


def _require_text(field: str, value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        raise ValueError(f"Ingredient {field} must not be empty")
    return value


class InventoryService:
    """Service for ingredient inventory operations."""

    @staticmethod
    def list_ingredients(db: Session) -> List[Ingredient]:
        """Get all ingredients, newest first."""
        return db.query(Ingredient).order_by(Ingredient.created_at.desc()).all()

    @staticmethod
    def get_ingredient(db: Session, ingredient_id: str) -> Optional[Ingredient]:
        return db.query(Ingredient).filter(Ingredient.id == ingredient_id).first()

    @staticmethod
    def create_ingredient(
        db: Session,
        name: str,
        quantity: str,
        category: str,
        expiration_date: Optional[datetime] = None,
        purchase_date: Optional[datetime] = None,
        is_low_stock: bool = False,
    ) -> Ingredient:
        """
        Add an ingredient to the inventory.

        Args:
            db: Database session
            name: Ingredient name
            quantity: Free-text quantity (e.g. "500g")
            category: Category (vegetables, fruits, meat, dairy, pantry, other)
            expiration_date: Optional expiry instant (naive UTC)
            purchase_date: Purchase instant (defaults to now)
            is_low_stock: Initial low-stock flag

        Returns:
            Created Ingredient object

        Raises:
            ValueError: If name, quantity or category is empty
        """
        ingredient = Ingredient(
            name=_require_text("name", name),
            quantity=_require_text("quantity", quantity),
            category=IngredientCategory.normalize(_require_text("category", category)),
            expiration_date=expiration_date,
            purchase_date=purchase_date or utcnow(),
            is_low_stock=is_low_stock,
        )
        db.add(ingredient)
        db.commit()
        db.refresh(ingredient)
        return ingredient

    @staticmethod
    def update_ingredient(
        db: Session, ingredient_id: str, **updates
    ) -> Optional[Ingredient]:
        """
        Merge the given fields onto an ingredient.

        Returns:
            Updated Ingredient or None if not found

        Raises:
            ValueError: Unknown field, or a required text field set to empty
        """
        unknown = set(updates) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        ingredient = InventoryService.get_ingredient(db, ingredient_id)
        if not ingredient:
            return None

        for field, value in updates.items():
            if field in REQUIRED_TEXT_FIELDS:
                _require_text(field, value)
                if field == "category":
                    value = IngredientCategory.normalize(value)
            elif field in ("purchase_date", "is_low_stock") and value is None:
                raise ValueError(f"Ingredient {field} must not be null")
            setattr(ingredient, field, value)

        db.commit()
        db.refresh(ingredient)
        return ingredient

    @staticmethod
    def mark_low_stock(db: Session, ingredient_id: str) -> Optional[Ingredient]:
        return InventoryService.update_ingredient(db, ingredient_id, is_low_stock=True)

    @staticmethod
    def delete_ingredient(db: Session, ingredient_id: str) -> bool:
        """
        Delete an ingredient.

        Returns:
            True if deleted, False if it did not exist
        """
        ingredient = InventoryService.get_ingredient(db, ingredient_id)
        if ingredient:
            db.delete(ingredient)
            db.commit()
            return True
        return False

    @staticmethod
    def get_expiring_ingredients(
        db: Session, days: int, now: Optional[datetime] = None
    ) -> List[Ingredient]:
        """
        Ingredients whose expiration date is strictly before now + days.

        Ingredients without an expiration date never count as expiring.
        Already-expired items are included.
        """
        threshold = (now or utcnow()) + timedelta(days=days)
        return (
            db.query(Ingredient)
            .filter(
                Ingredient.expiration_date.isnot(None),
                Ingredient.expiration_date < threshold,
            )
            .order_by(Ingredient.expiration_date.asc())
            .all()
        )
