"""Cooking history log (append-only)."""

from typing import List, Optional

from sqlalchemy.orm import Session

from fridgemate.models.cooking_history import CookingHistory


class CookingHistoryService:
    """Service for recording and listing cooked recipes."""

    @staticmethod
    def record_cooking(
        db: Session, recipe_id: str, ingredients_used: List[dict]
    ) -> CookingHistory:
        """
        Append a history entry.

        Args:
            db: Database session
            recipe_id: Cooked recipe
            ingredients_used: [{"name": str, "quantityUsed": str}]
        """
        entry = CookingHistory(
            recipe_id=recipe_id,
            ingredients_used=[dict(item) for item in ingredients_used],
        )
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry

    @staticmethod
    def list_history(
        db: Session, recipe_id: Optional[str] = None
    ) -> List[CookingHistory]:
        """All history entries, newest first, optionally for one recipe."""
        query = db.query(CookingHistory)
        if recipe_id is not None:
            query = query.filter(CookingHistory.recipe_id == recipe_id)
        return query.order_by(CookingHistory.cooked_at.desc()).all()
