from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from fridgemate.database import Base
from fridgemate.models._columns import new_id, utcnow


class CookingHistory(Base):
    """Append-only log of cooked recipes and the ingredients they used."""

    __tablename__ = "cooking_history"

    id = Column(String(36), primary_key=True, default=new_id)
    recipe_id = Column(String(36), ForeignKey("recipes.id"), nullable=False)
    cooked_at = Column(DateTime, nullable=False, default=utcnow)
    ingredients_used = Column(JSON, nullable=False, default=list)
    # Format: [{"name": str, "quantityUsed": str}]

    # Relationships
    recipe = relationship("Recipe", back_populates="cooking_history")

    __table_args__ = (
        Index("idx_cooking_history_recipe_id", "recipe_id"),
        Index("idx_cooking_history_cooked_at", "cooked_at"),
    )
