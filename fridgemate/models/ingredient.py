import enum

from sqlalchemy import Boolean, Column, DateTime, Index, String, Text

from fridgemate.database import Base
from fridgemate.models._columns import new_id, utcnow


class IngredientCategory(str, enum.Enum):
    """Known inventory categories. Other non-empty values are accepted as-is."""
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    MEAT = "meat"
    DAIRY = "dairy"
    PANTRY = "pantry"
    OTHER = "other"

    @classmethod
    def normalize(cls, value: str) -> str:
        """Map a known category to its canonical spelling (" Dairy" -> "dairy")."""
        try:
            return cls(value.strip().lower()).value
        except ValueError:
            return value


class Ingredient(Base):
    """One kind of food item currently in the fridge."""
    __tablename__ = "ingredients"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(Text, nullable=False)
    quantity = Column(Text, nullable=False)  # Free text, never parsed (e.g. "500g", "a bunch")
    category = Column(String(50), nullable=False)
    purchase_date = Column(DateTime, nullable=False, default=utcnow)
    expiration_date = Column(DateTime, nullable=True)
    is_low_stock = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        Index("idx_ingredients_created_at", "created_at"),
        Index("idx_ingredients_expiration_date", "expiration_date"),
    )

    def __repr__(self):
        return f"<Ingredient(id={self.id}, name={self.name!r}, quantity={self.quantity!r})>"
