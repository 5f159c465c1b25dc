import enum

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from fridgemate.database import Base
from fridgemate.models._columns import new_id, utcnow


class Difficulty(str, enum.Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Recipe(Base):
    """A suggested or saved dish with ordered instruction steps."""

    __tablename__ = "recipes"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(Text, nullable=False)
    description = Column(Text)
    serving_size = Column(Integer, nullable=False)
    cooking_time = Column(Integer)  # Minutes
    difficulty = Column(String(10), nullable=False)
    instructions = Column(JSON, nullable=False, default=list)  # Ordered list of step strings
    image_url = Column(String(512))  # Reference path to the generated image
    match_percentage = Column(Integer)  # 0-100, only set for suggested recipes
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        order_by="RecipeIngredient.position",
    )
    cooking_history = relationship("CookingHistory", back_populates="recipe")

    __table_args__ = (Index("idx_recipes_created_at", "created_at"),)

    def __repr__(self):
        return f"<Recipe(id={self.id}, name={self.name!r})>"
