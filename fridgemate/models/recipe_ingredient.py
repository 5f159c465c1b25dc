from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from fridgemate.database import Base
from fridgemate.models._columns import new_id


class RecipeIngredient(Base):
    """
    One ingredient requirement of a recipe.

    `ingredient_name` is matched case-insensitively against the inventory at
    read time; it is not a foreign key. `available` is the snapshot taken when
    the row was written and is recomputed whenever a recipe detail is served.
    """
    __tablename__ = "recipe_ingredients"

    id = Column(String(36), primary_key=True, default=new_id)
    recipe_id = Column(String(36), ForeignKey("recipes.id"), nullable=False)
    ingredient_name = Column(Text, nullable=False)
    required_quantity = Column(Text, nullable=False)
    available = Column(Boolean, nullable=False, default=False)
    position = Column(Integer, nullable=False, default=0)  # Order as returned by the engine

    # Relationships
    recipe = relationship("Recipe", back_populates="ingredients")

    __table_args__ = (
        Index("idx_recipe_ingredients_recipe_id", "recipe_id"),
    )
