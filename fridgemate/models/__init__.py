"""
Database models for fridgemate.

Import all models here so Alembic can detect them for migrations.
"""

from fridgemate.database import Base
from fridgemate.models.ingredient import Ingredient, IngredientCategory
from fridgemate.models.recipe import Recipe, Difficulty
from fridgemate.models.recipe_ingredient import RecipeIngredient
from fridgemate.models.cooking_history import CookingHistory

__all__ = [
    "Base",
    "Ingredient",
    "IngredientCategory",
    "Recipe",
    "Difficulty",
    "RecipeIngredient",
    "CookingHistory",
]
