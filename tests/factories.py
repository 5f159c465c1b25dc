"""
Factory functions for creating test data.

These factories create model instances with sensible defaults.
Use db.flush() to get IDs without committing (for transaction rollback).
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional
import secrets

from sqlalchemy.orm import Session

from fridgemate.models import CookingHistory, Ingredient, Recipe, RecipeIngredient
from fridgemate.models._columns import utcnow


# =============================================================================
# Ingredient Factory
# =============================================================================


def create_ingredient(
    db: Session,
    name: Optional[str] = None,
    quantity: str = "1 unit",
    category: str = "other",
    expires_in: Optional[timedelta] = None,
    **overrides,
) -> Ingredient:
    """
    Create an inventory ingredient.

    Args:
        db: Database session
        name: Ingredient name (auto-generated if not provided)
        quantity: Free-text quantity
        category: Category name
        expires_in: Expiration relative to now (no expiration if None)
        **overrides: Additional fields to override

    Returns:
        Created Ingredient object
    """
    if name is None:
        name = f"Ingredient_{secrets.token_hex(4)}"

    defaults = {
        "name": name,
        "quantity": quantity,
        "category": category,
        "expiration_date": utcnow() + expires_in if expires_in is not None else None,
    }
    defaults.update(overrides)

    ingredient = Ingredient(**defaults)
    db.add(ingredient)
    db.flush()
    return ingredient


# =============================================================================
# Recipe Factories
# =============================================================================


def create_recipe(
    db: Session,
    name: Optional[str] = None,
    ingredients: Optional[List[Dict]] = None,
    instructions: Optional[List[str]] = None,
    **overrides,
) -> Recipe:
    """
    Create a recipe with requirement rows.

    Args:
        db: Database session
        name: Recipe name (auto-generated if not provided)
        ingredients: [{"name", "quantity", "available"}] requirement rows
        instructions: Ordered step strings
        **overrides: Additional Recipe fields to override

    Returns:
        Created Recipe object (requirements reachable via recipe.ingredients)
    """
    if name is None:
        name = f"Recipe_{secrets.token_hex(4)}"

    defaults = {
        "name": name,
        "description": "Test recipe",
        "serving_size": 2,
        "cooking_time": 30,
        "difficulty": "Easy",
        "instructions": instructions or ["Prep", "Cook", "Serve"],
        "match_percentage": 80,
    }
    defaults.update(overrides)

    recipe = Recipe(**defaults)
    db.add(recipe)
    db.flush()

    for position, item in enumerate(ingredients or []):
        create_recipe_ingredient(
            db,
            recipe,
            ingredient_name=item["name"],
            required_quantity=item.get("quantity", "1"),
            available=item.get("available", False),
            position=position,
        )

    db.refresh(recipe)
    return recipe


def create_recipe_ingredient(
    db: Session,
    recipe: Recipe,
    ingredient_name: str = "Onion",
    required_quantity: str = "1",
    available: bool = False,
    **overrides,
) -> RecipeIngredient:
    defaults = {
        "recipe_id": recipe.id,
        "ingredient_name": ingredient_name,
        "required_quantity": required_quantity,
        "available": available,
    }
    defaults.update(overrides)

    row = RecipeIngredient(**defaults)
    db.add(row)
    db.flush()
    return row


def create_cooking_history(
    db: Session,
    recipe: Recipe,
    ingredients_used: Optional[List[Dict]] = None,
    cooked_at: Optional[datetime] = None,
) -> CookingHistory:
    entry = CookingHistory(
        recipe_id=recipe.id,
        ingredients_used=ingredients_used or [],
        cooked_at=cooked_at or utcnow(),
    )
    db.add(entry)
    db.flush()
    return entry
