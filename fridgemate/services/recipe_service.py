"""Business logic for stored recipes and their ingredient requirements."""

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from fridgemate.models.recipe import Recipe, Difficulty
from fridgemate.models.recipe_ingredient import RecipeIngredient


DIFFICULTIES = {d.value for d in Difficulty}


class RecipeService:
    """Service for recipe storage operations."""

    @staticmethod
    def list_recipes(db: Session) -> List[Recipe]:
        """Get all recipes, newest first."""
        return (
            db.query(Recipe)
            .order_by(Recipe.created_at.desc())
            .all()
        )

    @staticmethod
    def count_recipes(db: Session) -> int:
        return db.query(func.count(Recipe.id)).scalar() or 0

    @staticmethod
    def get_recipe(db: Session, recipe_id: str) -> Optional[Recipe]:
        return db.query(Recipe).filter(Recipe.id == recipe_id).first()

    @staticmethod
    def get_recipe_with_ingredients(db: Session, recipe_id: str) -> Optional[Recipe]:
        """
        Get a recipe with its stored requirement rows loaded.

        The rows carry the availability flag as stored; recomputing it against
        the inventory is up to the caller.
        """
        return (
            db.query(Recipe)
            .options(selectinload(Recipe.ingredients))
            .filter(Recipe.id == recipe_id)
            .first()
        )

    @staticmethod
    def create_recipe(
        db: Session,
        name: str,
        serving_size: int,
        difficulty: str,
        instructions: List[str],
        description: Optional[str] = None,
        cooking_time: Optional[int] = None,
        match_percentage: Optional[int] = None,
        image_url: Optional[str] = None,
    ) -> Recipe:
        """
        Create a recipe row. Ingredient requirements are attached separately
        with add_ingredient_requirement().

        Raises:
            ValueError: On an empty name, non-positive serving size, unknown
                difficulty or a match percentage outside 0-100
        """
        if not name or not name.strip():
            raise ValueError("Recipe name must not be empty")
        if serving_size is None or serving_size < 1:
            raise ValueError("Serving size must be a positive integer")
        if difficulty not in DIFFICULTIES:
            raise ValueError(
                f"Invalid difficulty: {difficulty}. Allowed: {sorted(DIFFICULTIES)}"
            )
        if match_percentage is not None and not 0 <= match_percentage <= 100:
            raise ValueError("Match percentage must be between 0 and 100")
        if cooking_time is not None and cooking_time < 0:
            raise ValueError("Cooking time must not be negative")

        recipe = Recipe(
            name=name,
            description=description,
            serving_size=serving_size,
            cooking_time=cooking_time,
            difficulty=difficulty,
            instructions=list(instructions or []),
            match_percentage=match_percentage,
            image_url=image_url,
        )
        db.add(recipe)
        db.commit()
        db.refresh(recipe)
        return recipe

    @staticmethod
    def update_recipe(
        db: Session, recipe_id: str, image_url: Optional[str] = None
    ) -> Optional[Recipe]:
        """
        Update a recipe after creation. Only the image reference is mutable.

        Returns:
            Updated Recipe or None if not found
        """
        recipe = RecipeService.get_recipe(db, recipe_id)
        if not recipe:
            return None

        if image_url is not None:
            recipe.image_url = image_url

        db.commit()
        db.refresh(recipe)
        return recipe

    @staticmethod
    def list_recipe_ingredients(db: Session, recipe_id: str) -> List[RecipeIngredient]:
        return (
            db.query(RecipeIngredient)
            .filter(RecipeIngredient.recipe_id == recipe_id)
            .order_by(RecipeIngredient.position.asc())
            .all()
        )

    @staticmethod
    def add_ingredient_requirement(
        db: Session,
        recipe_id: str,
        ingredient_name: str,
        required_quantity: str,
        available: bool = False,
    ) -> RecipeIngredient:
        """
        Append one ingredient requirement to a recipe.

        Args:
            db: Database session
            recipe_id: Owning recipe
            ingredient_name: Free-text name, matched against inventory by name
            required_quantity: Free-text quantity
            available: Availability snapshot at creation time

        Returns:
            Created RecipeIngredient object
        """
        if not ingredient_name or not ingredient_name.strip():
            raise ValueError("Ingredient name must not be empty")

        position = (
            db.query(func.count(RecipeIngredient.id))
            .filter(RecipeIngredient.recipe_id == recipe_id)
            .scalar()
            or 0
        )
        requirement = RecipeIngredient(
            recipe_id=recipe_id,
            ingredient_name=ingredient_name,
            required_quantity=required_quantity or "",
            available=bool(available),
            position=position,
        )
        db.add(requirement)
        db.commit()
        db.refresh(requirement)
        return requirement
