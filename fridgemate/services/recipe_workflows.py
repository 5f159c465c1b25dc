"""
Recipe workflows that span the inventory, recipe and history stores.

- SuggestionWorkflow: inventory snapshot -> engine candidates -> stored recipes
- load_recipe_detail: recipe + requirements with availability recomputed live
- CookingWorkflow: mark used ingredients low-stock, log history, ask for advice
- RecipeImageWorkflow: synthesize, store and attach a recipe image

None of these wrap their writes in a transaction. A failure part-way through
leaves earlier rows in place (e.g. a suggested recipe without all of its
requirement rows, or low-stock flags without a history entry).
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

from sqlalchemy.orm import Session

from fridgemate.config import settings
from fridgemate.models.cooking_history import CookingHistory
from fridgemate.models.ingredient import Ingredient
from fridgemate.models.recipe import Recipe
from fridgemate.models.recipe_ingredient import RecipeIngredient
from fridgemate.services.ai_service import RateLimitError, ServiceUnavailableError
from fridgemate.services.availability import find_inventory_match, names_match
from fridgemate.services.file_service import FileService
from fridgemate.services.history_service import CookingHistoryService
from fridgemate.services.inventory_service import InventoryService
from fridgemate.services.recipe_service import RecipeService


logger = logging.getLogger(__name__)


class RecipeNotFoundError(LookupError):
    """Referenced recipe id does not exist."""

    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe not found: {recipe_id}")
        self.recipe_id = recipe_id


class RecipeAI(Protocol):
    async def suggest_recipes(
        self, ingredients: list[dict], serving_size: int
    ) -> list[dict]: ...

    async def optimize_inventory_usage(
        self, ingredients_used: list[dict], remaining_ingredients: list[dict]
    ) -> dict: ...


class ImageSynthesizer(Protocol):
    async def synthesize_image(
        self, name: str, description: Optional[str] = None
    ) -> Optional[bytes]: ...


@dataclass
class RequirementStatus:
    """A recipe requirement row together with its (possibly recomputed) availability."""

    id: str
    recipe_id: str
    ingredient_name: str
    required_quantity: str
    available: bool

    @classmethod
    def from_row(
        cls, row: RecipeIngredient, available: Optional[bool] = None
    ) -> "RequirementStatus":
        return cls(
            id=row.id,
            recipe_id=row.recipe_id,
            ingredient_name=row.ingredient_name,
            required_quantity=row.required_quantity,
            available=row.available if available is None else available,
        )


@dataclass
class RecipeDetail:
    recipe: Recipe
    ingredients: List[RequirementStatus]

    @property
    def instructions(self) -> List[str]:
        return list(self.recipe.instructions or [])


@dataclass
class CookResult:
    history: CookingHistory
    ingredients_used: List[dict]
    optimization: Optional[dict] = None
    optimization_unavailable: bool = False


def inventory_snapshot(ingredients: List[Ingredient]) -> List[dict]:
    """Project inventory rows to the {name, quantity} pairs the engine sees."""
    return [{"name": item.name, "quantity": item.quantity} for item in ingredients]


def load_recipe_detail(db: Session, recipe_id: str) -> RecipeDetail:
    """
    Load a recipe with live ingredient availability.

    The stored `available` flags are discarded: each requirement is available
    iff an inventory item currently has the same name (ignoring case).

    Raises:
        RecipeNotFoundError: If the recipe does not exist
    """
    recipe = RecipeService.get_recipe_with_ingredients(db, recipe_id)
    if not recipe:
        raise RecipeNotFoundError(recipe_id)

    inventory = InventoryService.list_ingredients(db)
    ingredients = [
        RequirementStatus.from_row(
            row, available=find_inventory_match(row.ingredient_name, inventory) is not None
        )
        for row in recipe.ingredients
    ]
    return RecipeDetail(recipe=recipe, ingredients=ingredients)


class SuggestionWorkflow:
    """Request recipe candidates for the current inventory and store them."""

    def __init__(self, db: Session, recipe_ai: RecipeAI):
        self.db = db
        self.recipe_ai = recipe_ai

    async def suggest(self, serving_size: Optional[int] = None) -> List[RecipeDetail]:
        """
        Generate and persist recipe suggestions.

        Returns an empty list without calling the engine when the inventory is
        empty. Every candidate is stored as a Recipe plus one RecipeIngredient
        per required ingredient, keeping the engine's availability flag as the
        creation-time snapshot.

        Raises:
            ValueError: Non-positive serving size, or invalid engine output
            ServiceUnavailableError, RateLimitError: Engine failures
        """
        if serving_size is None:
            serving_size = settings.default_serving_size
        if serving_size < 1:
            raise ValueError("Serving size must be a positive integer")

        inventory = InventoryService.list_ingredients(self.db)
        if not inventory:
            logger.info("Inventory is empty, skipping recipe suggestions")
            return []

        candidates = await self.recipe_ai.suggest_recipes(
            inventory_snapshot(inventory), serving_size
        )

        saved: List[RecipeDetail] = []
        for candidate in candidates:
            if candidate["serving_size"] != serving_size:
                logger.warning(
                    "Engine returned serving size %s for %r, storing requested %s",
                    candidate["serving_size"],
                    candidate["name"],
                    serving_size,
                )

            recipe = RecipeService.create_recipe(
                self.db,
                name=candidate["name"],
                description=candidate.get("description"),
                serving_size=serving_size,
                cooking_time=candidate.get("cooking_time"),
                difficulty=candidate["difficulty"],
                instructions=candidate["instructions"],
                match_percentage=candidate["match_percentage"],
            )

            requirements = [
                RequirementStatus.from_row(
                    RecipeService.add_ingredient_requirement(
                        self.db,
                        recipe_id=recipe.id,
                        ingredient_name=required["name"],
                        required_quantity=required.get("quantity", ""),
                        available=required.get("available", False),
                    )
                )
                for required in candidate["required_ingredients"]
            ]
            saved.append(RecipeDetail(recipe=recipe, ingredients=requirements))

        logger.info(
            "Stored %d suggested recipes for serving size %d", len(saved), serving_size
        )
        return saved


class CookingWorkflow:
    """Reconcile a cooked recipe against the live inventory."""

    def __init__(self, db: Session, recipe_ai: RecipeAI):
        self.db = db
        self.recipe_ai = recipe_ai

    async def cook(self, recipe_id: str) -> CookResult:
        """
        Cook a recipe.

        Every requirement that matches an inventory item by name is recorded as
        used and the matching item is flagged low-stock. Items are never deleted
        and quantities are never decremented. One history entry is appended.
        Advice for the remaining items is best-effort: an engine failure leaves
        `optimization` empty and sets `optimization_unavailable`.

        Raises:
            RecipeNotFoundError: If the recipe does not exist
        """
        recipe = RecipeService.get_recipe_with_ingredients(self.db, recipe_id)
        if not recipe:
            raise RecipeNotFoundError(recipe_id)

        inventory = InventoryService.list_ingredients(self.db)

        ingredients_used: List[dict] = []
        for requirement in recipe.ingredients:
            match = find_inventory_match(requirement.ingredient_name, inventory)
            if match is None:
                continue

            ingredients_used.append(
                {
                    "name": requirement.ingredient_name,
                    "quantityUsed": requirement.required_quantity,
                }
            )
            InventoryService.mark_low_stock(self.db, match.id)

        history = CookingHistoryService.record_cooking(
            self.db, recipe.id, ingredients_used
        )
        logger.info(
            "Cooked recipe %s (%r): %d ingredients used",
            recipe.id,
            recipe.name,
            len(ingredients_used),
        )

        remaining = [
            {"name": item.name, "quantity": item.quantity}
            for item in inventory
            if not any(names_match(item.name, used["name"]) for used in ingredients_used)
        ]

        optimization = None
        optimization_unavailable = False
        try:
            optimization = await self.recipe_ai.optimize_inventory_usage(
                ingredients_used, remaining
            )
        except (ServiceUnavailableError, RateLimitError, ValueError) as e:
            logger.warning(
                "Inventory optimization unavailable for recipe %s: %s", recipe.id, e
            )
            optimization_unavailable = True

        return CookResult(
            history=history,
            ingredients_used=ingredients_used,
            optimization=optimization,
            optimization_unavailable=optimization_unavailable,
        )


class RecipeImageWorkflow:
    """Generate an image for a stored recipe and attach its reference."""

    def __init__(
        self, db: Session, image_service: ImageSynthesizer, file_service: FileService
    ):
        self.db = db
        self.image_service = image_service
        self.file_service = file_service

    async def generate(self, recipe_id: str) -> Optional[str]:
        """
        Returns:
            The new image URL, or None when the synthesizer produced nothing
            (the recipe is left unchanged in that case)

        Raises:
            RecipeNotFoundError: If the recipe does not exist
            ServiceUnavailableError, RateLimitError, ValueError: Provider failures
        """
        recipe = RecipeService.get_recipe(self.db, recipe_id)
        if not recipe:
            raise RecipeNotFoundError(recipe_id)

        image_bytes = await self.image_service.synthesize_image(
            recipe.name, recipe.description or ""
        )
        if not image_bytes:
            return None

        previous_url = recipe.image_url
        file_path = self.file_service.save_recipe_image(image_bytes)
        image_url = self.file_service.get_file_url(file_path)
        RecipeService.update_recipe(self.db, recipe.id, image_url=image_url)

        # The replaced image is no longer referenced
        if previous_url and previous_url != image_url:
            self.file_service.delete_file_for_url(previous_url)

        logger.info("Stored image for recipe %s at %s", recipe.id, image_url)
        return image_url
