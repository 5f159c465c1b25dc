"""API endpoints for recipe suggestions, details, cooking and images."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from fridgemate.api.deps import (
    external_service_error,
    get_file_service,
    get_image_service,
    get_recipe_ai,
)
from fridgemate.api.schemas import (
    CookingHistoryResponse,
    CookResponse,
    ImageResponse,
    RecipeResponse,
    SuggestRequest,
)
from fridgemate.database import get_db
from fridgemate.services.ai_service import (
    ClaudeService,
    RateLimitError,
    ServiceUnavailableError,
)
from fridgemate.services.file_service import FileService
from fridgemate.services.history_service import CookingHistoryService
from fridgemate.services.image_service import ImageSynthesisService
from fridgemate.services.recipe_service import RecipeService
from fridgemate.services.recipe_workflows import (
    CookingWorkflow,
    RecipeImageWorkflow,
    RecipeNotFoundError,
    SuggestionWorkflow,
    load_recipe_detail,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["recipes"])

EXTERNAL_ERRORS = (ServiceUnavailableError, RateLimitError, ValueError)


@router.post("/suggest", response_model=List[RecipeResponse])
async def suggest_recipes(
    payload: Optional[SuggestRequest] = Body(default=None),
    db: Session = Depends(get_db),
    recipe_ai: ClaudeService = Depends(get_recipe_ai),
):
    """
    Generate recipe suggestions from the current inventory and store them.

    Returns [] without contacting the engine when the inventory is empty.
    """
    serving_size = payload.serving_size if payload else None

    try:
        saved = await SuggestionWorkflow(db, recipe_ai).suggest(serving_size)
    except EXTERNAL_ERRORS as e:
        logger.warning("Recipe suggestion failed: %s", e)
        raise external_service_error(e)

    return [RecipeResponse.build(item.recipe, item.ingredients) for item in saved]


@router.get("", response_model=List[RecipeResponse])
async def list_recipes(db: Session = Depends(get_db)):
    """All recipes, newest first, with stored ingredient availability."""
    return [
        RecipeResponse.build(recipe, RecipeService.list_recipe_ingredients(db, recipe.id))
        for recipe in RecipeService.list_recipes(db)
    ]


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(recipe_id: str, db: Session = Depends(get_db)):
    """Recipe detail with availability recomputed against the current inventory."""
    try:
        detail = load_recipe_detail(db, recipe_id)
    except RecipeNotFoundError:
        raise HTTPException(status_code=404, detail="Recipe not found")

    return RecipeResponse.build(detail.recipe, detail.ingredients)


@router.get("/{recipe_id}/history", response_model=List[CookingHistoryResponse])
async def get_recipe_history(recipe_id: str, db: Session = Depends(get_db)):
    if not RecipeService.get_recipe(db, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return CookingHistoryService.list_history(db, recipe_id=recipe_id)


@router.post("/{recipe_id}/generate-image", response_model=ImageResponse)
async def generate_recipe_image(
    recipe_id: str,
    db: Session = Depends(get_db),
    image_service: ImageSynthesisService = Depends(get_image_service),
    file_service: FileService = Depends(get_file_service),
):
    """
    Generate (or regenerate) the recipe's image.

    When the image provider returns nothing the recipe is left unchanged and
    the response carries no imageUrl.
    """
    workflow = RecipeImageWorkflow(db, image_service, file_service)
    try:
        image_url = await workflow.generate(recipe_id)
    except RecipeNotFoundError:
        raise HTTPException(status_code=404, detail="Recipe not found")
    except EXTERNAL_ERRORS as e:
        logger.warning("Image generation failed for recipe %s: %s", recipe_id, e)
        raise external_service_error(e)

    if not image_url:
        return ImageResponse(
            success=True,
            image_url=None,
            message="No image was generated; image generation may not be configured.",
        )

    return ImageResponse(
        success=True, image_url=image_url, message="Image generated successfully!"
    )


@router.post("/{recipe_id}/cook", response_model=CookResponse)
async def cook_recipe(
    recipe_id: str,
    db: Session = Depends(get_db),
    recipe_ai: ClaudeService = Depends(get_recipe_ai),
):
    """Mark the recipe's available ingredients as low-stock and log the cook."""
    try:
        result = await CookingWorkflow(db, recipe_ai).cook(recipe_id)
    except RecipeNotFoundError:
        raise HTTPException(status_code=404, detail="Recipe not found")

    return CookResponse(
        message="Recipe cooked successfully!",
        history_id=result.history.id,
        ingredients_used=result.ingredients_used,
        optimization=result.optimization,
        optimization_unavailable=result.optimization_unavailable,
    )
