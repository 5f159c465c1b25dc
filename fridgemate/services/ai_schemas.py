"""
Pydantic models for validating structured JSON responses from Claude AI.

Each schema corresponds to one AI method's expected response format.
Used by _call_with_schema_retry() in ai_service.py for validation + retry.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Recipe Suggestions (suggest_recipes) ---


class RequiredIngredientSchema(BaseModel):
    name: str = Field(min_length=1)
    quantity: str = ""
    available: bool = False


class RecipeCandidateSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    description: str = ""
    serving_size: int = Field(alias="servingSize", ge=1)
    cooking_time: Optional[int] = Field(default=None, alias="cookingTime", ge=0)
    difficulty: Literal["Easy", "Medium", "Hard"]
    instructions: list[str] = Field(min_length=1)
    required_ingredients: list[RequiredIngredientSchema] = Field(
        alias="requiredIngredients"
    )
    match_percentage: int = Field(alias="matchPercentage", ge=0, le=100)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _title_case_difficulty(cls, value):
        # The model occasionally answers "easy" / "MEDIUM"
        if isinstance(value, str):
            return value.strip().capitalize()
        return value


class RecipeSuggestionsSchema(BaseModel):
    recipes: list[RecipeCandidateSchema]


# --- Inventory Optimization (optimize_inventory_usage) ---


class InventoryOptimizationSchema(BaseModel):
    suggestions: list[str] = []
    warnings: list[str] = []
