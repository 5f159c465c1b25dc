"""Request and response models for the JSON API (camelCase on the wire)."""

from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
)
from pydantic.alias_generators import to_camel


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# Stored exactly as sent; whitespace-only is rejected
NonEmptyStr = Annotated[str, AfterValidator(_not_blank)]


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_to_naive_utc)]


def _utc_isoformat(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


# Stored timestamps are naive UTC; send them as explicit UTC instants
UtcInstant = Annotated[
    datetime, PlainSerializer(_utc_isoformat, return_type=str, when_used="json")
]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# --- Ingredients ---


class IngredientCreate(CamelModel):
    name: NonEmptyStr
    quantity: NonEmptyStr
    category: NonEmptyStr
    expiration_date: Optional[UtcDatetime] = None
    purchase_date: Optional[UtcDatetime] = None
    is_low_stock: bool = False


class IngredientUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[NonEmptyStr] = None
    quantity: Optional[NonEmptyStr] = None
    category: Optional[NonEmptyStr] = None
    expiration_date: Optional[UtcDatetime] = None
    purchase_date: Optional[UtcDatetime] = None
    is_low_stock: Optional[bool] = None


class IngredientResponse(CamelModel):
    id: str
    name: str
    quantity: str
    category: str
    purchase_date: UtcInstant
    expiration_date: Optional[UtcInstant] = None
    is_low_stock: bool
    created_at: UtcInstant


# --- Recipes ---


class RecipeIngredientResponse(CamelModel):
    id: str
    recipe_id: str
    ingredient_name: str
    required_quantity: str
    available: bool


class RecipeResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    serving_size: int
    cooking_time: Optional[int] = None
    difficulty: str
    instructions: List[str]
    image_url: Optional[str] = None
    match_percentage: Optional[int] = None
    created_at: UtcInstant
    ingredients: List[RecipeIngredientResponse] = []

    @classmethod
    def build(cls, recipe, ingredients) -> "RecipeResponse":
        return cls(
            id=recipe.id,
            name=recipe.name,
            description=recipe.description,
            serving_size=recipe.serving_size,
            cooking_time=recipe.cooking_time,
            difficulty=recipe.difficulty,
            instructions=list(recipe.instructions or []),
            image_url=recipe.image_url,
            match_percentage=recipe.match_percentage,
            created_at=recipe.created_at,
            ingredients=[
                RecipeIngredientResponse.model_validate(item) for item in ingredients
            ],
        )


class SuggestRequest(CamelModel):
    serving_size: Optional[int] = Field(default=None, ge=1)


class IngredientUsage(CamelModel):
    name: str
    quantity_used: str


class OptimizationResponse(CamelModel):
    suggestions: List[str] = []
    warnings: List[str] = []


class CookResponse(CamelModel):
    success: Literal[True] = True
    message: str
    history_id: str
    ingredients_used: List[IngredientUsage]
    optimization: Optional[OptimizationResponse] = None
    optimization_unavailable: bool = False


class ImageResponse(CamelModel):
    success: bool
    image_url: Optional[str] = None
    message: str


class CookingHistoryResponse(CamelModel):
    id: str
    recipe_id: str
    cooked_at: UtcInstant
    ingredients_used: List[IngredientUsage]


# --- Stats ---


class StatsResponse(CamelModel):
    total_items: int
    expiring_items: int
    suggested_recipes: int
