"""
Claude AI integration for recipe suggestions and inventory optimization advice.

This service provides the two text-model collaborators of the app:
1. Recipe suggestions from the current inventory snapshot
2. Post-cooking waste-reduction advice for the remaining inventory
"""

import json
import re
import asyncio
import random
import logging
from typing import Optional
from functools import wraps

from anthropic import Anthropic
import anthropic
import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from fridgemate.config import settings
from fridgemate.services.ai_schemas import (
    RecipeSuggestionsSchema,
    InventoryOptimizationSchema,
)
from fridgemate.services.prompts import (
    RECIPE_SUGGESTION_SYSTEM_PROMPT,
    INVENTORY_OPTIMIZATION_SYSTEM_PROMPT,
    build_suggestion_request,
    build_optimization_request,
)


logger = logging.getLogger(__name__)


def _strip_markdown_json(text: str) -> str:
    """Strip markdown code block wrappers from JSON text."""
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0].strip()
    elif "```" in text:
        text = text.split("```")[1].split("```")[0].strip()
    return text


def _fix_trailing_commas(text: str) -> str:
    """Fix trailing commas in JSON (common LLM error)."""
    text = re.sub(r",\s*}", "}", text)
    text = re.sub(r",\s*]", "]", text)
    return text


def retry_on_connection_error(max_attempts=3, base_delay=1.0):
    """
    Retry decorator for API calls that may fail due to transient network issues.

    Args:
        max_attempts: Maximum retry attempts (default 3)
        base_delay: Base delay in seconds for exponential backoff (default 1.0)
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            last_exception = None

            for attempt in range(max_attempts):
                try:
                    return await func(*args, **kwargs)
                except anthropic.APIConnectionError as e:
                    last_exception = e

                    if attempt < max_attempts - 1:
                        # Exponential backoff with jitter
                        delay = base_delay * (2**attempt)
                        jitter = (
                            delay * 0.1 * (2 * random.random() - 1)
                        )  # ±10% random variance
                        sleep_time = delay + jitter

                        logger.warning(
                            "Connection error on attempt %d/%d, retrying in %.1fs...",
                            attempt + 1,
                            max_attempts,
                            sleep_time,
                        )
                        await asyncio.sleep(sleep_time)
                    else:
                        logger.error("All %d attempts failed", max_attempts)

            # All retries exhausted, raise the last exception
            raise ServiceUnavailableError(
                "AI service temporarily unavailable after retries"
            ) from last_exception

        return wrapper

    return decorator


class ClaudeService:
    """Suggestion Engine and Optimization advisor backed by the Claude API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        suggestion_count: Optional[int] = None,
    ):
        # Bound every call
        timeout = httpx.Timeout(
            timeout=settings.anthropic_timeout,
            connect=settings.anthropic_connect_timeout,
        )
        self.api_key = settings.anthropic_api_key if api_key is None else api_key
        self.client = Anthropic(api_key=self.api_key, timeout=timeout)
        self.model = model or settings.recipe_model
        self.suggestion_count = suggestion_count or settings.suggestion_count

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    # =========================================================================
    # SCHEMA VALIDATION + CONVERSATIONAL RETRY
    # =========================================================================

    def _call_with_schema_retry(
        self,
        messages: list[dict],
        schema_class: type[BaseModel],
        request_params: dict,
        max_retries: int = 2,
        prefill: str | None = "{",
    ) -> tuple[dict, str, object]:
        """
        Call Claude API with JSON schema validation and conversational retry.

        On schema failure: appends the bad response + error feedback to messages,
        re-calls with full conversation context so the LLM can self-correct.

        Args:
            messages: The messages list (will be mutated on retry)
            schema_class: Pydantic model class to validate against
            request_params: Dict of params for client.messages.create
                            (model, max_tokens, system, etc.)
                            NOTE: do NOT include 'messages' - they're passed separately
            max_retries: Number of retry attempts after initial call (default 2, so 3 total)
            prefill: Assistant prefill string, or None for no prefill

        Returns:
            (validated_dict, raw_response_text, response_object) tuple

        Raises:
            ValueError: If all attempts fail schema validation
        """
        response = None

        for attempt in range(1 + max_retries):
            call_messages = list(messages)
            if prefill:
                call_messages.append({"role": "assistant", "content": prefill})

            response = self.client.messages.create(
                messages=call_messages,
                **request_params,
            )

            response_text = ""
            for block in response.content:
                if hasattr(block, "text"):
                    response_text += block.text

            if not response_text:
                if attempt < max_retries:
                    messages.append(
                        {"role": "assistant", "content": "(empty response)"}
                    )
                    messages.append(
                        {
                            "role": "user",
                            "content": "Your response contained no text. Please respond with valid JSON.",
                        }
                    )
                    continue
                raise ValueError("No text content in AI response after retries")

            # Reconstruct JSON (handle prefill)
            raw_text = response_text.strip()
            json_str = (prefill or "") + raw_text if prefill else raw_text

            json_str = _strip_markdown_json(json_str)
            json_str = _fix_trailing_commas(json_str)

            try:
                parsed = json.loads(json_str)
                adapter = TypeAdapter(schema_class)
                validated = adapter.validate_python(parsed)
                return validated.model_dump(), raw_text, response
            except (json.JSONDecodeError, ValidationError) as e:
                error_msg = str(e)
                logger.warning(
                    "AI response schema validation failed (attempt %d/%d) for %s: %s",
                    attempt + 1,
                    1 + max_retries,
                    schema_class.__name__,
                    error_msg,
                )

                if attempt < max_retries:
                    messages.append(
                        {
                            "role": "assistant",
                            "content": (prefill or "") + raw_text,
                        }
                    )
                    messages.append(
                        {
                            "role": "user",
                            "content": (
                                f"Your response had a schema error:\n{error_msg}\n\n"
                                f"Please fix and return valid JSON matching the required schema."
                            ),
                        }
                    )
                    continue

                raise ValueError(
                    f"AI response failed schema validation after {1 + max_retries} attempts: {error_msg}"
                )

        raise ValueError("AI response failed schema validation")

    @retry_on_connection_error(max_attempts=3, base_delay=1.0)
    async def _request_validated(
        self,
        messages: list[dict],
        schema_class: type[BaseModel],
        request_params: dict,
    ) -> dict:
        """Run the blocking SDK call off the event loop and return the validated dict."""
        validated, _raw_text, _response = await asyncio.to_thread(
            self._call_with_schema_retry,
            messages,
            schema_class,
            request_params,
        )
        return validated

    def _ensure_configured(self) -> None:
        if not self.is_configured:
            raise ServiceUnavailableError("AI service is not configured")

    # =========================================================================
    # RECIPE SUGGESTIONS
    # =========================================================================

    async def suggest_recipes(
        self, ingredients: list[dict], serving_size: int
    ) -> list[dict]:
        """
        Ask Claude for recipe candidates that use the given inventory.

        Args:
            ingredients: Inventory snapshot as [{"name": str, "quantity": str}]
            serving_size: Number of people to cook for

        Returns:
            List of candidate dicts:
            [
                {
                    "name": "Vegetable Stir Fry",
                    "description": "...",
                    "serving_size": 2,
                    "cooking_time": 20,
                    "difficulty": "Easy",
                    "instructions": ["Step 1", ...],
                    "required_ingredients": [
                        {"name": "carrot", "quantity": "2", "available": True}
                    ],
                    "match_percentage": 85
                }
            ]

        Raises:
            ServiceUnavailableError: AI service unavailable or not configured
            RateLimitError: Too many requests
            ValueError: Invalid response or request error
        """
        self._ensure_configured()

        try:
            messages = [
                {
                    "role": "user",
                    "content": build_suggestion_request(
                        ingredients, serving_size, self.suggestion_count
                    ),
                }
            ]

            validated = await self._request_validated(
                messages,
                RecipeSuggestionsSchema,
                {
                    "model": self.model,
                    "max_tokens": 4096,
                    "temperature": 0.7,
                    "system": RECIPE_SUGGESTION_SYSTEM_PROMPT,
                },
            )

            recipes = validated["recipes"]
            logger.info(
                "Received %d recipe suggestions for %d ingredients",
                len(recipes),
                len(ingredients),
            )
            return recipes

        except anthropic.RateLimitError as e:
            raise RateLimitError(
                "Too many requests, please try again in 1 minute"
            ) from e
        except anthropic.APIStatusError as e:
            if e.status_code >= 500:
                raise ServiceUnavailableError("AI service error") from e
            raise ValueError(f"Request error: {e.message}") from e
        except anthropic.APIError as e:
            raise ServiceUnavailableError(f"AI service error: {e.message}") from e

    # =========================================================================
    # INVENTORY OPTIMIZATION
    # =========================================================================

    async def optimize_inventory_usage(
        self, ingredients_used: list[dict], remaining_ingredients: list[dict]
    ) -> dict:
        """
        Ask Claude for waste-reduction advice after a recipe has been cooked.

        Args:
            ingredients_used: [{"name": str, "quantityUsed": str}]
            remaining_ingredients: [{"name": str, "quantity": str}]

        Returns:
            {"suggestions": [str], "warnings": [str]}

        Raises:
            ServiceUnavailableError: AI service unavailable or not configured
            RateLimitError: Too many requests
            ValueError: Invalid response or request error
        """
        self._ensure_configured()

        try:
            messages = [
                {
                    "role": "user",
                    "content": build_optimization_request(
                        ingredients_used, remaining_ingredients
                    ),
                }
            ]

            return await self._request_validated(
                messages,
                InventoryOptimizationSchema,
                {
                    "model": self.model,
                    "max_tokens": 1024,
                    "system": INVENTORY_OPTIMIZATION_SYSTEM_PROMPT,
                },
            )

        except anthropic.RateLimitError as e:
            raise RateLimitError(
                "Too many requests, please try again in 1 minute"
            ) from e
        except anthropic.APIStatusError as e:
            if e.status_code >= 500:
                raise ServiceUnavailableError("AI service error") from e
            raise ValueError(f"Request error: {e.message}") from e
        except anthropic.APIError as e:
            raise ServiceUnavailableError(f"AI service error: {e.message}") from e


# =============================================================================
# CUSTOM EXCEPTIONS
# =============================================================================


class ServiceUnavailableError(Exception):
    """AI service is temporarily unavailable."""

    pass


class RateLimitError(Exception):
    """Rate limit exceeded."""

    pass
