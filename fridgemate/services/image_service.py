"""Recipe image synthesis via the OpenAI Images API."""

import base64
import logging
from typing import Optional

import openai

from fridgemate.config import settings
from fridgemate.services.ai_service import RateLimitError, ServiceUnavailableError


logger = logging.getLogger(__name__)


IMAGE_PROMPT_TEMPLATE = (
    "A professional, appetizing food photograph of {name}. {description} "
    "Plated on a clean table, natural light, shallow depth of field, no text."
)


class ImageSynthesisService:
    """
    Turns a recipe name and description into image bytes.

    Returns None when no API key is configured or the provider sends back no
    image; callers treat that as "nothing generated", not as a failure.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        size: Optional[str] = None,
    ):
        self.api_key = settings.openai_api_key if api_key is None else api_key
        self.model = model or settings.image_model
        self.size = size or settings.image_size
        self.client = (
            openai.AsyncOpenAI(api_key=self.api_key, timeout=settings.image_timeout)
            if self.api_key
            else None
        )

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    def build_prompt(self, name: str, description: Optional[str]) -> str:
        return IMAGE_PROMPT_TEMPLATE.format(
            name=name, description=(description or "").strip()
        ).replace("  ", " ")

    async def synthesize_image(
        self, name: str, description: Optional[str] = None
    ) -> Optional[bytes]:
        """
        Generate an image for a recipe.

        Raises:
            ServiceUnavailableError: Provider unreachable or failing
            RateLimitError: Too many requests
            ValueError: Request rejected by the provider
        """
        if not self.is_configured:
            logger.info("Image synthesis skipped for %r: no API key configured", name)
            return None

        try:
            response = await self.client.images.generate(
                model=self.model,
                prompt=self.build_prompt(name, description),
                size=self.size,
                n=1,
                response_format="b64_json",
            )
        except openai.APIConnectionError as e:
            raise ServiceUnavailableError("Image service temporarily unavailable") from e
        except openai.RateLimitError as e:
            raise RateLimitError(
                "Too many requests, please try again in 1 minute"
            ) from e
        except openai.APIStatusError as e:
            if e.status_code >= 500:
                raise ServiceUnavailableError("Image service error") from e
            raise ValueError(f"Request error: {e.message}") from e
        except openai.APIError as e:
            raise ServiceUnavailableError(f"Image service error: {e.message}") from e

        if not response.data or not response.data[0].b64_json:
            logger.warning("Image synthesis for %r returned no image data", name)
            return None

        return base64.b64decode(response.data[0].b64_json)
