"""Test fixtures for fridgemate."""

from tests.fixtures.mocks import (
    FakeImageService,
    FakeRecipeAI,
    make_candidate,
    make_png_bytes,
)

__all__ = [
    "FakeImageService",
    "FakeRecipeAI",
    "make_candidate",
    "make_png_bytes",
]
