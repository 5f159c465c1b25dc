"""Matching recipe requirements against the live inventory."""

from typing import Iterable, Optional, Protocol


class _Named(Protocol):
    name: str


def names_match(first: str, second: str) -> bool:
    """Case-insensitive exact name equality."""
    return first.lower() == second.lower()


def find_inventory_match(
    requirement_name: str, inventory: Iterable[_Named]
) -> Optional[_Named]:
    """Return the first inventory item whose name matches, or None."""
    for item in inventory:
        if names_match(item.name, requirement_name):
            return item
    return None


def is_available(requirement_name: str, inventory: Iterable[_Named]) -> bool:
    """True if any inventory item has the requirement's name (ignoring case)."""
    return find_inventory_match(requirement_name, inventory) is not None
