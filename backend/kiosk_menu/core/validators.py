"""Reusable parameter validators."""

from typing import Annotated

from fastapi import Path

# Positive integer ID validator for path parameters
PositiveIntId = Annotated[int, Path(gt=0, description="Resource ID (must be positive)")]


def clean_category_name(value: str, max_length: int) -> str:
    """Strip a kiosk category name and reject names that are not finalized.

    Empty names are only valid while a category is being typed in the
    editor; anything persisted must carry visible text.
    """
    name = (value or "").strip()
    if not name:
        raise ValueError("Category name must not be empty")
    if len(name) > max_length:
        raise ValueError(f"Category name must be at most {max_length} characters")
    return name
