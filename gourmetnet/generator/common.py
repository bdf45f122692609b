"""Identifiers and stock imagery shared by the parser, the fallback generator and the restorer."""

import random
import string
import time
from typing import Optional


STOCK_PHOTO_BASE_ID = 1565299624946
STOCK_IMAGE_TEMPLATE = "https://images.unsplash.com/photo-{photo_id}-{suffix}?w=400&h=300&fit=crop"
DEFAULT_STOCK_IMAGE = "https://images.unsplash.com/photo-1565299624946-b28f40a0ca4b?w=400&h=300&fit=crop"

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def make_recipe_id(now_ms: Optional[int] = None) -> str:
    """``recipe-<epoch millis>``. Monotonic-ish within a process, not globally unique."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"recipe-{now_ms}"


def make_ingredient_id(index: int) -> str:
    return f"ing-{index}"


def stock_image_url(rng: Optional[random.Random] = None) -> str:
    """Templated stock-photo URL with a randomized id and suffix. Not checked for existence."""
    rng = rng or random
    photo_id = STOCK_PHOTO_BASE_ID + rng.randrange(1000)
    suffix = "".join(rng.choice(_SUFFIX_ALPHABET) for _ in range(6))
    return STOCK_IMAGE_TEMPLATE.format(photo_id=photo_id, suffix=suffix)
