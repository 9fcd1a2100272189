"""Domain models for the ingredient catalog."""

from dataclasses import dataclass

from pantrypal.domain.lists import Nutrition

FOOD_CATEGORIES = ("vegetables", "meat", "fruit", "dairy", "baked")


@dataclass(frozen=True)
class Ingredient:
    """A catalog ingredient users can add to their lists."""

    product_id: str
    name: str
    category: str
    nutrition: Nutrition | None
    description: str | None
    image_url: str | None
