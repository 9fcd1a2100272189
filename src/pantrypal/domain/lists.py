"""Domain models for grocery list and wishlist entries."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Nutrition:
    """Macronutrients attached to an ingredient."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class ListItem:
    """A grocery list or wishlist row owned by a user."""

    id: str
    user_id: str
    product_id: str
    name: str
    category: str
    quantity: str
    description: str | None = None
    nutrition: Nutrition | None = None
    image_url: str | None = None

    @property
    def quantity_value(self) -> int:
        """Return the quantity as an integer."""
        return int(self.quantity)


@dataclass(frozen=True)
class NewListItem:
    """Payload for adding an item before the server assigns an id."""

    user_id: str
    product_id: str
    name: str
    category: str
    quantity: str = "1"
    description: str | None = None
    nutrition: Nutrition | None = None
    image_url: str | None = None
