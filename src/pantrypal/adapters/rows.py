"""Pydantic schemas validating rows read from Supabase."""

import logging
from collections.abc import Iterable
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from pantrypal.domain.catalog import Ingredient
from pantrypal.domain.groups import Group, GroupMembership
from pantrypal.domain.lists import ListItem, Nutrition
from pantrypal.domain.preferences import PreferencesRecord

_logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=BaseModel)


class _Row(BaseModel):
    model_config = ConfigDict(extra="ignore")


def _stringify_id(value: object) -> object:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class NutritionRow(_Row):
    """Nutrition JSON column; missing macros default to zero."""

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0

    @field_validator("calories", "protein_g", "carbs_g", "fat_g", mode="before")
    @classmethod
    def default_zero(cls, value: object) -> object:
        return 0.0 if value is None else value

    def to_domain(self) -> Nutrition:
        return Nutrition(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )


class ListItemRow(_Row):
    """Row of ``user_ingredients`` or a flattened ``user_wishlist`` row."""

    id: str
    user_id: str
    product_id: str
    name: str
    category: str
    quantity: str = "1"
    description: str | None = None
    nutrition: NutritionRow | None = None
    image_url: str | None = None

    @field_validator("id", "user_id", "product_id", mode="before")
    @classmethod
    def normalize_ids(cls, value: object) -> object:
        return _stringify_id(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def normalize_quantity(cls, value: object) -> object:
        if value is None or value == "":
            return "1"
        if isinstance(value, bool):
            raise ValueError("quantity must be an integer")
        if isinstance(value, int):
            value = str(value)
        if isinstance(value, str) and value.strip().isdigit():
            return str(int(value.strip()))
        raise ValueError("quantity must be a non-negative integer")

    def to_domain(self) -> ListItem:
        return ListItem(
            id=self.id,
            user_id=self.user_id,
            product_id=self.product_id,
            name=self.name,
            category=self.category,
            quantity=self.quantity,
            description=self.description,
            nutrition=self.nutrition.to_domain() if self.nutrition else None,
            image_url=self.image_url,
        )


class IngredientRow(_Row):
    """Row of the read-only ``ingredients`` catalog."""

    product_id: str
    name: str
    category: str
    nutrition: NutritionRow | None = None
    description: str | None = None
    image_url: str | None = None

    @field_validator("product_id", mode="before")
    @classmethod
    def normalize_ids(cls, value: object) -> object:
        return _stringify_id(value)

    def to_domain(self) -> Ingredient:
        return Ingredient(
            product_id=self.product_id,
            name=self.name,
            category=self.category,
            nutrition=self.nutrition.to_domain() if self.nutrition else None,
            description=self.description,
            image_url=self.image_url,
        )


class PreferencesRow(_Row):
    """Row of ``user_preferences``."""

    user_id: str
    first_name: str = ""
    last_name: str = ""
    age: int = 0
    location: str | dict[str, float] | None = None
    family_size: dict[str, int] | None = None
    allergies: list[str] | None = None
    foods_to_avoid: list[str] | None = None
    onboarding_completed: bool = False

    def to_domain(self) -> PreferencesRecord:
        return PreferencesRecord(
            user_id=self.user_id,
            first_name=self.first_name,
            last_name=self.last_name,
            age=self.age,
            location=self.location or "",
            family_size=dict(self.family_size or {}),
            allergies=list(self.allergies or []),
            foods_to_avoid=list(self.foods_to_avoid or []),
            onboarding_completed=self.onboarding_completed,
        )


class GroupRow(_Row):
    """Row of ``groups``."""

    id: str
    name: str
    description: str | None = None
    created_at: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def normalize_ids(cls, value: object) -> object:
        return _stringify_id(value)

    def to_domain(self) -> Group:
        return Group(
            id=self.id,
            name=self.name,
            description=self.description,
            created_at=self.created_at,
        )


class MembershipRow(_Row):
    """Row of ``group_membership``."""

    id: str
    group_id: str
    user_id: str
    joined_at: str = ""

    @field_validator("id", "group_id", "user_id", mode="before")
    @classmethod
    def normalize_ids(cls, value: object) -> object:
        return _stringify_id(value)

    def to_domain(self) -> GroupMembership:
        return GroupMembership(
            id=self.id,
            group_id=self.group_id,
            user_id=self.user_id,
            joined_at=self.joined_at,
        )


def decode_row(model: type[RowT], row: object) -> RowT:
    """Validate a single row, raising on malformed data."""
    return model.model_validate(row)


def decode_rows(
    model: type[RowT], rows: Iterable[object], *, table: str
) -> list[RowT]:
    """Validate rows, dropping and logging any that are malformed."""
    decoded: list[RowT] = []
    for row in rows:
        try:
            decoded.append(model.model_validate(row))
        except ValidationError as exc:
            _logger.warning(
                "Skipping malformed %s row: %s", table, exc.errors(include_url=False)
            )
    return decoded
