"""Ingredient catalog browsing and food categorization."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pantrypal.domain.catalog import FOOD_CATEGORIES, Ingredient
from pantrypal.domain.results import ApiResult

_logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20

CATEGORY_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "category": {"type": "string", "enum": list(FOOD_CATEGORIES)},
    },
    "required": ["category"],
    "additionalProperties": False,
}


class IngredientRepository(Protocol):
    """Read-only access to the ``ingredients`` table."""

    def list_ingredients(
        self,
        *,
        category: str | None,
        search: str | None,
        limit: int,
        offset: int,
    ) -> list[Ingredient]:
        """Return one page of ingredients matching the filters."""

    def get_ingredient(self, product_id: str) -> Ingredient | None:
        """Return an ingredient by product id, if present."""


class CategorizerClient(Protocol):
    """Interface for LLM food classification."""

    async def classify(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> dict[str, object]:
        """Return structured classification data."""


@dataclass
class CatalogService:
    """Browses the shared ingredient catalog."""

    repository: IngredientRepository

    def list_ingredients(
        self,
        category: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> ApiResult[list[Ingredient]]:
        """List ingredients filtered by category and a name substring."""
        page_size = limit if limit is not None else DEFAULT_PAGE_SIZE
        if page_size <= 0 or offset < 0:
            return ApiResult.failure("bad-data", "Invalid page bounds")
        try:
            ingredients = self.repository.list_ingredients(
                category=category or None,
                search=search.strip() if search and search.strip() else None,
                limit=page_size,
                offset=offset,
            )
        except Exception:
            _logger.exception("Error fetching ingredients")
            return ApiResult.failure("server", "Failed to fetch ingredients")
        return ApiResult.success(ingredients)

    def get_ingredient(self, product_id: str) -> ApiResult[Ingredient]:
        try:
            ingredient = self.repository.get_ingredient(product_id)
        except Exception:
            _logger.exception(
                "Error fetching ingredient", extra={"product_id": product_id}
            )
            return ApiResult.failure("server", "Failed to fetch ingredient")
        if ingredient is None:
            return ApiResult.failure("not-found", "Ingredient not found")
        return ApiResult.success(ingredient)


@dataclass
class FoodCategorizer:
    """Assigns a catalog category to a free-text food name."""

    client: CategorizerClient
    model: str

    async def categorize(self, food_name: str) -> str | None:
        """Return one of ``FOOD_CATEGORIES`` or None if unclassifiable."""
        name = food_name.strip()
        if not name:
            return None
        prompt = (
            "Categorize the following food item into one of these categories: "
            f"{', '.join(FOOD_CATEGORIES)}. Food item: {name}"
        )
        try:
            raw = await self.client.classify(
                model=self.model, prompt=prompt, schema=CATEGORY_SCHEMA
            )
        except Exception:
            _logger.exception("Error categorizing food item", extra={"food": name})
            return None
        category = raw.get("category")
        if not isinstance(category, str):
            return None
        normalized = category.strip().lower()
        return normalized if normalized in FOOD_CATEGORIES else None
