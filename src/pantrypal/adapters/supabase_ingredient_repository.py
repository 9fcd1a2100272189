"""Supabase repository for the ingredient catalog."""

from dataclasses import dataclass

from supabase import Client

from pantrypal.adapters.rows import IngredientRow, decode_row, decode_rows
from pantrypal.domain.catalog import Ingredient
from pantrypal.services.catalog import IngredientRepository


@dataclass
class SupabaseIngredientRepository(IngredientRepository):
    """Supabase implementation for ``ingredients``."""

    client: Client

    def list_ingredients(
        self,
        *,
        category: str | None,
        search: str | None,
        limit: int,
        offset: int,
    ) -> list[Ingredient]:
        """Return a page of ingredients matching the filters."""
        query = self.client.table("ingredients").select("*")
        if category:
            query = query.eq("category", category)
        if search:
            query = query.ilike("name", f"%{search}%")
        response = query.range(offset, offset + limit - 1).execute()
        rows = decode_rows(IngredientRow, response.data or [], table="ingredients")
        return [row.to_domain() for row in rows]

    def get_ingredient(self, product_id: str) -> Ingredient | None:
        """Return an ingredient by product id, if present."""
        response = (
            self.client.table("ingredients")
            .select("*")
            .eq("product_id", product_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return decode_row(IngredientRow, response.data[0]).to_domain()
