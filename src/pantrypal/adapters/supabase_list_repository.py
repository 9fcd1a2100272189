"""Supabase-backed grocery list and wishlist repositories."""

from dataclasses import asdict, dataclass

from supabase import Client

from pantrypal.adapters.rows import ListItemRow, decode_row, decode_rows
from pantrypal.domain.lists import ListItem, NewListItem
from pantrypal.services.lists import ListRepository


def _insert_payload(item: NewListItem) -> dict[str, object]:
    return {
        "user_id": item.user_id,
        "product_id": item.product_id,
        "name": item.name,
        "category": item.category,
        "quantity": str(item.quantity),
        "description": item.description or None,
        "nutrition": asdict(item.nutrition) if item.nutrition else None,
        "image_url": item.image_url or None,
    }


@dataclass
class _SupabaseListRepository(ListRepository):
    client: Client

    table_name = ""

    def insert_item(self, item: NewListItem) -> ListItem:
        """Insert an item row and return it."""
        response = (
            self.client.table(self.table_name).insert([_insert_payload(item)]).execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to insert into {self.table_name}")
        return decode_row(ListItemRow, response.data[0]).to_domain()

    def update_quantity(
        self, item_id: str, user_id: str, quantity: str
    ) -> ListItem | None:
        """Update the quantity of a row owned by the user."""
        response = (
            self.client.table(self.table_name)
            .update({"quantity": quantity})
            .eq("id", item_id)
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return decode_row(ListItemRow, response.data[0]).to_domain()

    def delete_item(self, item_id: str, user_id: str) -> None:
        """Delete a row owned by the user."""
        self.client.table(self.table_name).delete().eq("id", item_id).eq(
            "user_id", user_id
        ).execute()


@dataclass
class SupabaseGroceryListRepository(_SupabaseListRepository):
    """Grocery list rows in ``user_ingredients``."""

    table_name = "user_ingredients"

    def list_items(self, user_id: str) -> list[ListItem]:
        """Return the user's grocery items, newest first."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        rows = decode_rows(ListItemRow, response.data or [], table=self.table_name)
        return [row.to_domain() for row in rows]


@dataclass
class SupabaseWishlistRepository(_SupabaseListRepository):
    """Wishlist rows in ``user_wishlist`` joined to ``ingredients``."""

    table_name = "user_wishlist"

    def list_items(self, user_id: str) -> list[ListItem]:
        """Return the user's wishlist with ingredient details."""
        response = (
            self.client.table(self.table_name)
            .select("*, ingredients:product_id(*)")
            .eq("user_id", user_id)
            .execute()
        )
        flattened = [_flatten_wishlist_row(row) for row in response.data or []]
        rows = decode_rows(ListItemRow, flattened, table=self.table_name)
        return [row.to_domain() for row in rows]


def _flatten_wishlist_row(row: dict[str, object]) -> dict[str, object]:
    """Take display fields from the joined ingredient rather than the row."""
    ingredient = row.get("ingredients")
    if not isinstance(ingredient, dict):
        ingredient = {}
    return {
        "id": row.get("id"),
        "user_id": row.get("user_id"),
        "product_id": row.get("product_id"),
        "name": ingredient.get("name") or "",
        "category": ingredient.get("category") or "",
        "quantity": row.get("quantity"),
        "description": ingredient.get("description") or None,
        "nutrition": ingredient.get("nutrition") or None,
        "image_url": ingredient.get("image_url") or None,
    }
