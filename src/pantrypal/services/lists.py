"""Grocery list and wishlist stores synchronized with Supabase."""

import logging
from dataclasses import dataclass, field, replace
from typing import ClassVar, Protocol

from pantrypal.domain.lists import ListItem, NewListItem
from pantrypal.domain.results import ApiResult

_logger = logging.getLogger(__name__)


class ListRepository(Protocol):
    """Persistence interface for a per-user item list."""

    def list_items(self, user_id: str) -> list[ListItem]:
        """Return all items belonging to a user."""

    def insert_item(self, item: NewListItem) -> ListItem:
        """Insert an item and return the stored row."""

    def update_quantity(
        self, item_id: str, user_id: str, quantity: str
    ) -> ListItem | None:
        """Update an item's quantity, scoped to its owner."""

    def delete_item(self, item_id: str, user_id: str) -> None:
        """Delete an item, scoped to its owner."""


@dataclass
class ListStore:
    """Local mirror of a remote list that writes through before updating.

    Every mutation goes to the repository first; local items change only
    after the remote call succeeds. Failures are logged and returned as an
    ``ApiResult`` so callers can react.
    """

    repository: ListRepository
    items: list[ListItem] = field(default_factory=list)
    is_loading: bool = False

    label: ClassVar[str] = "list"

    def find_item_by_id(self, item_id: str) -> ListItem | None:
        return next((item for item in self.items if item.id == item_id), None)

    def find_item_by_product_id(self, product_id: str, user_id: str) -> ListItem | None:
        return next(
            (
                item
                for item in self.items
                if item.product_id == product_id and item.user_id == user_id
            ),
            None,
        )

    def get_item_by_product_id(self, product_id: str) -> ListItem | None:
        return next(
            (item for item in self.items if item.product_id == product_id), None
        )

    def load(self, user_id: str) -> ApiResult[list[ListItem]]:
        """Replace local items with the user's remote rows."""
        self.is_loading = True
        try:
            items = self.repository.list_items(user_id)
        except Exception:
            _logger.exception(
                "Failed to load %s", self.label, extra={"user_id": user_id}
            )
            return ApiResult.failure("server", f"Failed to load {self.label}")
        finally:
            self.is_loading = False
        self.items = list(items)
        _logger.info("Loaded %s %s items for user %s", len(items), self.label, user_id)
        return ApiResult.success(list(self.items))

    def add(self, item: NewListItem) -> ApiResult[ListItem]:
        """Add an item, merging into an existing row for the same product."""
        try:
            quantity = int(str(item.quantity).strip())
        except ValueError:
            return ApiResult.failure("bad-data", "Quantity must be a whole number")
        if quantity <= 0:
            return ApiResult.failure("bad-data", "Quantity must be greater than zero")
        item = replace(item, quantity=str(quantity))

        existing = self.find_item_by_product_id(item.product_id, item.user_id)
        if existing is not None:
            increment = self._duplicate_increment(quantity)
            return self.update_quantity(
                existing.id, existing.quantity_value + increment
            )

        try:
            created = self.repository.insert_item(self._insert_payload(item))
        except Exception:
            _logger.exception(
                "Failed to add to %s",
                self.label,
                extra={"product_id": item.product_id, "user_id": item.user_id},
            )
            return ApiResult.failure("server", f"Failed to add item to {self.label}")
        return self._after_insert(created)

    def update_quantity(
        self, item_id: str, new_quantity: str | int
    ) -> ApiResult[ListItem]:
        """Set an item's quantity; zero or less removes the item."""
        item = self.find_item_by_id(item_id)
        if item is None:
            return ApiResult.failure("not-found", "Item not found")
        try:
            quantity = int(str(new_quantity).strip())
        except ValueError:
            return ApiResult.failure("bad-data", "Quantity must be a whole number")
        if quantity <= 0:
            removed = self.remove(item_id)
            return ApiResult(kind=removed.kind, error=removed.error)

        try:
            stored = self.repository.update_quantity(
                item_id, item.user_id, str(quantity)
            )
        except Exception:
            _logger.exception(
                "Failed to update %s quantity", self.label, extra={"item_id": item_id}
            )
            return ApiResult.failure("server", "Failed to update quantity")
        if stored is None:
            return ApiResult.failure("not-found", "Item not found")

        updated = replace(item, quantity=str(quantity))
        self.items = [updated if i.id == item_id else i for i in self.items]
        return ApiResult.success(updated)

    def remove(self, item_id: str) -> ApiResult[None]:
        """Delete an item remotely, then drop it locally."""
        item = self.find_item_by_id(item_id)
        if item is None:
            return ApiResult.failure("not-found", "Item not found")
        try:
            self.repository.delete_item(item_id, item.user_id)
        except Exception:
            _logger.exception(
                "Failed to remove from %s", self.label, extra={"item_id": item_id}
            )
            return ApiResult.failure(
                "server", f"Failed to remove item from {self.label}"
            )
        self.items = [i for i in self.items if i.id != item_id]
        return ApiResult.success()

    def _duplicate_increment(self, quantity: int) -> int:
        return quantity

    def _insert_payload(self, item: NewListItem) -> NewListItem:
        return item

    def _after_insert(self, created: ListItem) -> ApiResult[ListItem]:
        self.items = [*self.items, created]
        return ApiResult.success(created)


@dataclass
class GroceryListStore(ListStore):
    """The user's grocery list (``user_ingredients``)."""

    label: ClassVar[str] = "grocery list"


@dataclass
class WishlistStore(ListStore):
    """The user's wishlist (``user_wishlist``).

    Re-adding a wishlisted product always adds one unit, and new rows are
    followed by a full reload so ingredient details come from the join.
    """

    label: ClassVar[str] = "wishlist"

    def _duplicate_increment(self, quantity: int) -> int:
        return 1

    def _insert_payload(self, item: NewListItem) -> NewListItem:
        return replace(item, quantity="1")

    def _after_insert(self, created: ListItem) -> ApiResult[ListItem]:
        reloaded = self.load(created.user_id)
        if not reloaded.ok:
            _logger.warning(
                "Wishlist reload failed after insert, keeping row %s locally",
                created.id,
            )
            self.items = [*self.items, created]
            return ApiResult.success(created)
        return ApiResult.success(self.find_item_by_id(created.id) or created)
