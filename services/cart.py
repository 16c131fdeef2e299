"""
Cart Store

Session-scoped shopping cart. One CartStore belongs to one shopper session
and is passed explicitly to the checkout pipeline, so tests can build and
inspect carts without any UI.

Lines are keyed by (product_id, size_label). The cart can optionally be
persisted to a JSON file, the server-side counterpart of browser local storage.
"""

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

import config
from exceptions.cart import CartItemNotFoundException
from models.cart import CartLineDTO

logger = logging.getLogger(__name__)

_lines_adapter = TypeAdapter(list[CartLineDTO])


class CartStore:
    """Shopping cart state container."""

    def __init__(self, lines: list[CartLineDTO] | None = None, storage_path: str | Path | None = None):
        self._lines: list[CartLineDTO] = []
        self._storage_path = Path(storage_path) if storage_path else None
        for line in lines or []:
            self._merge(line)

    @classmethod
    def load(cls, storage_path: str | Path | None = None) -> 'CartStore':
        """
        Restore a cart from its JSON file.

        A missing or unreadable file yields an empty cart; the error is logged
        and the shopper simply starts over. Invalid lines (e.g. quantity 0)
        are dropped one by one, the remaining lines are kept.

        Args:
            storage_path: JSON file path, defaults to config.CART_STORAGE_PATH

        Returns:
            CartStore bound to storage_path
        """
        path = Path(storage_path or config.CART_STORAGE_PATH)
        if not path.exists():
            return cls(storage_path=path)

        try:
            raw_lines = json.loads(path.read_bytes())
        except (OSError, ValueError) as e:
            logger.error(f"Error loading cart from {path}: {e}")
            return cls(storage_path=path)

        if not isinstance(raw_lines, list):
            logger.error(f"Error loading cart from {path}: expected a list of lines")
            return cls(storage_path=path)

        lines = []
        for raw_line in raw_lines:
            try:
                lines.append(CartLineDTO.model_validate(raw_line))
            except ValidationError as e:
                logger.warning(f"Dropping invalid cart line from {path}: {e.error_count()} error(s)")

        return cls(lines=lines, storage_path=path)

    def save(self) -> None:
        """Write the cart to its JSON file (no-op for in-memory carts)."""
        if self._storage_path is None:
            return
        try:
            self._storage_path.parent.mkdir(parents=True, exist_ok=True)
            self._storage_path.write_bytes(_lines_adapter.dump_json(self._lines))
        except OSError as e:
            logger.error(f"Error saving cart to {self._storage_path}: {e}")

    @property
    def lines(self) -> list[CartLineDTO]:
        """Copy of the current lines; mutating it does not change the cart."""
        return list(self._lines)

    def is_empty(self) -> bool:
        return len(self._lines) == 0

    def _find_index(self, product_id: int, size_label: str | None) -> int | None:
        for index, line in enumerate(self._lines):
            if line.key == (product_id, size_label):
                return index
        return None

    def _merge(self, line: CartLineDTO) -> None:
        index = self._find_index(line.product_id, line.size_label)
        if index is None:
            self._lines.append(line)
        else:
            existing = self._lines[index]
            self._lines[index] = existing.model_copy(update={"quantity": existing.quantity + line.quantity})

    def add_item(self, line: CartLineDTO) -> None:
        """
        Add a line, or increase the quantity of the line with the same product and size.

        The name and unit price of an existing line are kept.
        """
        self._merge(line)
        self.save()

    def buy_now(self, line: CartLineDTO) -> None:
        """Add a line without clearing the rest of the cart (checkout follows in the UI)."""
        self.add_item(line)

    def remove_item(self, product_id: int, size_label: str | None = None) -> None:
        index = self._find_index(product_id, size_label)
        if index is None:
            raise CartItemNotFoundException(product_id, size_label)
        del self._lines[index]
        self.save()

    def update_quantity(self, product_id: int, size_label: str | None, quantity: int) -> None:
        """
        Set quantity of a line. Zero or negative quantities remove the line.

        Raises:
            CartItemNotFoundException: No line for product_id and size_label
        """
        index = self._find_index(product_id, size_label)
        if index is None:
            raise CartItemNotFoundException(product_id, size_label)

        if quantity <= 0:
            del self._lines[index]
        else:
            self._lines[index] = self._lines[index].model_copy(update={"quantity": quantity})
        self.save()

    def clear(self) -> None:
        self._lines = []
        self.save()

    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines)

    def total_price(self) -> float:
        return sum((line.line_total for line in self._lines), 0.0)
