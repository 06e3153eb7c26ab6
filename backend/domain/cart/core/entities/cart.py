"""ShoppingCart aggregate root and CartItem entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from domain.menu.core.value_objects.ingredient import Ingredient
from domain.menu.core.value_objects.selection import SelectedOptionDetail
from domain.shared.errors import ConflictingResourceError, NotFoundError, ValidationFailedError
from domain.shared.money import ZERO, money_sum


@dataclass
class CartItem:
    """
    Entity: Customized plate in a cart.

    price is the unit price (base plus selected options); the line total
    is price × quantity.

    Invariants:
    - quantity > 0
    - price >= 0
    """

    id: str
    menu_id: str
    plate_id: str
    plate_name: str
    price: Decimal
    quantity: int
    restaurant_id: str
    restaurant_name: str
    variant_id: Optional[str] = None
    custom_ingredients: List[Ingredient] = field(default_factory=list)
    selected_options: List[SelectedOptionDetail] = field(default_factory=list)
    image_url: Optional[str] = None
    notes: str = ""
    added_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if self.quantity <= 0:
            raise ValidationFailedError(f"Quantity must be positive, got {self.quantity}")
        if self.price < 0:
            raise ValidationFailedError(f"Price cannot be negative, got {self.price}")

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def same_configuration(self, other: "CartItem") -> bool:
        """True if other is the same plate, variant and options (in order)."""
        return (
            self.plate_id == other.plate_id
            and self.variant_id == other.variant_id
            and self.selected_options == other.selected_options
        )


@dataclass
class ShoppingCart:
    """
    Aggregate Root: A customer's active cart.

    A cart holds items of a single restaurant. Adding an item of another
    restaurant while the cart is not empty is a conflict, never a merge.
    Emptying the cart unbinds it from its restaurant.

    Identity: Defined by id; at most one active cart per customer.
    """

    id: str
    customer_id: str
    restaurant_id: str = ""
    restaurant_name: str = ""
    items: List[CartItem] = field(default_factory=list)
    delivery_fee: Decimal = ZERO
    tax: Decimal = ZERO
    active: bool = True

    # Timestamps
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> Decimal:
        return money_sum(item.line_total for item in self.items)

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.delivery_fee + self.tax

    def add_item(self, item: CartItem) -> CartItem:
        """
        Add an item, merging with an identical configuration.

        Returns:
            The cart line holding the item (existing one when merged)

        Raises:
            ConflictingResourceError: If the cart holds another restaurant's items
        """
        if self.items and self.restaurant_id and self.restaurant_id != item.restaurant_id:
            raise ConflictingResourceError(
                f"Your cart contains items from {self.restaurant_name}. "
                f"Please checkout or clear cart before adding items from {item.restaurant_name}"
            )

        self.restaurant_id = item.restaurant_id
        self.restaurant_name = item.restaurant_name

        for existing in self.items:
            if existing.same_configuration(item):
                existing.quantity += item.quantity
                self.touch()
                return existing

        self.items.append(item)
        self.touch()
        return item

    def update_item_quantity(self, item_id: str, quantity: int) -> None:
        """
        Set an item's quantity; quantity <= 0 removes it.

        Raises:
            NotFoundError: If the item is not in the cart
        """
        item = self.find_item(item_id)
        if quantity <= 0:
            self.remove_item(item_id)
            return
        item.quantity = quantity
        self.touch()

    def remove_item(self, item_id: str) -> None:
        """
        Raises:
            NotFoundError: If the item is not in the cart
        """
        self.find_item(item_id)
        self.items = [item for item in self.items if item.id != item_id]
        if not self.items:
            self._unbind_restaurant()
        self.touch()

    def clear(self) -> None:
        self.items = []
        self._unbind_restaurant()
        self.touch()

    def find_item(self, item_id: str) -> CartItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise NotFoundError(f"Item {item_id} not found in cart {self.id}")

    def _unbind_restaurant(self) -> None:
        self.restaurant_id = ""
        self.restaurant_name = ""

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
