"""
Order draft built at the till before it is placed.

Lines are identified by (menu item, temperature, consumption mode): adding
the same combination again bumps the existing line's quantity instead of
appending a new one. The menu item's price is captured when a line is
first added.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from uuid import UUID

from .models import ConsumptionMode, PaymentMethod, Temperature

CENT = Decimal('0.01')


@dataclass
class DraftLine:
    menu_item_id: UUID
    name: str
    unit_price: Decimal
    quantity: int = 1
    note: str = ''
    temperature: str = Temperature.HOT
    consumption: str = ConsumptionMode.DINE_IN

    @property
    def key(self):
        return (self.menu_item_id, self.temperature, self.consumption)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class OrderDraft:
    shop_id: Optional[UUID] = None
    lines: list = field(default_factory=list)
    discount_percent: Decimal = Decimal('0')
    payment_method: str = PaymentMethod.CASH
    customer_id: Optional[UUID] = None

    @property
    def is_empty(self):
        return not self.lines

    def find_line(self, menu_item_id, temperature=Temperature.HOT, consumption=ConsumptionMode.DINE_IN):
        key = (menu_item_id, temperature, consumption)
        for line in self.lines:
            if line.key == key:
                return line
        return None

    def add_item(self, menu_item, quantity=1, temperature=Temperature.HOT,
                 consumption=ConsumptionMode.DINE_IN, note=''):
        """Add ``menu_item``, merging into a matching line when there is one."""
        line = self.find_line(menu_item.id, temperature, consumption)
        if line is not None:
            line.quantity += quantity
            if note:
                line.note = note
            return line

        line = DraftLine(
            menu_item_id=menu_item.id,
            name=menu_item.name,
            unit_price=menu_item.price,
            quantity=quantity,
            note=note,
            temperature=temperature,
            consumption=consumption,
        )
        self.lines.append(line)
        return line

    def set_quantity(self, index, quantity):
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_line(index)
        else:
            self.lines[index].quantity = quantity

    def increment(self, index):
        self.lines[index].quantity += 1

    def decrement(self, index):
        self.set_quantity(index, self.lines[index].quantity - 1)

    def set_note(self, index, note):
        self.lines[index].note = note

    def remove_line(self, index):
        del self.lines[index]

    def clear(self):
        self.lines.clear()
        self.discount_percent = Decimal('0')
        self.customer_id = None

    # Totals

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal('0'))

    @property
    def discount_amount(self) -> Decimal:
        amount = self.subtotal * Decimal(self.discount_percent) / Decimal('100')
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)

    @property
    def total(self) -> Decimal:
        return self.subtotal - self.discount_amount

    def requested_quantities(self):
        """Yield (menu item id, quantity) per line."""
        for line in self.lines:
            yield line.menu_item_id, line.quantity
