from typing import Iterable

import attrs

from src.platform.exception.exceptions import InvalidArgumentError


@attrs.define(frozen=True)
class OrderLine:
    """One requested (product, quantity) pair, before stock and price are resolved"""

    product_id: int
    quantity: int

    def __attrs_post_init__(self) -> None:
        if self.quantity < 1:
            raise InvalidArgumentError(
                f'Quantity for product {self.product_id} must be at least 1'
            )

    @classmethod
    def merge(cls, lines: Iterable['OrderLine']) -> list['OrderLine']:
        """Collapse repeated product ids into one line, keeping first-seen order"""
        quantities: dict[int, int] = {}
        for line in lines:
            quantities[line.product_id] = quantities.get(line.product_id, 0) + line.quantity
        return [cls(product_id=pid, quantity=qty) for pid, qty in quantities.items()]
