from decimal import ROUND_HALF_UP, Decimal

import attrs

from src.service.ordering.domain.entity.product_entity import Product


CENT = Decimal('0.01')


def to_money(value: Decimal | int | str) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@attrs.define(frozen=True)
class PriceSnapshot:
    """Unit price frozen at purchase time; later catalog price changes never reach it"""

    product_id: int
    unit_price: Decimal = attrs.field(converter=to_money)

    @classmethod
    def from_product(cls, product: Product) -> 'PriceSnapshot':
        return cls(product_id=product.id, unit_price=product.price)

    def line_total(self, quantity: int) -> Decimal:
        return to_money(self.unit_price * quantity)
