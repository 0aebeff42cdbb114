"""
Ecommerce product serialization.

The backend receives products as one string, each product rendered as
`category;id;quantity;price` and products separated by `,`, e.g.
`athletic;shoes;2;20.0,casual;jeans;1;20.0`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from analytics_bridge.core.values import get_string, parse_float, parse_int, to_backend_string
from analytics_bridge.observability import get_logger, get_translation_instruments

logger = get_logger(__name__)

# Fallback id fields, after the configured product identifier.
ID_FALLBACK_FIELDS = ("productId", "product_id", "id")


@dataclass(frozen=True)
class Product:
    """
    A backend ecommerce product.

    `price` is the line total: unit price multiplied by quantity.
    """

    id: str
    category: Optional[str] = None
    quantity: int = 1
    price: float = 0.0

    def __str__(self) -> str:
        category = self.category if self.category and self.category.strip() else ""
        return f"{category};{self.id};{self.quantity};{to_backend_string(float(self.price))}"


def resolve_product_id(
    record: Mapping[str, Any], product_identifier: Optional[str]
) -> Optional[str]:
    """
    Pick the product id from an event product.

    The configured identifier (`name`, `sku`, ...) wins unless it is the
    plain `id`; then `productId`, `product_id` and finally `id`.
    """
    candidates: List[str] = []
    if product_identifier and product_identifier != "id":
        candidates.append(product_identifier)
    candidates.extend(ID_FALLBACK_FIELDS)

    for field in candidates:
        value = get_string(record, field)
        if value is not None and value.strip():
            return value
    return None


def build_product(
    record: Mapping[str, Any], product_identifier: Optional[str] = None
) -> Optional[Product]:
    """
    Build a Product from one event product, or None if it has no id.

    Unparsable quantities default to 1 and unparsable prices to 0.0.
    """
    product_id = resolve_product_id(record, product_identifier)
    if product_id is None:
        return None

    quantity = 1
    raw_quantity = record.get("quantity")
    if raw_quantity is not None:
        parsed = parse_int(raw_quantity)
        if parsed is None:
            logger.debug(
                "Unparsable product quantity, defaulting to 1.",
                extra={"product_id": product_id, "quantity": repr(raw_quantity)},
            )
        else:
            quantity = parsed

    unit_price = 0.0
    raw_price = record.get("price")
    if raw_price is not None:
        parsed_price = parse_float(raw_price)
        if parsed_price is None:
            logger.debug(
                "Unparsable product price, defaulting to 0.0.",
                extra={"product_id": product_id, "price": repr(raw_price)},
            )
        else:
            unit_price = parsed_price

    return Product(
        id=product_id,
        category=get_string(record, "category"),
        quantity=quantity,
        price=unit_price * quantity,
    )


def build_products(
    records: Iterable[Mapping[str, Any]], product_identifier: Optional[str] = None
) -> List[Product]:
    """Build products in input order, dropping the ones without an id."""
    products: List[Product] = []
    for index, record in enumerate(records):
        product = build_product(record, product_identifier) if isinstance(record, Mapping) else None
        if product is None:
            get_translation_instruments().products_dropped.add(1)
            logger.info(
                "Dropping ecommerce product without an id.",
                extra={"product_index": index, "product_identifier": product_identifier},
            )
            continue
        products.append(product)
    return products


def serialize_products(products: Sequence[Product]) -> str:
    return ",".join(str(product) for product in products)
