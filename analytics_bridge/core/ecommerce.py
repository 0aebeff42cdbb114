"""
Ecommerce event translation.

Six ecommerce events map one-to-one onto backend event codes and are sent
as `track_action(code, context_data)`, where the context data carries the
serialized product list, the purchase id, mapped fields and extras.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from analytics_bridge.clients.protocols import AnalyticsClient
from analytics_bridge.core.context_data import ContextDataConfiguration
from analytics_bridge.core.products import build_products, serialize_products
from analytics_bridge.core.values import to_backend_string
from analytics_bridge.errors import UnknownEcommerceEventError
from analytics_bridge.models.events import Event
from analytics_bridge.observability import get_logger

logger = get_logger(__name__)

EVENTS_KEY = "&&events"
PRODUCTS_KEY = "&&products"
PURCHASE_ID_KEY = "purchaseid"

ORDER_ID_FIELDS = ("orderId", "order_id")


class EcommerceEvent(Enum):
    ORDER_COMPLETED = ("Order Completed", "purchase")
    PRODUCT_ADDED = ("Product Added", "scAdd")
    PRODUCT_REMOVED = ("Product Removed", "scRemove")
    CHECKOUT_STARTED = ("Checkout Started", "scCheckout")
    CART_VIEWED = ("Cart Viewed", "scView")
    PRODUCT_VIEWED = ("Product Viewed", "prodView")

    def __init__(self, event_name: str, backend_event: str) -> None:
        self.event_name = event_name
        self.backend_event = backend_event

    @classmethod
    def parse(cls, name: str) -> "EcommerceEvent":
        for member in cls:
            if member.event_name == name:
                return member
        raise UnknownEcommerceEventError(name)

    @classmethod
    def is_ecommerce_event(cls, name: Optional[str]) -> bool:
        return any(member.event_name == name for member in cls)


class EcommerceTranslator:
    """
    Builds backend context data for ecommerce events.

    Field consumption order matters: products and the order id are pulled
    out of the property bag before the generic mapping/extras pass, so a
    field used as a product attribute is never forwarded again as an extra.
    """

    def __init__(
        self,
        client: AnalyticsClient,
        context_data: ContextDataConfiguration,
        product_identifier: Optional[str] = None,
    ) -> None:
        self._client = client
        self.context_data = context_data
        self.product_identifier = product_identifier

    def track(self, event: Event) -> None:
        ecommerce_event = EcommerceEvent.parse(event.name)
        action = ecommerce_event.backend_event
        context_data = self.translate(event.name, event.properties, event)

        self._client.track_action(action, context_data)
        logger.debug(
            "track_action",
            extra={"action": action, "context_data": context_data},
        )

    def translate(
        self,
        event_name: str,
        properties: Optional[Mapping[str, Any]],
        event: Optional[Event] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Context data for one ecommerce event, or None when there is nothing
        to send beyond the event code.
        """
        backend_event = EcommerceEvent.parse(event_name).backend_event
        if not properties:
            return None

        context_data: Dict[str, Any] = {EVENTS_KEY: backend_event}
        consumed: List[str] = ["products"]

        records = properties.get("products")
        if isinstance(records, list) and records:
            products = build_products(records, self.product_identifier)
        else:
            products = build_products([properties], self.product_identifier)
            consumed.extend(self._implicit_product_fields())

        if products:
            context_data[PRODUCTS_KEY] = serialize_products(products)

        for field in ORDER_ID_FIELDS:
            if field in properties:
                context_data[PURCHASE_ID_KEY] = to_backend_string(properties[field])
                consumed.append(field)

        source = event if event is not None else Event(name=event_name, properties=dict(properties))
        mapped = self.context_data.map(
            properties,
            source,
            exclude=consumed,
            stringify_mapped=True,
        )
        if mapped:
            context_data.update(mapped)

        if len(context_data) == 1:
            return None
        return context_data

    def _implicit_product_fields(self) -> List[str]:
        """Fields consumed when the whole property bag is the single product."""
        fields = ["category", "quantity", "price"]
        if self.product_identifier is None or self.product_identifier in ("", "id"):
            fields.extend(["productId", "product_id"])
        else:
            fields.append(self.product_identifier)
        return fields
