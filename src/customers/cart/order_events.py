"""Inbound cross-domain event handler: the cart reacts to Ordering events.

A paid order means the dishes in the cart have been bought, so the cart is
restarted for the next order.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.mixins import handle
from shared.events.ordering import OrderPaid

from customers.cart.cart import Cart
from customers.cart.restart import restart_cart
from customers.domain import customers

logger = structlog.get_logger(__name__)

customers.register_external_event(OrderPaid, "Ordering.OrderPaid.v1")


@customers.event_handler(part_of=Cart, stream_category="ordering::order")
class OrderingCartEventHandler:
    @handle(OrderPaid)
    def on_order_paid(self, event: OrderPaid) -> None:
        try:
            restart_cart(str(event.customer_id))
        except ObjectNotFoundError:
            logger.warning(
                "Paid order for a customer without a cart",
                customer_id=str(event.customer_id),
                order_id=str(event.order_id),
            )
