"""Cross-domain event contracts published by the Ordering domain.

Registered in consuming domains via ``domain.register_external_event()`` with
the matching ``__type__`` string so Protean can deserialize them from the
``ordering::order`` stream.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Float, Identifier, String


class OrderPaid(BaseEvent):
    """Payment was recorded successfully on the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    grand_total = Float()
    currency = String(default="EUR")
    paid_at = DateTime(required=True)
