"""Customers bounded context: customer records and their shopping carts.

Every customer owns exactly one cart. The cart is created in the same unit of
work as the customer and only its line items change afterwards.
"""

from protean.domain import Domain

from customers.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

customers = Domain(name="customers")
