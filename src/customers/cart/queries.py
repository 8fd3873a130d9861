"""Read side of the cart: no unit of work, no writes."""

from protean.utils.globals import current_domain

from customers.cart.cart import Cart


def find_customer_cart(customer_id):
    """Return the stored lines of the customer's cart as snapshots."""
    cart = current_domain.repository_for(Cart).find_for_customer(customer_id)
    return [cart.item_snapshot(item) for item in cart.items]
