"""Repository for the Cart aggregate."""

from protean.exceptions import ObjectNotFoundError

from customers.cart.cart import Cart
from customers.domain import customers


@customers.repository(part_of=Cart)
class CartRepository:
    def find_for_customer(self, customer_id) -> Cart:
        """Return the cart owned by ``customer_id``.

        Raises ObjectNotFoundError when the customer has no cart.
        """
        carts = self._dao.query.filter(customer_id=str(customer_id)).all().items
        if not carts:
            raise ObjectNotFoundError({"cart": [f"Cart not found for customer with ID {customer_id}"]})
        return carts[0]
