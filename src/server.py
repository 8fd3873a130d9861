"""Protean Engine runner for the Customers domain.

Starts the Engine workers for the customers domain:
- OutboxProcessor: publishes customer and cart events to Redis Streams
- StreamSubscriptions: consumes ``ordering::order`` so that ``OrderPaid``
  restarts the customer's cart

Usage:
    python src/server.py
"""

import asyncio

from protean.server.engine import Engine


async def run():
    from customers.domain import customers

    customers.init()
    await Engine(customers).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
