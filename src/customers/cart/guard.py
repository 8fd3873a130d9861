"""Per-customer exclusion for cart transactions.

Every cart mutation is a read-modify-write: load the lines, decide, write.
Two such sequences for the same customer must not interleave, otherwise the
second one decides on lines the first has already changed. ``CartGuard``
serializes them per customer while letting different customers proceed in
parallel.

Waiting happens on the event loop, before any worker thread is taken, so a
queue of messages for one customer never occupies the thread pool. The scope
must enclose the whole unit of work, commit included, so it is taken around
the worker-thread call that runs ``domain.process()``.

A guard is confined to the event loop that uses it.
"""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator


@dataclass
class _Slot:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    holders: int = 0


class CartGuard:
    def __init__(self) -> None:
        self._slots: dict[str, _Slot] = {}

    @asynccontextmanager
    async def hold(self, customer_id) -> AsyncIterator[None]:
        """Wait until no other holder has ``customer_id``, then enter."""
        key = str(customer_id)
        slot = self._slots.setdefault(key, _Slot())
        slot.holders += 1
        try:
            async with slot.lock:
                yield
        finally:
            slot.holders -= 1
            if slot.holders == 0:
                del self._slots[key]

    def __len__(self) -> int:
        """Number of customers currently held or waited on."""
        return len(self._slots)


cart_guard = CartGuard()
