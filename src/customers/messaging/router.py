"""Message-pattern routing for the Customers service.

Two kinds of pattern exist. Request patterns (``send``) reply with a result
or an ``RpcError``. Event patterns (``emit``) are fire-and-forget: failures
are logged and nothing is returned.

Each message is processed in a worker thread so that concurrent messages
really overlap. Patterns that mutate a cart name the payload field holding
the customer id; such a message first waits on the event loop for
``CartGuard.hold()`` of that customer and only then takes a worker thread.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from pydantic import BaseModel
from pydantic import ValidationError as PayloadError

from customers.cart.guard import CartGuard, cart_guard
from customers.customer.exceptions import CustomerAlreadyExists
from customers.utils.logging import log_context

logger = structlog.get_logger(__name__)

BAD_REQUEST = 400
NOT_FOUND = 404
CONFLICT = 409
INTERNAL_SERVER_ERROR = 500


class RpcError(Exception):
    """Structured failure reply: a status code and a readable message."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message

    def to_dict(self) -> dict:
        return {"status": self.status, "message": self.message}


def error_message(exc: Exception) -> str:
    """Flatten Protean's ``{field: [messages]}`` into one line."""
    if isinstance(exc, PayloadError):
        return "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )

    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        parts = []
        for value in messages.values():
            parts.extend(value if isinstance(value, list | tuple) else [value])
        return "; ".join(str(part) for part in parts)
    return str(exc)


def to_rpc_error(exc: Exception) -> RpcError:
    if isinstance(exc, RpcError):
        return exc
    if isinstance(exc, CustomerAlreadyExists):
        return RpcError(CONFLICT, error_message(exc))
    if isinstance(exc, ObjectNotFoundError):
        return RpcError(NOT_FOUND, error_message(exc))
    if isinstance(exc, ValidationError | PayloadError):
        return RpcError(BAD_REQUEST, error_message(exc))
    return RpcError(INTERNAL_SERVER_ERROR, "Internal server error")


@dataclass(frozen=True)
class Route:
    pattern: str
    handler: Callable[[BaseModel], Any]
    schema: type[BaseModel]
    expects_reply: bool
    guard_field: str | None = None


class MessageRouter:
    def __init__(self, domain, guard: CartGuard = cart_guard) -> None:
        self.domain = domain
        self.guard = guard
        self._routes: dict[str, Route] = {}

    # -------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------
    def _register(self, pattern, schema, expects_reply, guard_field):
        def decorator(fn):
            if pattern in self._routes:
                raise ValueError(f"Pattern {pattern!r} is already registered")
            self._routes[pattern] = Route(
                pattern=pattern,
                handler=fn,
                schema=schema,
                expects_reply=expects_reply,
                guard_field=guard_field,
            )
            return fn

        return decorator

    def message_pattern(self, pattern, *, schema, guard=None):
        """Register a request/reply handler."""
        return self._register(pattern, schema, True, guard)

    def event_pattern(self, pattern, *, schema, guard=None):
        """Register a fire-and-forget handler."""
        return self._register(pattern, schema, False, guard)

    @property
    def patterns(self) -> list[str]:
        return sorted(self._routes)

    def route_for(self, pattern) -> Route:
        try:
            return self._routes[pattern]
        except KeyError:
            raise RpcError(BAD_REQUEST, f"Unknown message pattern {pattern!r}") from None

    def event_route_for(self, pattern) -> Route:
        route = self.route_for(pattern)
        if route.expects_reply:
            raise RpcError(BAD_REQUEST, f"{pattern!r} is a request pattern and must be sent")
        return route

    # -------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------
    def _execute(self, route: Route, message: BaseModel) -> Any:
        with self.domain.domain_context():
            return route.handler(message)

    async def _in_thread(self, route: Route, message: BaseModel) -> Any:
        # A cancelled caller still waits for the worker, so the guard is never
        # released while a unit of work is running.
        work = asyncio.ensure_future(asyncio.to_thread(self._execute, route, message))
        try:
            return await asyncio.shield(work)
        except asyncio.CancelledError:
            await asyncio.wait({work})
            raise

    async def _dispatch(self, route: Route, payload: dict) -> Any:
        message = route.schema.model_validate(payload or {})
        if route.guard_field is None:
            return await self._in_thread(route, message)

        customer_id = getattr(message, route.guard_field)
        with log_context(customer_id=str(customer_id)):
            async with self.guard.hold(customer_id):
                return await self._in_thread(route, message)

    async def send(self, pattern: str, payload: dict) -> Any:
        """Process a request pattern and return its reply."""
        route = self.route_for(pattern)
        if not route.expects_reply:
            raise RpcError(BAD_REQUEST, f"{pattern!r} is an event pattern and sends no reply")

        with log_context(pattern=pattern):
            try:
                return await self._dispatch(route, payload)
            except Exception as exc:
                error = to_rpc_error(exc)
                if error.status == INTERNAL_SERVER_ERROR:
                    logger.exception("Message handling failed")
                else:
                    logger.info("Message rejected", status=error.status, reason=error.message)
                raise error from exc

    async def emit(self, pattern: str, payload: dict) -> None:
        """Process an event pattern. Nothing is returned, failures are logged."""
        with log_context(pattern=pattern):
            try:
                route = self.event_route_for(pattern)
                await self._dispatch(route, payload)
            except Exception as exc:
                error = to_rpc_error(exc)
                if error.status == INTERNAL_SERVER_ERROR:
                    logger.exception("Event handling failed")
                else:
                    logger.warning("Event dropped", status=error.status, reason=error.message)
