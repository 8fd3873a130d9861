"""Customers service FastAPI application.

Exposes the message patterns over HTTP. The domain is initialized at module
level so uvicorn workers share it; each message pushes its own domain
context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from customers.domain import customers  # noqa: E402
from fastapi import FastAPI
from fastapi.responses import JSONResponse

customers.init()

from customers.api.routes import router  # noqa: E402
from customers.messaging.patterns import router as message_router  # noqa: E402

app = FastAPI(
    title="Customers Service",
    description="Customer records and their shopping carts",
)

app.include_router(router)


@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": customers.name,
            "patterns": message_router.patterns,
        }
    )
