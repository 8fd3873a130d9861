"""FastAPI binding for the Customers message patterns.

``/rpc/{pattern}`` carries request/reply patterns and answers with the reply
or with the error's status code. ``/events/{pattern}`` accepts
fire-and-forget patterns and answers 202 before they are processed; unknown
patterns and request patterns are refused with 400 up front.
"""

import json

from fastapi import APIRouter, BackgroundTasks, Request
from fastapi.responses import JSONResponse

from customers.messaging.patterns import router as message_router
from customers.messaging.router import BAD_REQUEST, RpcError

router = APIRouter(tags=["messages"])


async def _payload(request: Request) -> dict:
    body = await request.body()
    if not body:
        return {}
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise RpcError(BAD_REQUEST, f"Malformed JSON body: {exc}") from exc
    if not isinstance(payload, dict):
        raise RpcError(BAD_REQUEST, "Message payload must be a JSON object")
    return payload


@router.post("/rpc/{pattern}")
async def request_reply(pattern: str, request: Request):
    try:
        payload = await _payload(request)
        result = await message_router.send(pattern, payload)
    except RpcError as exc:
        return JSONResponse(status_code=exc.status, content=exc.to_dict())
    return JSONResponse(content=result)


@router.post("/events/{pattern}", status_code=202)
async def fire_and_forget(pattern: str, request: Request, background_tasks: BackgroundTasks):
    try:
        message_router.event_route_for(pattern)
        payload = await _payload(request)
    except RpcError as exc:
        return JSONResponse(status_code=exc.status, content=exc.to_dict())
    background_tasks.add_task(message_router.emit, pattern, payload)
    return {"status": "accepted"}
