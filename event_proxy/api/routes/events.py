from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from fastapi.concurrency import run_in_threadpool

from event_proxy.core.security import require_api_key

router = APIRouter()


@router.post("/events", response_class=PlainTextResponse)
async def ingest_event(request: Request, _=Depends(require_api_key)):
    body = await request.body()

    # Proxy.handle blocks on the queue backend
    result = await run_in_threadpool(request.app.state.proxy.handle, body)

    return PlainTextResponse(result.text, status_code=result.status_code)
