from fastapi import Header, HTTPException, Request


def require_api_key(request: Request, x_api_key: str = Header(default=None, alias="X-API-Key")):
    expected = request.app.state.settings.INGEST_API_KEY
    if not expected:
        return True
    if not x_api_key or x_api_key != expected:
        raise HTTPException(status_code=401, detail="Unauthorized (invalid API key)")
    return True
