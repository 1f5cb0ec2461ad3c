# scan_proxy/routers/scan.py
import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response

from ..deps import get_http_client, get_settings
from ..settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scan"])


@router.post("/scan")
async def scan(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Forward a multipart upload with an 'image' field to the detection backend
    and relay the backend's binary answer with its content-type.

    The body is passed through byte for byte (boundary included); the form is
    only parsed to check that 'image' is there.
    """
    try:
        # Read once; Starlette replays the cached body to request.form()
        body = await request.body()
        async with request.form() as form:
            has_image = "image" in form
        if not has_image:
            raise HTTPException(400, 'Missing "image" field')

        headers = {}
        if "content-type" in request.headers:
            headers["Content-Type"] = request.headers["content-type"]

        resp = await client.post(settings.detect_backend_url, content=body, headers=headers)
        if not resp.is_success:
            logger.warning("Detection backend error: %s %s", resp.status_code, resp.reason_phrase)
            raise HTTPException(502, "Failed to process image")

        content_type = resp.headers.get("content-type") or "application/octet-stream"
        return Response(content=resp.content, headers={"Content-Type": content_type})
    except HTTPException:
        raise
    except Exception:
        # includes Starlette's own HTTPException for a malformed multipart body
        logger.exception("Fetch error while scanning image")
        raise HTTPException(500, "Internal server error")
