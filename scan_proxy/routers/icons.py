# scan_proxy/routers/icons.py
import json
import logging
from typing import List

import httpx
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from pydantic import AnyUrl, TypeAdapter, ValidationError

from ..deps import get_http_client, get_settings
from ..settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["icons"])

icon_list = TypeAdapter(List[AnyUrl])


@router.get("/icons")
async def list_icons(
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Relay the icon URL list from the icons backend, rejecting it if any entry is not a URL."""
    try:
        resp = await client.get(settings.icons_backend_url)

        if not resp.is_success:
            logger.warning("Icons backend error: %s %s", resp.status_code, resp.reason_phrase)
            raise HTTPException(502, "Failed to fetch icons from backend")

        try:
            data = resp.json()
            icon_list.validate_python(data)
        except ValidationError as e:
            logger.error("Invalid icon format from backend: %s", e.errors(include_url=False))
            raise HTTPException(500, "Invalid icon data format")
        except ValueError as e:
            logger.error("Icons backend returned non-JSON body: %s", e)
            raise HTTPException(500, "Invalid icon data format")

        # relay the strings as received, AnyUrl would normalize them
        return Response(content=json.dumps(data), media_type="application/json")
    except HTTPException:
        raise
    except Exception:
        logger.exception("Fetch error while listing icons")
        raise HTTPException(500, "Internal error")
