# scan_proxy/deps.py
from typing import AsyncIterator

import httpx
from fastapi import Depends, Request

from .settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_http_client(settings: Settings = Depends(get_settings)) -> AsyncIterator[httpx.AsyncClient]:
    # One client per inbound request, closed when the response is done.
    async with httpx.AsyncClient(timeout=settings.backend_timeout) as client:
        yield client
