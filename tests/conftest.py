import dataclasses

import httpx
import pytest
from fastapi.testclient import TestClient

from scan_proxy.deps import get_http_client
from scan_proxy.main import create_app
from scan_proxy.settings import Settings

ICONS_URL = "http://icons.test/api/icons"
DETECT_URL = "http://detect.test/yolo/detect"


@pytest.fixture
def settings():
    return Settings(
        yolo_retrain="http://yolo.test/retrain",
        yolo_add_train_image="http://yolo.test/add",
        yolo_bounding_boxes_endpoint="http://yolo.test/boxes",
        retinanet_retrain="http://retina.test/retrain",
        retinanet_add_train_image="http://retina.test/add",
        retinanet_bounding_boxes_endpoint="http://retina.test/boxes",
        icons_backend_url=ICONS_URL,
        detect_backend_url=DETECT_URL,
        backend_timeout=5.0,
    )


class Backend:
    """Fake backend behind httpx.MockTransport; records every request it sees."""

    def __init__(self, handler):
        self.handler = handler
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self.handler(request)

    @property
    def calls(self):
        return len(self.requests)


@pytest.fixture
def make_client(settings):
    def _make(handler, **settings_kw):
        s = settings
        if settings_kw:
            s = dataclasses.replace(s, **settings_kw)
        backend = Backend(handler)
        app = create_app(s, validate=not settings_kw)

        async def fake_http_client():
            async with httpx.AsyncClient(transport=httpx.MockTransport(backend)) as client:
                yield client

        app.dependency_overrides[get_http_client] = fake_http_client
        return TestClient(app), backend

    return _make
