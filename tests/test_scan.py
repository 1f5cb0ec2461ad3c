import httpx

from conftest import DETECT_URL

PNG = b"\x89PNG\r\n\x1a\n\x00\x00binary-detections\xff\x00"


def png_backend(request):
    return httpx.Response(200, content=PNG, headers={"Content-Type": "image/png"})


def test_missing_image_field_is_400_without_backend_call(make_client):
    client, backend = make_client(png_backend)

    r = client.post("/api/scan", files={"photo": ("a.jpg", b"jpeg", "image/jpeg")})

    assert r.status_code == 400
    assert r.json() == {"detail": 'Missing "image" field'}
    assert backend.calls == 0


def test_non_multipart_body_is_400(make_client):
    client, backend = make_client(png_backend)

    r = client.post("/api/scan", json={"image": "abc"})

    assert r.status_code == 400
    assert backend.calls == 0


def test_relays_binary_body_and_content_type(make_client):
    client, backend = make_client(png_backend)

    r = client.post("/api/scan", files={"image": ("frame.jpg", b"jpeg-bytes", "image/jpeg")})

    assert r.status_code == 200
    assert r.content == PNG
    assert r.headers["content-type"] == "image/png"
    assert backend.calls == 1


def test_multipart_body_forwarded_unmodified(make_client):
    client, backend = make_client(png_backend)
    body = (
        b"--XyZboundary123\r\n"
        b'Content-Disposition: form-data; name="image"; filename="frame.jpg"\r\n'
        b"Content-Type: image/jpeg\r\n"
        b"\r\n"
        b"\xff\xd8jpeg-bytes\xff\xd9\r\n"
        b"--XyZboundary123\r\n"
        b'Content-Disposition: form-data; name="confidence"\r\n'
        b"\r\n"
        b"0.4\r\n"
        b"--XyZboundary123--\r\n"
    )

    r = client.post(
        "/api/scan",
        content=body,
        headers={"Content-Type": "multipart/form-data; boundary=XyZboundary123"},
    )

    assert r.status_code == 200
    sent = backend.requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == DETECT_URL
    assert sent.headers["content-type"] == "multipart/form-data; boundary=XyZboundary123"
    assert sent.content == body


def test_missing_backend_content_type_defaults_to_octet_stream(make_client):
    client, _ = make_client(lambda request: httpx.Response(200, content=b"\x00\x01"))

    r = client.post("/api/scan", files={"image": ("f.jpg", b"x", "image/jpeg")})

    assert r.status_code == 200
    assert r.headers["content-type"] == "application/octet-stream"
    assert r.content == b"\x00\x01"


def test_backend_error_status_maps_to_502(make_client):
    client, _ = make_client(lambda request: httpx.Response(422, json={"detail": "model exploded"}))

    r = client.post("/api/scan", files={"image": ("f.jpg", b"x", "image/jpeg")})

    assert r.status_code == 502
    assert r.json() == {"detail": "Failed to process image"}
    assert "exploded" not in r.text


def test_backend_exception_maps_to_500(make_client):
    def boom(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client, backend = make_client(boom)

    r = client.post("/api/scan", files={"image": ("f.jpg", b"x", "image/jpeg")})

    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}
    assert backend.calls == 1


def test_malformed_multipart_maps_to_500(make_client):
    client, backend = make_client(png_backend)

    r = client.post(
        "/api/scan",
        content=b"this is not multipart",
        headers={"Content-Type": "multipart/form-data"},
    )

    assert r.status_code == 500
    assert backend.calls == 0
