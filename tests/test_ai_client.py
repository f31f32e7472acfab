"""
Tests for the VidyaNav backend client
"""
import httpx
import pytest

from app.services.ai import BackendError, VidyaNavClient


def _client(handler):
    return VidyaNavClient(base_url="http://backend.test/", timeout=5, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_json_reply_is_parsed():
    vidyanav = _client(lambda request: httpx.Response(200, json={"answer": "ok"}))
    try:
        assert await vidyanav.ask_assistant("hello") == {"answer": "ok"}
    finally:
        await vidyanav.disconnect()


@pytest.mark.asyncio
async def test_text_reply_stays_text():
    vidyanav = _client(lambda request: httpx.Response(200, text="done"))
    try:
        assert await vidyanav.generate_visual_aid("tree") == "done"
    finally:
        await vidyanav.disconnect()


@pytest.mark.asyncio
async def test_error_status_raises_backend_error():
    vidyanav = _client(lambda request: httpx.Response(503, text="overloaded"))
    try:
        with pytest.raises(BackendError) as exc:
            await vidyanav.generate_visual_aid("tree", 3)
        assert exc.value.status_code == 503
        assert exc.value.detail == "overloaded"
    finally:
        await vidyanav.disconnect()


@pytest.mark.asyncio
async def test_transport_error_raises_backend_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    vidyanav = _client(handler)
    try:
        with pytest.raises(BackendError) as exc:
            await vidyanav.ask_assistant("hello")
        assert exc.value.status_code is None
    finally:
        await vidyanav.disconnect()


@pytest.mark.asyncio
async def test_worksheet_request_shape():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"grade_1": "text"})

    vidyanav = _client(handler)
    try:
        await vidyanav.generate_worksheet(("page.jpg", b"jpeg", "image/jpeg"), "Class 1, Class 2", "Kannada")
    finally:
        await vidyanav.disconnect()

    request = seen[0]
    assert str(request.url) == "http://backend.test/generate-worksheet/"
    assert b'name="grades"' in request.content
    assert b"Class 1, Class 2" in request.content
    assert b'filename="page.jpg"' in request.content


def test_base_url_is_trimmed():
    assert VidyaNavClient(base_url="http://backend.test/").base_url == "http://backend.test"
