import asyncio

import aiohttp
import pytest

from pdfsearch.app.domain.interfaces import DocumentFetchError
from pdfsearch.app.services.document_fetch_service import DocumentFetchService

SESSION_PATH = "pdfsearch.app.services.document_fetch_service.aiohttp.ClientSession"

PDF_BYTES = b"%PDF-1.4\n%fake document\n"


# Dummy aiohttp replacements
class DummyContent:
    def __init__(self, chunks):
        self.chunks = chunks

        self.served = 0

    async def iter_chunked(self, size):
        for chunk in self.chunks:
            self.served += 1

            yield chunk


class DummyResponse:
    def __init__(self, status=200, body=PDF_BYTES, content_length=None, chunks=None):
        self.status = status

        self.content = DummyContent(chunks if chunks is not None else [body])

        self.content_length = content_length

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        pass


class DummySession:
    # Response served for every request; tests replace it per case
    response = DummyResponse()

    requests = []

    def __init__(self, *args, **kwargs):
        self.kwargs = kwargs

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        pass

    def get(self, url, headers=None):
        DummySession.requests.append((url, headers, self.kwargs))

        return DummySession.response


class ErrorSession(DummySession):
    error = aiohttp.ClientError("network down")

    def get(self, *args, **kwargs):
        raise ErrorSession.error


@pytest.fixture
def dummy_session(monkeypatch):
    DummySession.response = DummyResponse()

    DummySession.requests = []

    monkeypatch.setattr(SESSION_PATH, DummySession)

    return DummySession


@pytest.fixture
def service():
    return DocumentFetchService(timeout=5, max_size_bytes=1024)


class TestDocumentFetchService:

    # A successful download returns the body and sends the browser user agent
    @pytest.mark.asyncio
    async def test_fetch_success(self, dummy_session, service):
        content = await service.fetch_pdf("https://example.com/doc.pdf")

        assert content == PDF_BYTES

        url, headers, kwargs = dummy_session.requests[0]

        assert url == "https://example.com/doc.pdf"

        assert headers == {"User-Agent": "Mozilla/5.0"}

        assert kwargs["timeout"].total == 5

    # Without a URL the configured default document is fetched
    @pytest.mark.asyncio
    async def test_fetch_default_url(self, dummy_session, service, monkeypatch):
        monkeypatch.setattr(
            "pdfsearch.app.services.document_fetch_service.get_config",
            lambda key, default=None: "https://example.com/default.pdf",
        )

        await service.fetch_pdf()

        assert dummy_session.requests[0][0] == "https://example.com/default.pdf"

    # Non-OK upstream responses keep their status
    @pytest.mark.asyncio
    async def test_upstream_status(self, dummy_session, service):
        dummy_session.response = DummyResponse(status=404)

        with pytest.raises(DocumentFetchError) as exc:
            await service.fetch_pdf("https://example.com/missing.pdf")

        assert exc.value.status_code == 404

        assert "404" in str(exc.value)

    # Declared and actual sizes are both checked against the limit
    @pytest.mark.asyncio
    async def test_too_large(self, dummy_session, service):
        dummy_session.response = DummyResponse(content_length=4096)

        with pytest.raises(DocumentFetchError) as exc:
            await service.fetch_pdf("https://example.com/big.pdf")

        assert exc.value.status_code == 413

        dummy_session.response = DummyResponse(body=b"x" * 2048)

        with pytest.raises(DocumentFetchError) as exc:
            await service.fetch_pdf("https://example.com/big.pdf")

        assert exc.value.status_code == 413

    # A chunked body without Content-Length stops downloading once past the cap
    @pytest.mark.asyncio
    async def test_too_large_streamed(self, dummy_session, service):
        dummy_session.response = DummyResponse(chunks=[b"x" * 512] * 64)

        with pytest.raises(DocumentFetchError) as exc:
            await service.fetch_pdf("https://example.com/stream.pdf")

        assert exc.value.status_code == 413

        assert dummy_session.response.content.served == 3

    # A chunked body under the cap is reassembled
    @pytest.mark.asyncio
    async def test_chunked_success(self, dummy_session, service):
        dummy_session.response = DummyResponse(chunks=[b"%PDF", b"-1.4", b"\n"])

        assert await service.fetch_pdf("https://example.com/small.pdf") == b"%PDF-1.4\n"

    # Network errors map to 502
    @pytest.mark.asyncio
    async def test_network_error(self, monkeypatch, service):
        ErrorSession.error = aiohttp.ClientError("network down")

        monkeypatch.setattr(SESSION_PATH, ErrorSession)

        with pytest.raises(DocumentFetchError) as exc:
            await service.fetch_pdf("https://example.com/doc.pdf")

        assert exc.value.status_code == 502

    # Timeouts map to 504
    @pytest.mark.asyncio
    async def test_timeout(self, monkeypatch, service):
        ErrorSession.error = asyncio.TimeoutError()

        monkeypatch.setattr(SESSION_PATH, ErrorSession)

        with pytest.raises(DocumentFetchError) as exc:
            await service.fetch_pdf("https://example.com/slow.pdf")

        assert exc.value.status_code == 504
