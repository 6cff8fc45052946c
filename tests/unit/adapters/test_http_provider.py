import httpx
import pytest

from src.quiz.adapters.http_provider import HttpDataProvider
from src.quiz.domain.errors import FetchError, NetworkUnavailableError


def _provider(handler) -> HttpDataProvider:
    return HttpDataProvider(timeout=1.0, transport=httpx.MockTransport(handler))


class TestHttpDataProvider:
    def test_returns_response_body(self, wire_bytes):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=wire_bytes)

        body = _provider(handler).fetch("https://example.com/quiz.json")

        assert body == wire_bytes
        assert len(seen) == 1
        assert str(seen[0].url) == "https://example.com/quiz.json"
        assert seen[0].headers["accept"] == "application/json"

    def test_strips_whitespace_around_url(self):
        provider = _provider(lambda request: httpx.Response(200, content=b"[]"))
        assert provider.fetch("  https://example.com/q.json  ") == b"[]"

    @pytest.mark.parametrize("status", [404, 500])
    def test_error_status_raises_fetch_error(self, status):
        provider = _provider(lambda request: httpx.Response(status))

        with pytest.raises(FetchError, match=str(status)) as exc_info:
            provider.fetch("https://example.com/quiz.json")
        assert exc_info.value.source_id == "https://example.com/quiz.json"
        assert not isinstance(exc_info.value, NetworkUnavailableError)

    def test_transport_failure_means_network_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkUnavailableError, match="Could not reach"):
            _provider(handler).fetch("https://example.com/quiz.json")

    def test_no_retry_on_failure(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        with pytest.raises(FetchError):
            _provider(handler).fetch("https://example.com/quiz.json")
        assert len(calls) == 1

    @pytest.mark.parametrize("source", ["", "ftp://example.com/q.json", "quiz.json"])
    def test_non_http_source_rejected_without_request(self, source):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        with pytest.raises(FetchError, match="Unsupported") as exc_info:
            _provider(handler).fetch(source)
        assert not isinstance(exc_info.value, NetworkUnavailableError)
        assert calls == []

    def test_timeout_means_network_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(NetworkUnavailableError):
            _provider(handler).fetch("https://example.com/quiz.json")
