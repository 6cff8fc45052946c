import httpx

from src.config import AppConfig
from src.quiz.domain.errors import FetchError, NetworkUnavailableError
from src.quiz.domain.ports import IDataProvider
from src.shared.telemetry import Telemetry, measure_time


class HttpDataProvider(IDataProvider):
    """
    Single GET per fetch, no retries.
    Pass `transport` to swap the network out (httpx.MockTransport in tests).
    """

    def __init__(
        self,
        timeout: float = AppConfig.FETCH_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.transport = transport
        self.telemetry = Telemetry("HttpDataProvider")

    @measure_time("http_fetch_document")
    def fetch(self, source_id: str) -> bytes:
        url = source_id.strip()
        if not url.lower().startswith(("http://", "https://")):
            raise FetchError(f"Unsupported source URL: {source_id!r}", source_id)

        try:
            with httpx.Client(
                timeout=self.timeout, transport=self.transport, follow_redirects=True
            ) as client:
                response = client.get(url, headers={"Accept": "application/json"})
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"Server answered {e.response.status_code} for {url}", source_id
            ) from e
        except httpx.TransportError as e:
            raise NetworkUnavailableError(f"Could not reach {url}: {e}", source_id) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"Could not fetch {url}: {e}", source_id) from e

        self.telemetry.log_info(
            "Document downloaded", url=url, size=len(response.content)
        )
        return response.content
