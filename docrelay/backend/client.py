"""httpx client for the question-answering backend.

Every call makes exactly one outbound request: no retries, no cancellation.
A failed call ends in one of three outcomes, checked in this order:

1. The backend answered with a 4xx/5xx status -> BackendStatusError, carrying
   the backend's status and body untouched.
2. No response was received (refused connection, timeout, DNS failure)
   -> BackendUnavailableError, carrying the transport error text.
3. The request could not be built or sent for any other reason
   -> RelayRequestError.
"""

import logging
from typing import Any

import httpx

from docrelay.backend.sanitize import loads_strict, sanitize_body
from docrelay.config import RelayConfig, get_config
from docrelay.models.schemas import RelayResponse

logger = logging.getLogger(__name__)

UPLOAD_PATH = "/upload-document"
QUERY_PATH = "/ask-query"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class BackendError(Exception):
    """Base class for failed calls to the backend."""

    pass


class BackendStatusError(BackendError):
    """Raised when the backend answers with an error status.

    Attributes:
        status_code: Status returned by the backend.
        content: Raw response body.
        content_type: Response media type, if the backend sent one.
    """

    def __init__(self, status_code: int, content: bytes, content_type: str | None) -> None:
        super().__init__(f"Backend responded with status {status_code}")
        self.status_code = status_code
        self.content = content
        self.content_type = content_type


class BackendUnavailableError(BackendError):
    """Raised when no response was received from the backend."""

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details


class RelayRequestError(BackendError):
    """Raised when the outbound request fails before reaching the network."""

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details


def _decode_body(response: httpx.Response) -> Any:
    """Decode a reply as standard JSON, falling back to its text."""
    try:
        return loads_strict(response.text)
    except ValueError:
        return response.text


class BackendClient:
    """Forwards uploads and queries to the backend.

    Stateless: each call opens its own httpx client, so concurrent requests
    share nothing.
    """

    def __init__(
        self,
        config: RelayConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the backend client.

        Args:
            config: Optional relay configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport (tests use a mock backend).
        """
        self._config = config or get_config()
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._config.backend_url

    async def _post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send one POST to the backend and classify the outcome.

        Raises:
            BackendStatusError: Backend answered with 4xx/5xx.
            BackendUnavailableError: No response received.
            RelayRequestError: Request could not be built or sent.
        """
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.backend_timeout),
                transport=self._transport,
            ) as client:
                response = await client.post(url, **kwargs)
        except httpx.UnsupportedProtocol as e:
            logger.error(f"Error setting up request to {url}: {e}")
            raise RelayRequestError(str(e)) from e
        except httpx.TransportError as e:
            logger.error(
                f"No response received from backend. Is it running at {self.base_url}? ({e!r})"
            )
            raise BackendUnavailableError(str(e)) from e
        except Exception as e:
            logger.error(f"Error setting up request to {url}: {e}")
            raise RelayRequestError(str(e)) from e

        if response.is_error:
            logger.error(f"Backend responded with error status: {response.status_code}")
            logger.error(f"Backend error data: {response.text}")
            raise BackendStatusError(
                status_code=response.status_code,
                content=response.content,
                content_type=response.headers.get("content-type"),
            )

        return response

    async def upload_document(
        self,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> httpx.Response:
        """Forward a document to the backend as multipart form data.

        The original filename and content type are preserved; no size limit
        is applied.

        Args:
            filename: Original filename of the upload.
            content: File bytes.
            content_type: Declared MIME type.

        Returns:
            The backend's reply.
        """
        logger.info(f"Forwarding file '{filename}' to backend at {self.base_url}{UPLOAD_PATH}")
        files = {"file": (filename, content, content_type or DEFAULT_CONTENT_TYPE)}
        response = await self._post(UPLOAD_PATH, files=files)
        logger.info("File upload response received from backend")
        return response

    async def ask_query(self, query: str) -> RelayResponse:
        """Forward a query to the backend as JSON and sanitize the reply.

        Args:
            query: The user's question.

        Returns:
            RelayResponse with the backend status and the (possibly
            recovered) body.
        """
        logger.info(f"Forwarding query '{query}' to backend at {self.base_url}{QUERY_PATH}")
        response = await self._post(QUERY_PATH, json={"query": query})
        logger.info("Query response received from backend")

        body = _decode_body(response)
        return RelayResponse(status_code=response.status_code, body=sanitize_body(body))


# Module-level singleton instance
_backend_client: BackendClient | None = None


def get_backend_client() -> BackendClient:
    """Get or create the global backend client.

    Returns:
        The BackendClient instance.
    """
    global _backend_client
    if _backend_client is None:
        _backend_client = BackendClient()
    return _backend_client
