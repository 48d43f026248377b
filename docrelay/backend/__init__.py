"""Outbound calls to the question-answering backend.

Responsibilities:
    - Forwarding uploads as multipart and queries as JSON
    - Classifying failures (backend error status, unreachable backend,
      local request failure)
    - Recovering JSON objects embedded in string replies

Keeps the HTTP layer free of httpx details.
"""

from docrelay.backend.client import (
    BackendClient,
    BackendError,
    BackendStatusError,
    BackendUnavailableError,
    RelayRequestError,
    get_backend_client,
)
from docrelay.backend.sanitize import extract_embedded_json

__all__ = [
    "BackendClient",
    "BackendError",
    "BackendStatusError",
    "BackendUnavailableError",
    "RelayRequestError",
    "extract_embedded_json",
    "get_backend_client",
]
