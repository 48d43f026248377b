"""Client-side submission logic for the document Q&A page.

The upload and query forms share one FormState. While either submission is
in flight the shared busy flag is set and further submissions are ignored.
Handlers never raise: every outcome ends up as a status message and, for
queries, an answer.
"""

import asyncio
import logging
from typing import Any

import httpx

from docrelay.models.schemas import AnswerResult, SelectedFile, parse_answer

logger = logging.getLogger(__name__)

MESSAGE_TIMEOUT = 3.0  # seconds a status message stays visible
REQUEST_TIMEOUT = 120.0

NETWORK_HINT = "Make sure the relay and the question-answering backend are running."


class StatusMessage:
    """Transient status line that clears itself after a fixed delay.

    Every new message restarts the delay.
    """

    def __init__(self, clear_after: float = MESSAGE_TIMEOUT) -> None:
        self.text: str = ""
        self.clear_after = clear_after
        self._timer: asyncio.TimerHandle | None = None

    def show(self, text: str) -> None:
        self._cancel_timer()
        self.text = text
        if text:
            loop = asyncio.get_running_loop()
            self._timer = loop.call_later(self.clear_after, self.clear)

    def clear(self) -> None:
        self._cancel_timer()
        self.text = ""

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class FormState:
    """State shared by the upload and query forms of one page."""

    def __init__(self, clear_after: float = MESSAGE_TIMEOUT) -> None:
        self.busy: bool = False
        self.selected_file: SelectedFile | None = None
        self.answer: AnswerResult | None = None
        self.status = StatusMessage(clear_after)

    def select_file(self, file: SelectedFile | None) -> None:
        """Replace the pending file and reset any previous outcome."""
        self.selected_file = file
        self.status.clear()
        self.answer = None


async def receive_file(state: FormState, event: Any) -> None:
    """Store a file picked in the uploader as the pending upload.

    The uploader widget is reset afterwards so that the next pick replaces
    this file instead of being refused by the one-file limit.

    Args:
        state: Shared form state.
        event: Upload event carrying the picked file and its sender widget.
    """
    content = await event.file.read()
    state.select_file(
        SelectedFile(
            name=event.file.name,
            content=content,
            content_type=event.file.content_type or "application/octet-stream",
        )
    )
    event.sender.reset()


def _read_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _body_message(body: Any) -> str | None:
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


class RelayClient:
    """Submits uploads and queries to the relay on behalf of the page."""

    def __init__(
        self,
        base_url: str,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def upload_document(self, state: FormState) -> None:
        """Upload the selected file through the relay.

        Args:
            state: Shared form state; its selected file is sent.
        """
        if state.busy:
            return
        if state.selected_file is None:
            state.status.show("Please select a file!")
            return

        file = state.selected_file
        state.busy = True
        state.answer = None
        state.status.show("Uploading and processing file...")

        try:
            async with self._client() as client:
                response = await client.post(
                    "/upload-document",
                    files={"file": (file.name, file.content, file.content_type)},
                )
            body = _read_body(response)

            if response.is_success:
                state.status.show(_body_message(body) or "File uploaded successfully.")
            else:
                state.status.show(f"Error: {_body_message(body) or 'File upload failed'}")
        except httpx.RequestError as e:
            logger.error(f"Error uploading file: {e!r}")
            state.status.show(f"Network error: {e}. {NETWORK_HINT}")
        finally:
            state.busy = False

    async def ask_query(self, state: FormState, query: str) -> None:
        """Send a question through the relay and store the answer.

        The relay's body becomes the current answer whatever the status.

        Args:
            state: Shared form state; receives the answer.
            query: The question typed by the user.
        """
        if state.busy:
            return
        query = query.strip()
        if not query:
            state.status.show("Please enter a query!")
            return

        state.busy = True
        state.answer = None
        state.status.show("Getting answer...")

        try:
            async with self._client() as client:
                response = await client.post("/ask-query", json={"query": query})
            body = _read_body(response)
            state.answer = parse_answer(body)

            if response.is_success:
                state.status.show("Query answered successfully!")
            else:
                state.status.show(f"Error: {_body_message(body) or 'Failed to get answer'}")
        except httpx.RequestError as e:
            logger.error(f"Error asking query: {e!r}")
            state.status.show(f"Network error: {e}. {NETWORK_HINT}")
        finally:
            state.busy = False
