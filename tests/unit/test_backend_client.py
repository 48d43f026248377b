"""Unit tests for BackendClient forwarding and failure classification."""

import json

import httpx
import pytest

from docrelay.backend.client import (
    BackendClient,
    BackendStatusError,
    BackendUnavailableError,
    RelayRequestError,
)
from tests.conftest import BackendStub


class TestAskQuery:
    """Tests for query forwarding and reply sanitization."""

    async def test_sends_query_as_json(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        await backend_client.ask_query("Is knee surgery covered?")

        assert len(backend_stub.requests) == 1
        request = backend_stub.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "http://backend.test/ask-query"
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {"query": "Is knee surgery covered?"}

    async def test_structured_reply_passes_through(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        backend_stub.respond(200, json={"decision": "approved", "amount": 1200})

        reply = await backend_client.ask_query("q")

        assert reply.status_code == 200
        assert reply.body == {"decision": "approved", "amount": 1200}

    async def test_text_reply_with_embedded_object_is_parsed(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        backend_stub.respond(
            200, text='Preamble text {"decision":"approved","amount":500} trailing'
        )

        reply = await backend_client.ask_query("q")

        assert reply.body == {"decision": "approved", "amount": 500}

    async def test_json_string_reply_is_sanitized(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        """A JSON-encoded string is decoded first, then searched for an object."""
        backend_stub.respond(200, json='```json\n{"decision": "rejected"}\n```')

        reply = await backend_client.ask_query("q")

        assert reply.body == {"decision": "rejected"}

    async def test_text_reply_without_object_is_unchanged(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        backend_stub.respond(200, text="not json at all")

        reply = await backend_client.ask_query("q")

        assert reply.body == "not json at all"

    async def test_json_reply_with_nan_falls_back_to_text(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        """A JSON body using NaN is not standard JSON and stays text."""
        raw = b'{"decision":"approved","amount":NaN}'
        backend_stub.respond(200, content=raw, headers={"content-type": "application/json"})

        reply = await backend_client.ask_query("q")

        assert reply.body == raw.decode()

    async def test_text_reply_with_infinity_is_unchanged(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        backend_stub.respond(200, text='LOG {"decision": "approved", "amount": Infinity} end')

        reply = await backend_client.ask_query("q")

        assert reply.body == 'LOG {"decision": "approved", "amount": Infinity} end'

    async def test_success_status_is_preserved(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        backend_stub.respond(202, json={"decision": "pending"})

        reply = await backend_client.ask_query("q")

        assert reply.status_code == 202


class TestUploadDocument:
    async def test_sends_multipart_with_filename_and_type(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        response = await backend_client.upload_document(
            "policy.pdf", b"%PDF-1.4 body", "application/pdf"
        )

        assert response.status_code == 200
        request = backend_stub.requests[0]
        assert str(request.url) == "http://backend.test/upload-document"
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert b'name="file"; filename="policy.pdf"' in request.content
        assert b"Content-Type: application/pdf" in request.content
        assert b"%PDF-1.4 body" in request.content

    async def test_missing_content_type_defaults_to_octet_stream(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        await backend_client.upload_document("notes.bin", b"\x00\x01", None)

        assert b"Content-Type: application/octet-stream" in backend_stub.requests[0].content

    async def test_large_file_is_forwarded_whole(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        content = b"x" * (12 * 1024 * 1024)

        await backend_client.upload_document("big.txt", content, "text/plain")

        assert content in backend_stub.requests[0].content


class TestFailureClassification:
    """Tests for the status / unreachable / local failure cascade."""

    async def test_error_status_raises_with_backend_body(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        backend_stub.respond(
            422,
            content=b'{"error": "Unsupported file type"}',
            headers={"content-type": "application/json"},
        )

        with pytest.raises(BackendStatusError) as exc_info:
            await backend_client.upload_document("a.exe", b"MZ", "application/x-msdownload")

        assert exc_info.value.status_code == 422
        assert exc_info.value.content == b'{"error": "Unsupported file type"}'
        assert exc_info.value.content_type == "application/json"

    async def test_server_error_status_raises(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        backend_stub.respond(500, text="Internal Server Error")

        with pytest.raises(BackendStatusError) as exc_info:
            await backend_client.ask_query("q")

        assert exc_info.value.status_code == 500
        assert exc_info.value.content == b"Internal Server Error"

    async def test_error_status_body_is_not_sanitized(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        backend_stub.respond(500, text='Traceback ... {"error": "boom"}')

        with pytest.raises(BackendStatusError) as exc_info:
            await backend_client.ask_query("q")

        assert exc_info.value.content == b'Traceback ... {"error": "boom"}'

    async def test_redirect_status_is_not_an_error(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        backend_stub.respond(304)

        reply = await backend_client.ask_query("q")

        assert reply.status_code == 304

    async def test_connection_refused_is_unavailable(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        backend_stub.fail(httpx.ConnectError("[Errno 111] Connection refused"))

        with pytest.raises(BackendUnavailableError) as exc_info:
            await backend_client.ask_query("q")

        assert exc_info.value.details == "[Errno 111] Connection refused"
        assert len(backend_stub.requests) == 1

    async def test_timeout_is_unavailable(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        backend_stub.fail(httpx.ReadTimeout("timed out"))

        with pytest.raises(BackendUnavailableError) as exc_info:
            await backend_client.upload_document("a.pdf", b"%PDF", "application/pdf")

        assert "timed out" in exc_info.value.details

    async def test_missing_protocol_is_local_failure(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        backend_stub.fail(httpx.UnsupportedProtocol("Request URL is missing a protocol."))

        with pytest.raises(RelayRequestError) as exc_info:
            await backend_client.ask_query("q")

        assert "missing a protocol" in exc_info.value.details

    async def test_unexpected_exception_is_local_failure(
        self, backend_client: BackendClient, backend_stub: BackendStub
    ) -> None:
        backend_stub.fail(ValueError("cannot encode payload"))

        with pytest.raises(RelayRequestError) as exc_info:
            await backend_client.ask_query("q")

        assert exc_info.value.details == "cannot encode payload"

    async def test_real_transport_to_closed_port_is_unavailable(
        self, relay_config
    ) -> None:
        """Nothing listens on port 9 locally, so the connection is refused."""
        config = relay_config.model_copy(
            update={"backend_url": "http://127.0.0.1:9", "backend_timeout": 5.0}
        )
        client = BackendClient(config)

        with pytest.raises(BackendUnavailableError):
            await client.ask_query("q")
