"""Forwarding endpoints for document uploads and queries.

Validates the inbound request, then hands it to the backend client.
Backend failures surface as BackendError subclasses, rendered by the
exception handlers registered in the app factory.
"""

import logging

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from fastapi.responses import JSONResponse

from docrelay.backend.client import BackendClient, get_backend_client
from docrelay.models.schemas import MessageResponse, QueryRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["relay"])

# Statuses that must not carry a response body
NO_BODY_STATUSES = {204, 205, 304}


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=MessageResponse(message=message).model_dump(),
    )


@router.post("/upload-document")
async def upload_document(
    file: UploadFile | None = File(None),
    backend: BackendClient = Depends(get_backend_client),
) -> Response:
    """Forward an uploaded document to the backend.

    Args:
        file: The uploaded document (multipart/form-data, field "file").
        backend: Client for the question-answering backend.

    Returns:
        The backend's status and body, unchanged.

    Raises:
        400: No file in the request (backend is not called).
        503: Backend unreachable.
        500: Outbound request could not be built.
    """
    logger.info("Received file upload request")

    if file is None:
        return _bad_request("No file provided in the request.")

    content = await file.read()
    reply = await backend.upload_document(
        filename=file.filename or "upload",
        content=content,
        content_type=file.content_type,
    )

    return Response(
        content=reply.content,
        status_code=reply.status_code,
        media_type=reply.headers.get("content-type"),
    )


@router.post("/ask-query")
async def ask_query(
    payload: QueryRequest | None = None,
    backend: BackendClient = Depends(get_backend_client),
) -> Response:
    """Forward a question to the backend.

    String replies that embed a JSON object are replaced by the parsed
    object; anything else is relayed as-is.

    Args:
        payload: JSON body with the "query" string.
        backend: Client for the question-answering backend.

    Returns:
        The backend's status with the (possibly recovered) body.

    Raises:
        400: Query missing or blank (backend is not called).
        503: Backend unreachable.
        500: Outbound request could not be built.
    """
    logger.info("Received query request")

    if payload is None or not payload.query:
        return _bad_request("No query string provided in the request body.")

    reply = await backend.ask_query(payload.query)
    if reply.status_code < 200 or reply.status_code in NO_BODY_STATUSES:
        return Response(status_code=reply.status_code)
    return JSONResponse(status_code=reply.status_code, content=reply.body)
