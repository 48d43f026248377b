"""Pydantic models for relay requests, responses and answers.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - QueryRequest: Incoming question payload
    - MessageResponse / ErrorEnvelope: Relay error bodies
    - RelayResponse: Backend reply after sanitization
    - Answer / AnswerError / RawAnswer: Client-side view of a query result
    - SelectedFile: Document waiting to be uploaded from the UI
"""

from docrelay.models.schemas import (
    Answer,
    AnswerError,
    AnswerResult,
    Clause,
    ErrorEnvelope,
    Justification,
    MessageResponse,
    QueryRequest,
    RawAnswer,
    RelayResponse,
    SelectedFile,
    parse_answer,
)

__all__ = [
    "Answer",
    "AnswerError",
    "AnswerResult",
    "Clause",
    "ErrorEnvelope",
    "Justification",
    "MessageResponse",
    "QueryRequest",
    "RawAnswer",
    "RelayResponse",
    "SelectedFile",
    "parse_answer",
]
