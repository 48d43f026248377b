from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator


class QueryRequest(BaseModel):
    """Request payload for the query endpoint.

    Attributes:
        query: The user's question. Blank values are treated as missing.
    """

    query: str | None = None

    @field_validator("query", mode="before")
    @classmethod
    def strip_query(cls, v: str | None) -> str | None:
        """Strip whitespace from query before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class MessageResponse(BaseModel):
    """Body returned when a request is rejected before forwarding."""

    message: str


class ErrorEnvelope(BaseModel):
    """Body returned when the backend could not be reached or called.

    Attributes:
        message: Human-readable summary.
        details: Underlying error text.
    """

    message: str
    details: str


class RelayResponse(BaseModel):
    """Backend reply to a query, after sanitization.

    Attributes:
        status_code: Status returned by the backend.
        body: Structured data, or the raw text when no JSON could be recovered.
    """

    status_code: int
    body: Any = None


class Clause(BaseModel):
    """A document clause cited in support of a decision."""

    text: str = ""
    location: str | int | None = None


class Justification(BaseModel):
    clauses: list[Clause] = Field(default_factory=list)


class Answer(BaseModel):
    """Structured answer produced by the backend.

    Attributes:
        decision: The backend's verdict for the query.
        amount: Optional amount attached to the decision.
        justification: Clauses backing the decision, in order.
    """

    decision: str | None = None
    amount: int | float | str | None = None
    justification: Justification | None = None


class AnswerError(BaseModel):
    """Error reported for a query, by the backend or the relay."""

    error: str
    raw_output: str | None = None


class RawAnswer(BaseModel):
    """Reply that is not a structured answer, kept for display as-is."""

    content: Any = None


AnswerResult = Answer | AnswerError | RawAnswer


def parse_answer(body: Any) -> AnswerResult:
    """Map a relay query body to the view model shown in the UI.

    Args:
        body: Decoded JSON (or text) returned by the relay.

    Returns:
        AnswerError for backend errors and relay envelopes, Answer for
        structured results, RawAnswer for anything else.
    """
    if not isinstance(body, dict):
        return RawAnswer(content=body)

    if body.get("error"):
        return AnswerError(
            error=str(body["error"]),
            raw_output=_optional_text(body.get("raw_output")),
        )

    if "message" in body and "decision" not in body:
        return AnswerError(
            error=str(body["message"]),
            raw_output=_optional_text(body.get("details")),
        )

    try:
        return Answer.model_validate(body)
    except ValidationError:
        return RawAnswer(content=body)


def _optional_text(value: Any) -> str | None:
    return None if value is None else str(value)


class SelectedFile(BaseModel):
    """A document picked in the UI and not yet uploaded.

    Attributes:
        name: Original filename.
        content: File bytes.
        content_type: Declared MIME type.
    """

    name: str
    content: bytes
    content_type: str = "application/octet-stream"
