"""FastAPI relay in front of the question-answering backend.

Stateless forwarding routes with async request handling.

Endpoints:
    - GET /health: Service health status
    - POST /upload-document: Forward a document to the backend
    - POST /ask-query: Forward a question and sanitize the answer
"""

from docrelay.api.app import app, create_app

__all__ = ["app", "create_app"]
