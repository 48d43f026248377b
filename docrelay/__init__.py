"""Document Q&A relay - upload documents and ask questions about them.

Combines FastAPI for the HTTP relay, httpx for calls to the question-answering
backend, NiceGUI for the browser interface, and Pydantic for data validation.

Components:
    - api: Relay endpoints and error rendering
    - backend: Outbound calls to the backend and response sanitization
    - ui: Web interface for uploads and queries
    - models: Request/response schemas
"""

__version__ = "0.1.0"
