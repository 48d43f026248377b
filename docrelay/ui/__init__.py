"""NiceGUI interface - thin presentation layer for document Q&A.

Responsibilities:
    - File picker and upload form
    - Query form and structured answer display
    - Transient status messages
    - Dark/light theme toggle

Contains no relay logic. All requests go through the relay over HTTP.
"""
