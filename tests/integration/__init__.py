"""Integration tests for the relay and the UI client working together.

Coverage:
    - Relay endpoints with real HTTP requests through ASGITransport
    - UI submission handlers calling the in-process relay

The backend is simulated with a recording httpx MockTransport.
"""
