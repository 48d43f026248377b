"""Test package for the document Q&A relay.

Structure:
    - unit/: Individual function and class tests
    - integration/: Relay endpoints and UI client end to end

The question-answering backend is always replaced by an httpx MockTransport.
"""
