"""Unit tests for individual components in isolation.

Coverage:
    - backend/: Sanitization and failure classification
    - models/: Pydantic validation and answer mapping
    - ui/: Form state and submission handlers
    - config: Environment-driven settings
"""
