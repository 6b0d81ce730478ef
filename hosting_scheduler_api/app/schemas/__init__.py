"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the SQLite rows so that the API
representation can evolve independently of the table layout.
"""
