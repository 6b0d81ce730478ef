"""
Top‑level package for the Hosting Scheduler API.

Marks ``hosting_scheduler_api`` as a package so that modules within
``app`` can be imported with fully qualified names such as
``hosting_scheduler_api.app.main`` from tests and entry scripts.
"""

__all__ = []
