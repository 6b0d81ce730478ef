"""
Endpoint subpackage for API v1.

Each module defines an ``APIRouter`` for one area (health, auth,
hosting slots); ``router.py`` mounts them under their prefixes.
"""
