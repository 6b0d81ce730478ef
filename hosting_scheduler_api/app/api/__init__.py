"""
API package containing versioned routes.

A version subpackage (currently only ``v1``) exposes a top‑level
``router`` that bundles its endpoint modules.
"""
