"""
Service layer.

``SlotStore`` owns the SQLite table; ``SlotService`` owns validation
and error wording.  Both are constructed explicitly by ``create_app``
(or by tests) rather than living as module-level singletons.
"""
