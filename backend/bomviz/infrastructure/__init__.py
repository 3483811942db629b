"""Infrastructure Layer — HTTP fetching, rendering bridge and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All transport failures mapped to core/errors.py types

Design Decisions:
    - Thin wrappers over httpx and logging, injected into services
"""
