"""Core business logic layer.

Subpackages:
- shopping: shopping list aggregation, cost estimation and caching
- budget: weekly budget status and alert decisions
- pantry: pantry analysis helpers

Nothing in here performs I/O; collaborators are described in providers.
"""
__all__ = ["shopping", "budget", "pantry", "providers"]
