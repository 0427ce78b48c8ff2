"""
Core domain models, money primitives, error taxonomy and contracts.

This package contains the foundational building blocks that are independent
of external systems (HTTP layer, record store, UI).
"""
