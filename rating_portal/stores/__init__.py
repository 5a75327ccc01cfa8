"""Data stores for persistence.

Stores handle:
- PostgreSQL: engine, sessions, ORM base

No business/rating logic in stores - that belongs in services.
"""
