"""Store Rating Portal API."""
