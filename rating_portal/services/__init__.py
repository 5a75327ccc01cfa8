"""Business logic services.

Services own the rules (authentication, authorization, rating upsert and
aggregation, account lifecycle); routers stay thin.
"""
