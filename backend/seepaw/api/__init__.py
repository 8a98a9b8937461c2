"""API Layer — FastAPI routes, identity dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes never touch the ORM directly; every operation goes through the Mediator
    - Failed Results become SeePawError before leaving the route

Design Decisions:
    - Thin routes delegate to services (ADR: impureim sandwich)
"""
