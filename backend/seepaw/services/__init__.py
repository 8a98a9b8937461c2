"""Services Layer — command/query handlers and the mediator that routes to them.

Invariants:
    - One handler class per area (animals, activities, ownership requests, ...)
    - Mediator uses explicit dict mapping (no auto-discovery)
    - Every handler method returns a Result; none raise for business-rule failures

Design Decisions:
    - One handler file per area for locality (ADR: no god objects)
"""
