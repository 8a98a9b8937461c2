"""Pydantic Schemas — request/response DTOs for API endpoints.

Invariants:
    - Request schemas validate at the system boundary (formats, lengths, ranges)
    - Response schemas are built from ORM rows by services/map_dtos.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
