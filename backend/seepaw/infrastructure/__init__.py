"""Infrastructure Layer — database sessions, logging, external clients, background jobs.

Invariants:
    - Infrastructure never imports from core/ guard logic
    - All external calls wrapped with retry/timeout/error mapping

Design Decisions:
    - Resilient wrappers over raw clients (ADR: single responsibility)
"""
