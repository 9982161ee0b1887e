"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports services/ or api/
    - All external calls wrapped with timeout and error mapping

Design Decisions:
    - Thin adapters over httpx: the oracle and the email provider are plain
      HTTP APIs, no vendor SDK needed
"""
