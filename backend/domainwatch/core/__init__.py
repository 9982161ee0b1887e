"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (clocks are injected)

Design Decisions:
    - Functional core separated from imperative shell: the reconciliation
      pass orchestrates IO around transition/summary logic that lives here
"""
