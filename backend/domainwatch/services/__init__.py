"""Services — imperative shell around the pure core.

Invariants:
    - Services depend on core Protocols, never on routes
    - The reconciliation pass is the only writer of domain status

Design Decisions:
    - Functional core, imperative shell: decisions in core/, IO sequencing here
"""
