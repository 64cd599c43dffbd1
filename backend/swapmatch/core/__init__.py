"""Core Layer: pure swap domain logic, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from api/, schemas/ or infrastructure/
    - Collaborators (identity, items, clock, events) reached only via repository_protocols

Design Decisions:
    - Functional core (enforce_swap) separated from the stateful registry
"""
