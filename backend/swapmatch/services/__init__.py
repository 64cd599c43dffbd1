"""Services Layer: wiring between the HTTP shell and the swap core.

Invariants:
    - Services hold no business rules; transitions live in core/swap_registry
"""
