"""Swap Matching Service: proposal, counter-offer and completion of item swaps.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
