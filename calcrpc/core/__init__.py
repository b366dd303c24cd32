"""Core Layer: codec, operation registry and dispatch. No IO, no async, no logging.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - All functions are pure and deterministic
"""
