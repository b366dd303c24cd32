"""Infrastructure Layer: HTTP client and logging setup.

Invariants:
    - External calls map every failure to a CalcRpcError subclass
"""
