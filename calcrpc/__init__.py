"""calcrpc: XML-RPC integer calculator: wire codec, dispatcher, server and client.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
