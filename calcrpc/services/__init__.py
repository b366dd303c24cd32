"""Services Layer: per-request RPC pipeline wrapping the pure core."""
