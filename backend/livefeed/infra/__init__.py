"""Adapters binding service ports to concrete libraries."""
