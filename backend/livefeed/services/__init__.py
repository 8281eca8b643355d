"""Application services: account, post command/query and their shared helpers."""
