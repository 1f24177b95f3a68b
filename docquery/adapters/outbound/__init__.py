"""Outbound adapters: external services consumed by the core."""
