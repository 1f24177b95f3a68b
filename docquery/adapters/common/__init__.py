"""Adapter-level helpers shared by the API and CLI."""
