"""Shared test helpers (fake package sources, zip builders, fake HTTP responses)."""
