"""Shared helpers for file I/O and nested mapping manipulation."""
