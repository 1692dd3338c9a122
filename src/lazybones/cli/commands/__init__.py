"""Top-level Lazybones commands."""
