"""Core utilities: error types and inflection helpers."""
