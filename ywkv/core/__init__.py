"""Core shared pieces: application exceptions."""
