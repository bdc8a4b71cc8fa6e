"""Command-line interface for DiffKit."""
