"""Command-line interface for Provisio."""
