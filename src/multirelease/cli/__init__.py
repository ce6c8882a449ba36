"""Command-line interface for multi-release."""
