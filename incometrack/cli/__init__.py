"""Command-line interface for Income Track."""
