"""Command-line interface for sqlrow."""
