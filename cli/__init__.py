"""Command-line interface for smfreader."""
