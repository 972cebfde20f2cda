"""Command-line interface and console display."""
