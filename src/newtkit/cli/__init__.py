"""Command-line interface for newtkit."""
