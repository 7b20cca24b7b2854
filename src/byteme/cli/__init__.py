"""Command-line tools for byteme."""
