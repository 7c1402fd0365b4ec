"""Command-line tools for the inline suggestions engine."""
