"""Command-line interface for simplexfit."""
