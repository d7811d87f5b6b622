"""Command-line interface for tilegraph."""
