"""Command-line runner and order generation helpers."""
