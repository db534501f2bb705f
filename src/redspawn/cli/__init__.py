"""Command-line interface for redspawn."""
