"""Command-line interface for docquery."""
