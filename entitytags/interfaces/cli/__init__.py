"""Command line interface (etags)."""
