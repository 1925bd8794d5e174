"""Command line interface for witu."""
