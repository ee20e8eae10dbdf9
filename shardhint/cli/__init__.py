"""Command line interface for shardhint."""
