"""Command line entry point for Cataloog BP."""
