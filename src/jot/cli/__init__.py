"""Command-line entry point, composition root and command registry."""
