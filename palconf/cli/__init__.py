"""Command implementations for the palconf CLI."""
