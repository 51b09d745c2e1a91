"""Command implementations for the jico CLI."""
