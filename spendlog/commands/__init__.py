"""Command implementations for the spendlog CLI."""
