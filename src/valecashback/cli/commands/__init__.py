"""CLI commands for Vale Cashback."""
