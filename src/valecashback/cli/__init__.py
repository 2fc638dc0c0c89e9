"""CLI layer for Vale Cashback."""
