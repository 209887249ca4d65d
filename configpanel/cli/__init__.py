"""CLI for configpanel."""
