"""CLI module for ethwatch."""
