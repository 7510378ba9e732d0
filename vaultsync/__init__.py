"""Integration lifecycle core for project secret scopes."""
