"""OS automation helpers used by the CLI."""
