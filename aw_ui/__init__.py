"""Command-line surface of the Alfred workflow toolkit."""
