"""Command-line tools for surfacefire."""
