"""Core building blocks: errors, selector registry and fixture store."""
