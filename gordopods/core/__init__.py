"""Core helpers: configuration, errors, money and logging."""
