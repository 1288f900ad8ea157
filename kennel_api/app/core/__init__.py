"""Core helpers: configuration, logging, database access and error types."""
