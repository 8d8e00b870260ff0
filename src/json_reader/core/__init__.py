"""Core query engine, document loading and configuration."""
