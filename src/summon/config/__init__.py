"""Configuration — pydantic models, settings sources, discovery, and logging."""
