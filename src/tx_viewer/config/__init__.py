"""Configuration — pydantic-settings models for env vars and YAML."""
