"""Domain models, errors and configuration."""
