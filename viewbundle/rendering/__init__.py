"""Registry, templates, serialization and bundling."""
