"""Persistence layer: engine, models, schemas and repositories."""
