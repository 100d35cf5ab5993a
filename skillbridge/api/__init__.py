"""FastAPI application assembly and dependency providers."""
