"""FastAPI service exposing the catalogue, scoring and progress."""
