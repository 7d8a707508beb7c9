"""Presentation layer (FastAPI dependencies)."""
