"""Test helpers: entity factories and in-memory fakes."""
