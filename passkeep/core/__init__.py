"""
Core utilities shared across the passkeep API.

This package hosts:
- configuration helpers (YAML file, env vars, record type allow-list)
- logging setup
- the reader/writer lock guarding the in-memory store

Services and repositories depend on these primitives instead of importing
FastAPI or reading the environment themselves.
"""
