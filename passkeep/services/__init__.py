"""
High-level use cases for the passkeep API.

Each service module orchestrates repositories/adapters to implement business
rules (validate a record, store it, persist the vault file).

Routers (FastAPI endpoints) call these services instead of manipulating the
store or the JSON file directly.
"""
