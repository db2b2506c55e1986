"""Pure domain types and validation rules (no I/O, no locking)."""
