"""
Persistence adapters.

``memory_store`` owns the live record map; ``json_storage`` knows how the map
is laid out on disk. Services combine the two and never open files directly.
"""
