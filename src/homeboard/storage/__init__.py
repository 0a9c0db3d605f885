"""
Storage subsystem.

Components:
- kv_store.py: durable (SQLite) and in-memory string key-value stores
- persistence.py: PersistenceAdapter, the only JSON read/write path
"""
