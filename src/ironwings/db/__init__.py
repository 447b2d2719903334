from .storage import DynamoStore, FileStore, KeyValueStore, MemoryStore, build_store

__all__ = ["KeyValueStore", "MemoryStore", "FileStore", "DynamoStore", "build_store"]
