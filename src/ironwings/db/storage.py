"""
Key-value stores backing the persisted cart.

Every backend exposes the same synchronous string interface:

  - get(key)         -> Optional[str]
  - set(key, value)  -> None   (overwrites entirely)
  - delete(key)      -> None

DynamoDB Table: cart_storage

Primary Key:
  - PK = STORE#{key}

Attributes:
  - value (string)           # the serialized blob
  - updated_at (ISO8601)
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional

import boto3

logger = logging.getLogger(__name__)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()

def pk_store(key: str) -> str:
    return f"STORE#{key}"


class KeyValueStore(ABC):
    """Opaque get/set string store."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class MemoryStore(KeyValueStore):
    """Dict-backed store; contents live as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileStore(KeyValueStore):
    """
    Stores all keys in one JSON object on disk, the way a browser keeps
    localStorage for an origin. A missing or undecodable file reads as an
    empty store.
    """

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except ValueError:
            # undecodable file reads as empty; the next set() rewrites it
            logger.warning(f"Storage file {self.path} is not valid JSON, treating as empty",
                           exc_info=True, extra={"backend": "file"})
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} does not hold a JSON object, treating as empty",
                           extra={"backend": "file"})
            return {}
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


class DynamoStore(KeyValueStore):
    """Store backed by a DynamoDB table, one item per key."""

    def __init__(self, table_name: str = "cart_storage", region_name: str = "eu-west-2"):
        self.table = boto3.resource("dynamodb", region_name=region_name).Table(table_name)

    def get(self, key: str) -> Optional[str]:
        resp = self.table.get_item(Key={"PK": pk_store(key)})
        item = resp.get("Item")
        if not item:
            return None
        return item.get("value")

    def set(self, key: str, value: str) -> None:
        self.table.put_item(Item={
            "PK": pk_store(key),
            "value": value,
            "updated_at": now_iso(),
        })

    def delete(self, key: str) -> None:
        self.table.delete_item(Key={"PK": pk_store(key)})


def build_store(cfg=None) -> KeyValueStore:
    """Create the backend named by cfg.STORAGE_BACKEND."""
    if cfg is None:
        from ironwings.config import config as cfg

    backend = cfg.STORAGE_BACKEND
    if backend == "memory":
        store: KeyValueStore = MemoryStore()
    elif backend == "file":
        store = FileStore(cfg.STORAGE_PATH)
    elif backend == "dynamodb":
        store = DynamoStore(table_name=cfg.DYNAMODB_TABLE, region_name=cfg.AWS_REGION)
    else:
        raise ValueError(f"Unknown storage backend: {backend!r}")

    logger.debug("Storage backend ready", extra={"backend": backend})
    return store
