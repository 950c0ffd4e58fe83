# pathwise/storage/blobs.py
"""
Opaque string storage for session state.

Keys are namespaced per session as "{session_id}:{name}". Values are JSON
strings written by the callers. Last write wins; there are no transactions.
"""
from abc import ABC, abstractmethod

import redis
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker

from pathwise.db.base import Base
from pathwise.db.models.blob import Blob
from pathwise.settings import settings

ROADMAP_KEY = "roadmapData"
CURRENT_TOPIC_KEY = "currentTopic"
PROFILE_KEY = "user"
CONVERSATIONS_KEY = "chatConversations"


def session_key(session_id: str, name: str) -> str:
    return f"{session_id}:{name}"


class BlobStore(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryBlobStore(BlobStore):
    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class RedisBlobStore(BlobStore):
    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisBlobStore":
        # decode_responses=True returns strings instead of bytes
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def get(self, key: str) -> str | None:
        return self.client.get(key)

    def set(self, key: str, value: str) -> None:
        self.client.set(key, value)

    def delete(self, key: str) -> None:
        self.client.delete(key)


class SqlBlobStore(BlobStore):
    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
        Base.metadata.create_all(engine)

    @classmethod
    def from_url(cls, url: str) -> "SqlBlobStore":
        return cls(create_engine(url, pool_pre_ping=True))

    def get(self, key: str) -> str | None:
        db = self.SessionLocal()
        try:
            blob = db.get(Blob, key)
            return blob.value if blob else None
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self.SessionLocal()
        try:
            blob = db.get(Blob, key)
            if blob is None:
                db.add(Blob(key=key, value=value))
            else:
                blob.value = value
            db.commit()
        finally:
            db.close()

    def delete(self, key: str) -> None:
        db = self.SessionLocal()
        try:
            blob = db.get(Blob, key)
            if blob is not None:
                db.delete(blob)
                db.commit()
        finally:
            db.close()


def get_blob_store() -> BlobStore:
    if settings.blob_backend == "redis":
        return RedisBlobStore.from_url(settings.redis_url)
    if settings.blob_backend == "sql":
        return SqlBlobStore.from_url(settings.database_url)
    return MemoryBlobStore()
