import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from pathwise.settings import settings
from pathwise.storage.blobs import MemoryBlobStore, RedisBlobStore, SqlBlobStore, get_blob_store, session_key


class BlobStoreContract:
    def make_store(self):
        raise NotImplementedError

    def setUp(self):
        self.store = self.make_store()

    def test_missing_key_is_none(self):
        self.assertIsNone(self.store.get("nope"))

    def test_last_write_wins(self):
        self.store.set("k", "one")
        self.store.set("k", "two")
        self.assertEqual(self.store.get("k"), "two")

    def test_delete(self):
        self.store.set("k", "v")
        self.store.delete("k")
        self.store.delete("k")
        self.assertIsNone(self.store.get("k"))


class TestMemoryBlobStore(BlobStoreContract, unittest.TestCase):
    def make_store(self):
        return MemoryBlobStore()


class TestSqlBlobStore(BlobStoreContract, unittest.TestCase):
    def make_store(self):
        engine = create_engine("sqlite://", poolclass=StaticPool,
        connect_args={"check_same_thread": False})
        return SqlBlobStore(engine)


class TestRedisBlobStore(unittest.TestCase):
    def test_delegates_to_client(self):
        client = MagicMock()
        client.get.return_value = "value"
        store = RedisBlobStore(client)

        store.set("k", "v")
        self.assertEqual(store.get("k"), "value")
        store.delete("k")

        client.set.assert_called_once_with("k", "v")
        client.get.assert_called_once_with("k")
        client.delete.assert_called_once_with("k")


class TestSessionKey(unittest.TestCase):
    def test_namespaced(self):
        self.assertEqual(session_key("abc", "roadmapData"), "abc:roadmapData")


class TestBlobStoreFactory(unittest.TestCase):
    def test_memory_is_default(self):
        with patch.object(settings, "blob_backend", "memory"):
            self.assertIsInstance(get_blob_store(), MemoryBlobStore)

    def test_sql_backend(self):
        with patch.object(settings, "blob_backend", "sql"), \
                patch.object(settings, "database_url", "sqlite://"):
            self.assertIsInstance(get_blob_store(), SqlBlobStore)


if __name__ == "__main__":
    unittest.main()
