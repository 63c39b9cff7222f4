import json
import unittest
from unittest.mock import MagicMock, patch

from redis import exceptions as redis_exceptions

from storefront.sessions import (
    InMemorySessionStore,
    RedisSessionStore,
    connect_session_store,
)


class InMemorySessionStoreTests(unittest.TestCase):
    def test_set_get_delete(self):
        store = InMemorySessionStore()
        store.set("abc", {"userId": "u1"}, ttl_seconds=60)
        self.assertEqual(store.get("abc"), {"userId": "u1"})
        store.delete("abc")
        self.assertIsNone(store.get("abc"))
        store.delete("abc")

    def test_expired_entries_are_dropped(self):
        store = InMemorySessionStore()
        with patch("storefront.sessions.time.time", return_value=1000.0):
            store.set("abc", {"userId": "u1"}, ttl_seconds=10)
        with patch("storefront.sessions.time.time", return_value=1010.0):
            self.assertIsNone(store.get("abc"))
        self.assertNotIn("abc", store.entries)

    def test_set_sweeps_expired_entries(self):
        store = InMemorySessionStore()
        with patch("storefront.sessions.time.time", return_value=1000.0):
            store.set("old", {"userId": "u1"}, ttl_seconds=10)
            store.set("live", {"userId": "u2"}, ttl_seconds=60)
        with patch("storefront.sessions.time.time", return_value=1020.0):
            store.set("new", {"userId": "u3"}, ttl_seconds=10)
        self.assertEqual(sorted(store.entries), ["live", "new"])


class RedisSessionStoreTests(unittest.TestCase):
    def setUp(self):
        patcher = patch("storefront.sessions.redis.Redis.from_url")
        self.from_url = patcher.start()
        self.addCleanup(patcher.stop)
        self.client = MagicMock()
        self.from_url.return_value = self.client
        self.store = RedisSessionStore(url="redis://localhost:6379/0", key_prefix="test:")

    def test_set_uses_prefixed_key_and_ttl(self):
        self.store.set("abc", {"userId": "u1"}, ttl_seconds=30)
        self.client.setex.assert_called_once_with("test:abc", 30, json.dumps({"userId": "u1"}))

    def test_get_decodes_json(self):
        self.client.get.return_value = b'{"userId": "u1"}'
        self.assertEqual(self.store.get("abc"), {"userId": "u1"})
        self.client.get.assert_called_with("test:abc")

        self.client.get.return_value = None
        self.assertIsNone(self.store.get("abc"))

    def test_get_reconnects_after_connection_error(self):
        self.client.get.side_effect = redis_exceptions.ConnectionError("gone")
        self.assertIsNone(self.store.get("abc"))
        self.assertEqual(self.from_url.call_count, 2)

    def test_delete(self):
        self.store.delete("abc")
        self.client.delete.assert_called_once_with("test:abc")


class ConnectSessionStoreTests(unittest.TestCase):
    def test_without_url_uses_memory(self):
        self.assertIsInstance(connect_session_store(None, "p:"), InMemorySessionStore)

    @patch("storefront.sessions.redis.Redis.from_url")
    def test_unreachable_redis_falls_back(self, from_url):
        from_url.return_value.ping.side_effect = redis_exceptions.ConnectionError("refused")
        store = connect_session_store("redis://nowhere:6379/0", "p:")
        self.assertIsInstance(store, InMemorySessionStore)

    @patch("storefront.sessions.redis.Redis.from_url")
    def test_reachable_redis(self, from_url):
        store = connect_session_store("redis://localhost:6379/0", "p:")
        self.assertIsInstance(store, RedisSessionStore)
        from_url.return_value.ping.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
