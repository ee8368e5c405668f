import threading
import time
import unittest
from unittest import mock

from fluxclient import registry
from fluxclient.registry import SubClientRegistry, write_key


class TestWriteKey(unittest.TestCase):
    def test_compound_key(self):
        self.assertEqual(write_key("org", "bucket"), "org\tbucket")

    def test_pairs_do_not_collide(self):
        self.assertNotEqual(write_key("ab", "c"), write_key("a", "bc"))


class TestSubClientRegistry(unittest.TestCase):
    def setUp(self):
        self.registry = SubClientRegistry()

    def test_singleton_created_once(self):
        factory = mock.Mock(side_effect=lambda: object())
        first = self.registry.get_or_create(registry.BUCKETS, factory)
        second = self.registry.get_or_create(registry.BUCKETS, factory)
        self.assertIs(first, second)
        self.assertEqual(factory.call_count, 1)

    def test_singleton_ignores_key(self):
        first = self.registry.get_or_create(registry.LABELS, object, key="a")
        second = self.registry.get_or_create(registry.LABELS, object, key="b")
        self.assertIs(first, second)

    def test_write_clients_keyed(self):
        a = self.registry.get_or_create(registry.WRITE, mock.Mock, key=write_key("o", "a"))
        b = self.registry.get_or_create(registry.WRITE, mock.Mock, key=write_key("o", "b"))
        again = self.registry.get_or_create(
            registry.WRITE, mock.Mock, key=write_key("o", "a")
        )
        self.assertIsNot(a, b)
        self.assertIs(a, again)
        self.assertEqual(self.registry.size(registry.WRITE), 2)

    def test_write_kinds_are_independent(self):
        key = write_key("o", "b")
        async_client = self.registry.get_or_create(registry.WRITE, mock.Mock, key=key)
        blocking = self.registry.get_or_create(registry.WRITE_BLOCKING, mock.Mock, key=key)
        self.assertIsNot(async_client, blocking)
        self.assertEqual(self.registry.size(registry.WRITE), 1)
        self.assertEqual(self.registry.size(registry.WRITE_BLOCKING), 1)

    def test_write_kind_requires_key(self):
        with self.assertRaises(ValueError):
            self.registry.get_or_create(registry.WRITE, mock.Mock)

    def test_unknown_kind(self):
        with self.assertRaises(ValueError):
            self.registry.get_or_create("queries", mock.Mock)

    def test_drain_closes_and_empties_write_caches(self):
        async_client = self.registry.get_or_create(
            registry.WRITE, mock.Mock, key=write_key("o", "a")
        )
        blocking = self.registry.get_or_create(
            registry.WRITE_BLOCKING, mock.Mock, key=write_key("o", "a")
        )
        singleton = self.registry.get_or_create(registry.TASKS, mock.Mock)

        self.registry.drain_write_clients()

        async_client.close.assert_called_once_with()
        blocking.close.assert_called_once_with()
        singleton.close.assert_not_called()
        self.assertEqual(self.registry.size(registry.WRITE), 0)
        self.assertEqual(self.registry.size(registry.WRITE_BLOCKING), 0)
        self.assertEqual(self.registry.size(registry.TASKS), 1)

    def test_drain_twice_is_harmless(self):
        self.registry.get_or_create(registry.WRITE, mock.Mock, key=write_key("o", "a"))
        self.registry.drain_write_clients()
        self.registry.drain_write_clients()
        self.assertEqual(self.registry.size(registry.WRITE), 0)

    def test_concurrent_get_or_create_constructs_once(self):
        created = []

        def factory():
            time.sleep(0.01)
            obj = mock.Mock()
            created.append(obj)
            return obj

        n = 16
        barrier = threading.Barrier(n)
        results = [None] * n

        def worker(i):
            barrier.wait()
            results[i] = self.registry.get_or_create(
                registry.WRITE, factory, key=write_key("o", "b")
            )

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(n)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(created), 1)
        self.assertTrue(all(r is created[0] for r in results))


if __name__ == "__main__":
    unittest.main()
