import os
import tempfile
import unittest
from unittest import mock

import Model as model_module
from Model import AutocompleteRequest, Model
from tests.test_trie import SEED, FakeCache


class TestModel(unittest.TestCase):

    def setUp(self):
        self.model = Model(cache=FakeCache())
        self.model.seed(SEED)

    def test_direct_lookup(self):
        self.assertEqual(self.model.list("app"), ["apple", "application"])
        self.assertEqual(self.model.list("b", 2), ["book", "bee"])
        self.assertTrue(self.model.contains("ball"))

    def test_dispatch_serves_by_priority(self):
        self.model.submit(AutocompleteRequest(prefix="b"), 0)
        self.model.submit(AutocompleteRequest(prefix="app"), 0)
        self.model.submit(AutocompleteRequest(prefix="bi"), 1)
        self.model.submit(AutocompleteRequest(prefix="ba"), 0)
        self.assertEqual(self.model.pending, 4)

        served = self.model.dispatch()
        self.assertEqual([s.request.prefix for s in served], ["bi", "b", "app", "ba"])
        self.assertEqual(served[0].results, ["binary"])
        self.assertEqual(served[1].results, ["book", "bee", "bat", "banana", "ball"])
        self.assertEqual(served[2].results, ["apple", "application"])
        self.assertEqual(served[3].results, ["bat", "banana", "ball"])
        self.assertEqual([s.priority for s in served], [1, 0, 0, 0])
        self.assertEqual(self.model.pending, 0)

    def test_callback_receives_results(self):
        received = []
        self.model.submit(AutocompleteRequest(prefix="bo", callback=received.append))
        self.model.dispatch_one()
        self.assertEqual(received, [["book"]])

    def test_request_k_overrides_default(self):
        self.model.submit(AutocompleteRequest(prefix="b", k=1))
        self.model.submit("b")
        first, second = self.model.dispatch()
        self.assertEqual(first.results, ["book"])
        self.assertEqual(len(second.results), 5)

    def test_unsupported_request_type(self):
        self.model.submit(AutocompleteRequest(prefix="b", type="spellcheck"))
        with self.assertLogs("Model", level="WARNING"):
            result = self.model.dispatch_one()
        self.assertEqual(result.results, [])

    def test_dispatch_on_empty_queue(self):
        self.assertIsNone(self.model.dispatch_one())
        self.assertEqual(self.model.dispatch(), [])

    def test_construct_from_file(self):
        fd, path = tempfile.mkstemp(suffix=".txt")
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write("zebra\t4\nzeal\nzebra\t2\n")
        try:
            model = Model(cache=FakeCache())
            self.assertEqual(model.construct(path), 3)
        finally:
            os.remove(path)
        self.assertEqual(model.trie.frequency("zebra"), 6)
        self.assertEqual(model.list("ze"), ["zebra", "zeal"])


class TestRedisBootstrap(unittest.TestCase):

    def test_no_host_means_no_cache(self):
        with mock.patch.dict(os.environ, {"REDIS_HOST": ""}):
            self.assertIsNone(model_module._try_init_redis())
            self.assertIsNone(Model().trie._cache)

    def test_connects_when_host_set(self):
        client = mock.Mock()
        with mock.patch.dict(os.environ, {"REDIS_HOST": "cache.local", "REDIS_PORT": "6380"}), \
                mock.patch("redis.Redis", return_value=client) as redis_cls:
            self.assertIs(model_module._try_init_redis(), client)
        redis_cls.assert_called_once_with(host="cache.local", port=6380, db=0, decode_responses=True)
        client.ping.assert_called_once_with()

    def test_unreachable_server_degrades(self):
        client = mock.Mock()
        client.ping.side_effect = ConnectionError("refused")
        with mock.patch.dict(os.environ, {"REDIS_HOST": "cache.local"}), \
                mock.patch("redis.Redis", return_value=client):
            with self.assertLogs("Model", level="WARNING"):
                self.assertIsNone(model_module._try_init_redis())


if __name__ == '__main__':
    unittest.main()
