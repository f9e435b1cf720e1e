"""
tests/advanced_hash/io/test_log_sink.py
Registro Append-Only: formato de registro, append y creación idempotente del directorio.
"""
import os
import tempfile
import unittest

from advanced_hash.hashing.encoder import to_base64, to_binary_string
from advanced_hash.io.log_sink import HashLog, format_record


class TestHashLog(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name
        self.digest = bytes(range(32))

    def tearDown(self):
        self._tmp.cleanup()

    def test_record_format(self):
        record = format_record("abc", "S1", "P1", self.digest)
        expected = (
            "Input: 'abc'\n"
            "Salt: 'S1'\n"
            "Pepper: 'P1'\n"
            f"Binary Hash: {to_binary_string(self.digest)}\n"
            f"Base64 Hash: {to_base64(self.digest)}\n"
            "\n\n"
        )
        self.assertEqual(record, expected)

    def test_creates_nested_directory(self):
        log_dir = os.path.join(self.root, "a", "logs")
        with HashLog(log_dir) as log:
            log.write("x", "s", "p", self.digest)
        self.assertTrue(os.path.isfile(os.path.join(log_dir, "hash_log.txt")))

    def test_appends_across_sessions(self):
        log_dir = os.path.join(self.root, "logs")
        with HashLog(log_dir) as log:
            log.write("first", "s", "p", self.digest)
        # Directorio ya existente: no-op
        with HashLog(log_dir) as log:
            log.write("second", "s", "p", self.digest)

        with open(os.path.join(log_dir, "hash_log.txt"), encoding='utf-8') as fh:
            content = fh.read()
        self.assertEqual(content.count("Input: "), 2)
        self.assertLess(content.index("'first'"), content.index("'second'"))

    def test_io_errors_propagate(self):
        blocker = os.path.join(self.root, "file")
        with open(blocker, 'w') as fh:
            fh.write("not a directory")
        with self.assertRaises(OSError):
            HashLog(blocker).open()


if __name__ == '__main__':
    unittest.main()
