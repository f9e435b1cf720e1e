"""
tests/advanced_hash/io/test_sources.py
Fuentes inyectables de Sal y Pimienta.
"""
import os
import random
import unittest

from advanced_hash.io.sources import ALPHANUMERIC, PepperSource, SaltSource


class TestSaltSource(unittest.TestCase):

    def test_default_shape(self):
        salt = SaltSource()()
        self.assertEqual(len(salt), 67)
        self.assertTrue(all(c in ALPHANUMERIC for c in salt))

    def test_varies_per_call(self):
        source = SaltSource()
        self.assertNotEqual(source(), source())

    def test_seeded_rng_is_reproducible(self):
        a = SaltSource(length=12, rng=random.Random(42))
        b = SaltSource(length=12, rng=random.Random(42))
        self.assertEqual(a(), b())

    def test_rejects_negative_length(self):
        with self.assertRaises(ValueError):
            SaltSource(length=-1)


class TestPepperSource(unittest.TestCase):

    def test_injected_clock_and_pid(self):
        pepper = PepperSource(clock=lambda: 255, pid=lambda: 16)
        self.assertEqual(pepper(), "ff-10")

    def test_default_uses_process_id(self):
        pepper = PepperSource()()
        clock_hex, pid_hex = pepper.split('-')
        self.assertEqual(int(pid_hex, 16), os.getpid())
        self.assertGreater(int(clock_hex, 16), 0)


if __name__ == '__main__':
    unittest.main()
