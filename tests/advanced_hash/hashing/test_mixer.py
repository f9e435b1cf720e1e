"""
tests/advanced_hash/hashing/test_mixer.py
Verificación Unitaria del Motor de Mezcla.
Rotaciones de 128 bits, paso no lineal y cadena de mezcla cruzada.
"""
import unittest

from advanced_hash.errors import StateError
from advanced_hash.hashing.invariants import IV, MASK_128, MASK_64, PRIME
from advanced_hash.hashing.mixer import (
    mix_state, non_linear_transform, rotate_left, rotate_right,
)


class TestRotations(unittest.TestCase):

    def test_rotate_left_wraps_at_128_bits(self):
        self.assertEqual(rotate_left(1, 1), 2)
        self.assertEqual(rotate_left(1 << 127, 1), 1)
        self.assertEqual(rotate_left(0xAB, 128), 0xAB)

    def test_rotate_right_wraps_at_128_bits(self):
        self.assertEqual(rotate_right(1, 1), 1 << 127)
        self.assertEqual(rotate_right(2, 1), 1)

    def test_rotations_are_inverse(self):
        for shift in (0, 1, 23, 64, 127):
            v = 0x0123456789abcdef_fedcba9876543210
            self.assertEqual(rotate_right(rotate_left(v, shift), shift), v)


class TestNonLinearTransform(unittest.TestCase):

    def test_zero_is_fixed_point(self):
        self.assertEqual(non_linear_transform(0), 0)

    def test_matches_formula(self):
        v = 0xdeadbeef_cafebabe_01234567_89abcdef
        rotated = ((v >> 23) | (v << 105)) & MASK_128
        expected = (((v ^ rotated) * PRIME) & MASK_128) % MASK_64
        self.assertEqual(non_linear_transform(v), expected)

    def test_output_below_modulus(self):
        """El resultado siempre cae en [0, 2^64 - 1)."""
        for v in (1, MASK_64, MASK_128, 1 << 100, 0x1234):
            self.assertLess(non_linear_transform(v), MASK_64)


class TestMixState(unittest.TestCase):

    def _reference(self, state, x, r):
        """Cadena palabra a palabra, leyendo el vecino en su valor actual."""
        s = list(state)
        for i in range(4):
            w = s[i] ^ x
            w = (w + PRIME) & MASK_128
            w = rotate_left(w, (r % 16) + i * 8)
            w = non_linear_transform(w)
            s[i] = w ^ s[(i + 1) % 4]
        return s

    def test_mutates_in_place_and_returns_none(self):
        state = list(IV)
        self.assertIsNone(mix_state(state, 0x61, 3))
        self.assertNotEqual(state, list(IV))

    def test_deterministic(self):
        a, b = list(IV), list(IV)
        mix_state(a, 0x1234, 17)
        mix_state(b, 0x1234, 17)
        self.assertEqual(a, b)

    def test_last_word_reads_updated_first_word(self):
        """
        La palabra 3 se cruza con la palabra 0 YA actualizada (cadena izquierda -> derecha).
        """
        state = list(IV)
        mix_state(state, 0x99, 5)
        self.assertEqual(state, self._reference(IV, 0x99, 5))

        # Si se usara la palabra 0 original, la palabra 3 sería distinta
        s = list(IV)
        w = rotate_left(((s[3] ^ 0x99) + PRIME) & MASK_128, 5 + 24)
        stale = non_linear_transform(w) ^ IV[0]
        self.assertNotEqual(state[3], stale)

    def test_round_changes_rotation(self):
        a, b = list(IV), list(IV)
        mix_state(a, 7, 0)
        mix_state(b, 7, 1)
        self.assertNotEqual(a, b)

    def test_rotation_period_is_sixteen(self):
        """round y round + 16 rotan igual: solo round % 16 entra en la mezcla."""
        a, b = list(IV), list(IV)
        mix_state(a, 7, 2)
        mix_state(b, 7, 18)
        self.assertEqual(a, b)

    def test_words_stay_within_128_bits(self):
        state = [MASK_128] * 4
        mix_state(state, MASK_128, 15)
        for w in state:
            self.assertLessEqual(w, MASK_128)

    def test_rejects_wrong_word_count(self):
        with self.assertRaises(StateError):
            mix_state([1, 2, 3], 0, 0)
        with self.assertRaises(ValueError):
            mix_state([1, 2, 3, 4, 5], 0, 0)


if __name__ == '__main__':
    unittest.main()
