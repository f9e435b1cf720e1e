"""
src/advanced_hash/hashing/mixer.py
Motor de Mezcla v1.0.
Rotaciones de 128 bits, transformación no lineal y mezcla cruzada del estado.
Aritmética modular estricta: todo se enmascara a 128 bits (wrapping, sin traps).
"""
from typing import List

from ..errors import StateError
from .invariants import (
    MASK_128, WORD_BITS, PRIME, NLT_MODULUS, ROTR_NLT,
    ROUND_ROT_PERIOD, WORD_ROT_STEP, STATE_WORDS,
)


def rotate_left(val: int, shift: int) -> int:
    """Rotación circular (ROL) de 128 bits."""
    shift %= WORD_BITS
    val &= MASK_128
    return ((val << shift) | (val >> (WORD_BITS - shift))) & MASK_128


def rotate_right(val: int, shift: int) -> int:
    """Rotación circular (ROR) de 128 bits."""
    shift %= WORD_BITS
    val &= MASK_128
    return ((val >> shift) | (val << (WORD_BITS - shift))) & MASK_128


def non_linear_transform(value: int) -> int:
    """
    Paso de Difusión: (v ^ ROR(v, 23)) * PRIME, con wrapping de 128 bits,
    reducido después módulo 2^64 - 1.
    """
    folded = value ^ rotate_right(value, ROTR_NLT)
    return ((folded * PRIME) & MASK_128) % NLT_MODULUS


def mix_state(state: List[int], mixed_input: int, round_idx: int) -> None:
    """
    Mezcla de una ronda sobre las 4 palabras, IN PLACE.

    Cadena izquierda -> derecha: la palabra i se cruza con el valor ACTUAL
    de la palabra (i+1) % 4. Para i=3 eso es la palabra 0 ya actualizada.
    """
    if len(state) != STATE_WORDS:
        raise StateError(f"State must have {STATE_WORDS} words, got {len(state)}.")

    base_rot = round_idx % ROUND_ROT_PERIOD
    for i in range(STATE_WORDS):
        word = state[i] ^ mixed_input
        word = (word + PRIME) & MASK_128
        word = rotate_left(word, base_rot + i * WORD_ROT_STEP)
        word = non_linear_transform(word)
        state[i] = word ^ state[(i + 1) % STATE_WORDS]
