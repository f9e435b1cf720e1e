"""
src/advanced_hash/hashing/encoder.py
Finalizador del Digest y Codificadores de Salida.
Integra:
- Truncado del estado (4 x u128) a 32 bytes.
- Representación binaria (256 caracteres '0'/'1', MSB primero).
- Base64 estándar (alfabeto estándar, con padding, sin saltos de línea).
"""
import base64
import binascii
from typing import Sequence

from ..errors import EncodingError, StateError
from .invariants import STATE_WORDS, DIGEST_LANE, DIGEST_SIZE, MASK_128


def finalize_digest(state: Sequence[int]) -> bytes:
    """
    Conserva los 8 bytes bajos (Little Endian) de cada palabra
    y los concatena en orden de palabra.
    """
    if len(state) != STATE_WORDS:
        raise StateError(f"State must have {STATE_WORDS} words, got {len(state)}.")

    out = bytearray()
    for word in state:
        # to_bytes(16) primero para respetar el layout u128 completo
        out += (word & MASK_128).to_bytes(16, 'little')[:DIGEST_LANE]
    return bytes(out)


def to_binary_string(digest: bytes) -> str:
    """8 bits por byte, bit más significativo primero."""
    return ''.join(f"{b:08b}" for b in digest)


def from_binary_string(bits: str) -> bytes:
    if len(bits) % 8 or any(c not in '01' for c in bits):
        raise EncodingError("Binary string must be a multiple of 8 '0'/'1' characters.")
    return bytes(int(bits[i:i + 8], 2) for i in range(0, len(bits), 8))


def to_base64(digest: bytes) -> str:
    return base64.b64encode(digest).decode('ascii')


def from_base64(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Invalid Base64 input: {e}") from e


def is_digest(value: bytes) -> bool:
    return isinstance(value, (bytes, bytearray)) and len(value) == DIGEST_SIZE
