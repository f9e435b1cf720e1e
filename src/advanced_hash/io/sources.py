"""
src/advanced_hash/io/sources.py
Fuentes de Sal y Pimienta.
- Sal: 67 caracteres alfanuméricos aleatorios por llamada.
- Pimienta: tiempo (ns) + PID en hexadecimal. No es secreta, solo desambigua la ejecución.
Ambas fuentes son inyectables para que el núcleo se pruebe con entradas fijas.
"""
import os
import random
import secrets
import string
import time
from typing import Callable, Optional

from ..config import DEFAULT_SALT_LENGTH

ALPHANUMERIC = string.ascii_letters + string.digits


class SaltSource:
    __slots__ = ('_rng', '_length')

    def __init__(self, length: int = DEFAULT_SALT_LENGTH, rng: Optional[random.Random] = None):
        if length < 0:
            raise ValueError(f"Salt length must be >= 0, got {length}.")
        self._length = length
        self._rng = rng or secrets.SystemRandom()

    def __call__(self) -> str:
        return ''.join(self._rng.choice(ALPHANUMERIC) for _ in range(self._length))


class PepperSource:
    __slots__ = ('_clock', '_pid')

    def __init__(self, clock: Callable[[], int] = time.time_ns, pid: Callable[[], int] = os.getpid):
        self._clock = clock
        self._pid = pid

    def __call__(self) -> str:
        return f"{self._clock():x}-{self._pid():x}"
