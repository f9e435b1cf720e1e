"""
src/advanced_hash/kernel/engine.py
Orquestador AdvancedHash.
Pipeline puro: (input, salt, pepper) -> pepper||input||salt -> fan-out -> merge -> 32 bytes.
El estado (IV) es fresco en cada llamada y se descarta al terminar.
"""
import logging
from concurrent.futures import Executor
from typing import Optional

from ..config import HashConfig
from ..hashing.encoder import finalize_digest
from ..hashing.invariants import initial_state
from .accumulator import AccumulationReport, ParallelAccumulator

logger = logging.getLogger(__name__)


def combine_input(text: str, salt: str, pepper: str) -> bytes:
    """Concatenación byte a byte de las codificaciones UTF-8: pepper, input, salt."""
    return pepper.encode('utf-8') + text.encode('utf-8') + salt.encode('utf-8')


class HashEngine:
    """
    Facade del digest. Encapsula la configuración del pool y la política
    ante unidades perdidas.
    """
    __slots__ = ('_accumulator',)

    def __init__(self, config: Optional[HashConfig] = None, executor: Optional[Executor] = None):
        config = config or HashConfig()
        self._accumulator = ParallelAccumulator(
            max_workers=config.max_workers,
            strict=config.strict,
            executor=executor,
        )

    def digest_report(self, text: str, salt: str, pepper: str) -> AccumulationReport:
        combined = combine_input(text, salt, pepper)
        logger.debug("Hashing %d combined bytes", len(combined))
        return self._accumulator.accumulate(initial_state(), combined)

    def digest(self, text: str, salt: str, pepper: str) -> bytes:
        return finalize_digest(self.digest_report(text, salt, pepper).state)

    def chained_digest(self, text: str, salt: str, pepper: str) -> bytes:
        """Variante encadenada (ronda a ronda). No intercambiable con digest()."""
        combined = combine_input(text, salt, pepper)
        report = self._accumulator.accumulate_chained(initial_state(), combined)
        return finalize_digest(report.state)


def advanced_hash(text: str, salt: str, pepper: str) -> bytes:
    """Superficie contractual: AdvancedHash(input, salt, pepper) -> digest de 32 bytes."""
    return HashEngine().digest(text, salt, pepper)


def advanced_hash_chained(text: str, salt: str, pepper: str) -> bytes:
    return HashEngine().chained_digest(text, salt, pepper)
