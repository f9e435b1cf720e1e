"""
src/advanced_hash/kernel/accumulator.py
Acumulador Paralelo v1.0 (Fan-out / XOR Merge).

Cada par (ronda, byte) es una unidad de trabajo independiente. Todas las unidades
leen la MISMA instantánea del estado inicial; ninguna observa el resultado de otra.
La única sincronización es una barrera (wait) antes del merge.

El merge es XOR palabra a palabra: conmutativo y asociativo, por lo que el
orden de finalización de los hilos no altera el resultado.
"""
import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import DEFAULT_MAX_WORKERS, DEFAULT_STRICT
from ..errors import LostResultError, SchedulingError, StateError
from ..hashing.invariants import ROUNDS, PRIME, MASK_128, MASK_BYTE, STATE_WORDS
from ..hashing.mixer import mix_state

logger = logging.getLogger(__name__)

Word4 = Tuple[int, int, int, int]


def dynamic_salt(base_state: Sequence[int], round_idx: int) -> int:
    """(round + PRIME) ^ (base[round % 4] & 0xff), con wrapping de 128 bits."""
    return ((round_idx + PRIME) & MASK_128) ^ (base_state[round_idx % STATE_WORDS] & MASK_BYTE)


def compute_unit(base_state: Sequence[int], round_idx: int, byte_value: int) -> Word4:
    """
    Unidad de trabajo pura. Copia la instantánea, mezcla una vez y devuelve
    el estado resultante. Nunca muta base_state.
    """
    mixed_byte = (byte_value + dynamic_salt(base_state, round_idx)) & MASK_128
    local_state = list(base_state)
    mix_state(local_state, mixed_byte, round_idx)
    return tuple(local_state)


def position_value(position: int, byte_value: int) -> int:
    """Byte con su posición en los bits altos (modo encadenado)."""
    return (position << 8) | byte_value


def merge_results(initial_state: Sequence[int], results: Iterable[Sequence[int]]) -> List[int]:
    """Merge XOR palabra a palabra sobre un acumulador inicializado con initial_state."""
    accumulator = list(initial_state)
    for result in results:
        for i in range(STATE_WORDS):
            accumulator[i] ^= result[i]
    return accumulator


@dataclass(frozen=True)
class AccumulationReport:
    """Estado final más la contabilidad de unidades."""
    state: Word4
    scheduled: int
    merged: int

    @property
    def lost(self) -> int:
        return self.scheduled - self.merged

    @property
    def complete(self) -> bool:
        return self.lost == 0


class ParallelAccumulator:
    """
    Planificador de unidades sobre un pool acotado.

    strict=True  -> una unidad perdida lanza LostResultError.
    strict=False -> la contribución perdida se descarta (con WARNING) y se sigue.
    """
    __slots__ = ('_max_workers', '_strict', '_executor')

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS,
                 strict: bool = DEFAULT_STRICT,
                 executor: Optional[Executor] = None):
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}.")
        self._max_workers = max_workers
        self._strict = strict
        # Executor externo: el llamador es dueño de su ciclo de vida
        self._executor = executor

    @property
    def strict(self) -> bool:
        return self._strict

    # =========================================================================
    # MODO REFERENCIA (Instantánea Única)
    # =========================================================================
    def accumulate(self, initial_state: Sequence[int], combined_input: bytes) -> AccumulationReport:
        """
        Fan-out de ROUNDS x len(combined_input) unidades sobre una instantánea única,
        barrera, y merge XOR sobre initial_state.
        """
        snapshot = self._snapshot(initial_state)
        units = [(r, b) for r in range(ROUNDS) for b in combined_input]

        with self._pool() as pool:
            results = self._run(pool, snapshot, units)

        state = merge_results(snapshot, results)
        return AccumulationReport(tuple(state), len(units), len(results))

    # =========================================================================
    # MODO ENCADENADO (Evolución Ronda a Ronda)
    # =========================================================================
    def accumulate_chained(self, initial_state: Sequence[int], combined_input: bytes) -> AccumulationReport:
        """
        Variante opcional: cada ronda lee el estado ya fusionado de la ronda anterior.
        Cada unidad mezcla también la posición del byte: bytes iguales en
        posiciones distintas no se anulan en el merge XOR.
        NO es compatible con accumulate(); produce digests distintos.
        """
        state = list(self._snapshot(initial_state))
        scheduled = merged = 0

        with self._pool() as pool:
            for r in range(ROUNDS):
                snapshot = tuple(state)
                units = [(r, position_value(pos, b)) for pos, b in enumerate(combined_input)]
                results = self._run(pool, snapshot, units)
                state = merge_results(snapshot, results)
                scheduled += len(units)
                merged += len(results)

        return AccumulationReport(tuple(state), scheduled, merged)

    # =========================================================================
    # INTERNOS
    # =========================================================================
    @staticmethod
    def _snapshot(initial_state: Sequence[int]) -> Word4:
        if len(initial_state) != STATE_WORDS:
            raise StateError(f"State must have {STATE_WORDS} words, got {len(initial_state)}.")
        return tuple(w & MASK_128 for w in initial_state)

    def _pool(self):
        if self._executor is not None:
            return _Borrowed(self._executor)
        return ThreadPoolExecutor(max_workers=self._max_workers,
                                  thread_name_prefix="advhash-unit")

    def _run(self, pool: Executor, snapshot: Word4, units: List[Tuple[int, int]]) -> List[Word4]:
        futures: List[Future] = []
        for round_idx, byte_value in units:
            try:
                futures.append(pool.submit(compute_unit, snapshot, round_idx, byte_value))
            except RuntimeError as e:
                # Agotamiento de recursos (p.ej. "can't start new thread" o pool cerrado)
                for f in futures:
                    f.cancel()
                logger.error("Scheduling failed at unit %d/%d: %s", len(futures), len(units), e)
                raise SchedulingError(len(futures), len(units)) from e

        logger.debug("Scheduled %d units over %d-word snapshot", len(futures), STATE_WORDS)

        # Barrera única
        done, _ = wait(futures)

        results = []
        lost = 0
        for f in done:
            if f.cancelled() or f.exception() is not None:
                lost += 1
                continue
            results.append(f.result())

        if lost:
            if self._strict:
                raise LostResultError(lost, len(futures))
            logger.warning("Dropped %d of %d unit results; digest reflects %d contributions",
                           lost, len(futures), len(results))
        return results


class _Borrowed:
    """Context manager que presta un Executor externo sin cerrarlo."""
    __slots__ = ('_executor',)

    def __init__(self, executor: Executor):
        self._executor = executor

    def __enter__(self) -> Executor:
        return self._executor

    def __exit__(self, *exc) -> bool:
        return False
