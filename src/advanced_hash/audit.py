"""
src/advanced_hash/audit.py
Auditoría de Sensibilidad y Determinismo.

Ground truth de constantes con sympy (isprime) y verificación empírica por lotes:
- Tamaño fijo (32 bytes).
- Determinismo (dos llamadas idénticas -> mismo digest).
- Sensibilidad (un carácter distinto en input/salt/pepper -> digest distinto).
  Si el cambio conserva el multiconjunto de bytes UTF-8 (p.ej. U+0821 <-> U+0860)
  el digest de referencia coincide por construcción: se cuenta como colisión
  conocida, no como fractura.
No mide seguridad criptográfica; solo detecta fracturas evidentes.
"""
import random
import time
from dataclasses import dataclass, field
from multiprocessing import Pool, cpu_count
from typing import List, Optional, Tuple

from sympy import isprime

from .hashing.encoder import is_digest
from .hashing.invariants import PRIME, DIGEST_SIZE
from .io.sources import ALPHANUMERIC, SaltSource
from .kernel.engine import advanced_hash, combine_input

FIELDS = ("input", "salt", "pepper")

# Reemplazos multibyte: incluye un par con el mismo multiconjunto de bytes
FLIP_ALPHABET = ALPHANUMERIC + "\u00e9\u00f1\u00fc\u00df\u20ac\u0821\u0860"


@dataclass
class AuditReport:
    samples: int = 0
    prime_ok: bool = False
    failures: List[Tuple[int, str]] = field(default_factory=list)
    flip_distances: List[int] = field(default_factory=list)
    multiset_collisions: List[Tuple[int, str]] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.prime_ok and not self.failures

    @property
    def mean_flip_distance(self) -> float:
        """Distancia de Hamming media (bits) entre digests de entradas vecinas."""
        if not self.flip_distances: return 0.0
        return sum(self.flip_distances) / len(self.flip_distances)


def hamming(a: bytes, b: bytes) -> int:
    return sum(bin(x ^ y).count('1') for x, y in zip(a, b))


def same_byte_multiset(a: bytes, b: bytes) -> bool:
    return sorted(a) == sorted(b)


def flip_char(text: str, rng: random.Random) -> str:
    """Cambia exactamente un carácter. Texto vacío -> un carácter nuevo."""
    if not text:
        return rng.choice(FLIP_ALPHABET)
    pos = rng.randrange(len(text))
    choices = FLIP_ALPHABET.replace(text[pos], '')
    return text[:pos] + rng.choice(choices) + text[pos + 1:]


def audit_worker(args):
    batch_id, seed, count = args
    rng = random.Random(seed)
    salts = SaltSource(length=8, rng=rng)

    fails = []
    distances = []
    collisions = []
    for k in range(count):
        sample = [salts(), salts(), salts()]
        base = advanced_hash(*sample)

        if not is_digest(base):
            fails.append((batch_id, f"SIZE {len(base)} != {DIGEST_SIZE} (sample {k})"))
            continue
        if advanced_hash(*sample) != base:
            fails.append((batch_id, f"NON-DETERMINISTIC (sample {k})"))

        for pos, name in enumerate(FIELDS):
            mutated = list(sample)
            mutated[pos] = flip_char(sample[pos], rng)
            other = advanced_hash(*mutated)
            if other == base:
                if same_byte_multiset(combine_input(*sample), combine_input(*mutated)):
                    collisions.append((batch_id, f"MULTISET COLLISION on {name} (sample {k})"))
                else:
                    fails.append((batch_id, f"INSENSITIVE to {name} (sample {k})"))
            distances.append(hamming(base, other))
    return fails, distances, collisions


def run_audit(samples: int = 32, workers: Optional[int] = None,
              seed: int = 0, verbose: bool = True) -> AuditReport:
    cores = workers or cpu_count()
    batches = max(1, min(samples, cores * 2))

    report = AuditReport(samples=samples)
    report.prime_ok = bool(isprime(PRIME))

    if verbose:
        print("[*] AUDITORÍA DE SENSIBILIDAD / DETERMINISMO")
        print(f"[*] PRIME={hex(PRIME)} primo: {report.prime_ok}")
        print("-" * 65)

    step, extra = divmod(samples, batches)
    tasks = [(i, seed + i, step + (1 if i < extra else 0)) for i in range(batches)]
    tasks = [t for t in tasks if t[2] > 0]

    t0 = time.time()
    with Pool(min(cores, len(tasks) or 1)) as pool:
        for i, (fails, distances, collisions) in enumerate(pool.imap_unordered(audit_worker, tasks)):
            report.failures.extend(fails)
            report.flip_distances.extend(distances)
            report.multiset_collisions.extend(collisions)
            if verbose:
                for batch_id, err in fails:
                    print(f"FRACTURA: lote={batch_id} | {err}", flush=True)
                if i % 10 == 0: print(f"   -> Progreso: Lotes {i} OK", flush=True)
    report.elapsed = time.time() - t0

    if verbose:
        print("-" * 65)
        print(f"[*] Tiempo: {report.elapsed:.2f}s")
        print(f"[*] Distancia media de Hamming: {report.mean_flip_distance:.1f} bits")
        print(f"[*] Colisiones de multiconjunto (conocidas): {len(report.multiset_collisions)}")
        if report.ok:
            print("\nDIGEST VALIDADO: CERO ERRORES.")
        else:
            print(f"\nERRORES DETECTADOS: {len(report.failures) + (not report.prime_ok)}")
    return report


if __name__ == '__main__':
    run_audit()
