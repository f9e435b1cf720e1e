"""
src/advanced_hash/config.py
Configuración del Motor y de los Colaboradores.
Valores por defecto a nivel de módulo; el entorno y la CLI los sobreescriben.
"""
import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

# Pool de trabajadores: mismo criterio que concurrent.futures.ThreadPoolExecutor
DEFAULT_MAX_WORKERS = min(32, (os.cpu_count() or 1) + 4)

# Modo estricto: una unidad perdida aborta el digest (LostResultError)
DEFAULT_STRICT = True

# Destino del log (append-only)
DEFAULT_LOG_DIR  = "logs"
DEFAULT_LOG_FILE = "hash_log.txt"

# Sal aleatoria alfanumérica
DEFAULT_SALT_LENGTH = 67

ENV_WORKERS = "ADVANCED_HASH_WORKERS"
ENV_STRICT  = "ADVANCED_HASH_STRICT"
ENV_LOG_DIR = "ADVANCED_HASH_LOG_DIR"

_TRUE  = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    val = raw.strip().lower()
    if val in _TRUE: return True
    if val in _FALSE: return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}.")


def _parse_workers(name: str, raw: str) -> int:
    try:
        workers = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from None
    if workers < 1:
        raise ValueError(f"{name} must be >= 1, got {workers}.")
    return workers


@dataclass(frozen=True)
class HashConfig:
    max_workers: int = DEFAULT_MAX_WORKERS
    strict: bool = DEFAULT_STRICT
    log_dir: str = DEFAULT_LOG_DIR
    log_file: str = DEFAULT_LOG_FILE
    salt_length: int = field(default=DEFAULT_SALT_LENGTH)

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}.")
        if self.salt_length < 0:
            raise ValueError(f"salt_length must be >= 0, got {self.salt_length}.")

    @property
    def log_path(self) -> str:
        return os.path.join(self.log_dir, self.log_file)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'HashConfig':
        """Lee ADVANCED_HASH_* del entorno. Valores inválidos -> ValueError."""
        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get(ENV_WORKERS):
            kwargs["max_workers"] = _parse_workers(ENV_WORKERS, env[ENV_WORKERS])
        if env.get(ENV_STRICT):
            kwargs["strict"] = _parse_bool(ENV_STRICT, env[ENV_STRICT])
        if env.get(ENV_LOG_DIR):
            kwargs["log_dir"] = env[ENV_LOG_DIR]
        return cls(**kwargs)

    def override(self, **changes) -> 'HashConfig':
        """Copia con los valores no-None sobreescritos (opciones de CLI)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
