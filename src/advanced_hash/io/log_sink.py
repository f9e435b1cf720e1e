"""
src/advanced_hash/io/log_sink.py
Registro Append-Only de Digests.
La creación del directorio es idempotente. Los errores de I/O se propagan tal cual.
"""
import logging
from pathlib import Path
from typing import Optional, TextIO, Union

from ..config import DEFAULT_LOG_DIR, DEFAULT_LOG_FILE
from ..hashing.encoder import to_base64, to_binary_string

logger = logging.getLogger(__name__)

RECORD_TEMPLATE = (
    "Input: '{input}'\n"
    "Salt: '{salt}'\n"
    "Pepper: '{pepper}'\n"
    "Binary Hash: {binary}\n"
    "Base64 Hash: {b64}\n"
    "\n"
)


def format_record(text: str, salt: str, pepper: str, digest: bytes) -> str:
    # Línea en blanco extra entre registros
    return RECORD_TEMPLATE.format(
        input=text, salt=salt, pepper=pepper,
        binary=to_binary_string(digest), b64=to_base64(digest),
    ) + "\n"


class HashLog:
    """Sink de texto. Usar como context manager o llamar close()."""

    def __init__(self, log_dir: Union[str, Path] = DEFAULT_LOG_DIR, filename: str = DEFAULT_LOG_FILE):
        self.directory = Path(log_dir)
        self.path = self.directory / filename
        self._handle: Optional[TextIO] = None

    def open(self) -> 'HashLog':
        if self._handle is None:
            self.directory.mkdir(parents=True, exist_ok=True)
            self._handle = self.path.open('a', encoding='utf-8')
            logger.debug("Opened hash log at %s", self.path)
        return self

    def write(self, text: str, salt: str, pepper: str, digest: bytes) -> None:
        self.open()
        self._handle.write(format_record(text, salt, pepper, digest))
        self._handle.flush()

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> 'HashLog':
        return self.open()

    def __exit__(self, *exc) -> None:
        self.close()
