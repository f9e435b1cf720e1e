"""
src/advanced_hash/errors.py
Taxonomía de Errores del Motor.

- SchedulingError: no se pudo planificar una unidad de trabajo (agotamiento de recursos).
- LostResultError: una unidad planificada no reportó resultado (modo estricto).
- Los errores de I/O (log, disco) NO se envuelven: OSError llega intacto al llamador.
"""


class AdvancedHashError(Exception):
    """Raíz de todos los errores propios del motor."""


class StateError(AdvancedHashError, ValueError):
    """El estado no tiene exactamente 4 palabras."""


class EncodingError(AdvancedHashError, ValueError):
    """Entrada malformada para un decodificador (Base64 / binario)."""


class SchedulingError(AdvancedHashError):
    """
    Agotamiento de recursos al planificar.
    Fatal para la invocación actual; nunca se degrada en silencio.
    """

    def __init__(self, scheduled: int, total: int):
        self.scheduled = scheduled
        self.total = total
        super().__init__(
            f"Scheduling failed after {scheduled} of {total} units."
        )


class LostResultError(AdvancedHashError):
    """
    Resultado parcial: algunas unidades abortaron o se perdieron.
    Solo se lanza en modo estricto; en modo permisivo la contribución se descarta.
    """

    def __init__(self, lost: int, scheduled: int):
        self.lost = lost
        self.scheduled = scheduled
        super().__init__(
            f"{lost} of {scheduled} units failed to report a result."
        )
