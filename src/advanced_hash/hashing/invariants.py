"""
src/advanced_hash/hashing/invariants.py
Geometría del Estado de 4 Palabras y Constantes de Mezcla.
Define el layout del estado (4 x 128 bits) y el digest final (4 x 64 bits).
"""

# =============================================================================
# LAYOUT DEL ESTADO (4 Palabras x 128 Bits)
# =============================================================================
# [ Word 0 | Word 1 | Word 2 | Word 3 ]  -> cada palabra es un u128 con wrapping.
# El digest conserva solo los 64 bits bajos de cada palabra (Little Endian).

STATE_WORDS  = 4
WORD_BITS    = 128
DIGEST_LANE  = 8     # Bytes que sobreviven por palabra
DIGEST_SIZE  = STATE_WORDS * DIGEST_LANE  # 32 bytes = 256 bits

# Rondas: cada ronda se empareja con cada byte de la entrada combinada
ROUNDS = 256

# Máscaras de Extracción
MASK_128  = (1 << WORD_BITS) - 1
MASK_64   = 0xFFFFFFFFFFFFFFFF
MASK_BYTE = 0xFF

# =============================================================================
# CONSTANTES DE MEZCLA
# =============================================================================

# Primo FNV-1 de 64 bits. Su primalidad se audita con sympy (ver audit.py).
PRIME = 0x100000001b3

# Módulo del paso no lineal. Es 2^64 - 1, NO 2^64: el resultado puede ser < MASK_64.
NLT_MODULUS = MASK_64

# Rotación fija del paso no lineal
ROTR_NLT = 23

# Rotación por ronda: (round % ROUND_ROT_PERIOD) + i * WORD_ROT_STEP
ROUND_ROT_PERIOD = 16
WORD_ROT_STEP    = 8

# Vector de Inicialización (partes fraccionarias de sqrt de los primeros primos, estilo SHA-512)
IV = (
    0x6a09e667f3bcc908,
    0xbb67ae8584caa73b,
    0x3c6ef372fe94f82b,
    0xa54ff53a5f1d36f1,
)


def initial_state() -> list[int]:
    """Estado fresco por invocación. Nunca se comparte entre llamadas."""
    return list(IV)
