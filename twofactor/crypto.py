"""
Cryptographic primitives for twofactor.

Secret generation : platform CSPRNG (``secrets``)
Keyed hashing     : HMAC-SHA1 / SHA256 / SHA512 (``cryptography``)
"""

import hmac
import logging
import secrets
from enum import Enum
from typing import Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac

from twofactor.errors import EntropySourceError, InvalidKeyError, UnsupportedAlgorithmError

logger = logging.getLogger(__name__)

# ── Constants ────────────────────────────────────────────────────────────────

DEFAULT_SECRET_LENGTH = 20  # 160-bit secret, RFC 4226 §4 recommendation
MIN_SECRET_LENGTH = 10      # 80 bits, RFC 4226 §4 minimum


# ── Algorithms ───────────────────────────────────────────────────────────────

class Algorithm(str, Enum):
    """Supported HMAC algorithms."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def digest_size(self) -> int:
        """Size in bytes of the HMAC output."""
        return _HASH_MAP[self].digest_size

    @property
    def recommended_secret_length(self) -> int:
        """Secret length matching the hash output (RFC 6238 Appendix B seeds)."""
        return self.digest_size


_HASH_MAP: dict[str, type[hashes.HashAlgorithm]] = {
    Algorithm.SHA1: hashes.SHA1,
    Algorithm.SHA256: hashes.SHA256,
    Algorithm.SHA512: hashes.SHA512,
}

AlgorithmLike = Union[Algorithm, str]


def resolve_algorithm(algorithm: AlgorithmLike) -> Algorithm:
    """
    Coerce *algorithm* to an :class:`Algorithm` member.

    Args:
        algorithm: Enum member or its name (``"sha256"`` is accepted).

    Returns:
        The matching :class:`Algorithm`.

    Raises:
        UnsupportedAlgorithmError: If the value names no supported algorithm.
    """
    if isinstance(algorithm, Algorithm):
        return algorithm
    if isinstance(algorithm, str):
        try:
            return Algorithm(algorithm.upper())
        except ValueError:
            pass
    raise UnsupportedAlgorithmError(
        f"Unsupported algorithm {algorithm!r}. Supported: SHA1, SHA256, SHA512."
    )


# ── Secret generation ────────────────────────────────────────────────────────

def generate_secret(length: int = DEFAULT_SECRET_LENGTH) -> bytes:
    """
    Return ``length`` cryptographically random bytes for use as a shared secret.

    The bytes are returned raw. Apply a textual encoding such as
    :func:`twofactor.utils.encode_secret` separately when the secret has to be
    shown to a user or put in an enrollment QR code.

    Args:
        length: Secret length in bytes (default 20, i.e. 160 bits).

    Returns:
        ``length`` random bytes.

    Raises:
        ValueError:         If ``length`` is not a positive integer.
        EntropySourceError: If the operating system RNG fails.
    """
    if isinstance(length, bool) or not isinstance(length, int) or length < 1:
        raise ValueError(f"Secret length must be a positive integer, got {length!r}")
    if length < MIN_SECRET_LENGTH:
        logger.warning(
            "Generating a %d-byte secret, below the %d-byte minimum of RFC 4226",
            length,
            MIN_SECRET_LENGTH,
        )
    try:
        secret = secrets.token_bytes(length)
    except (OSError, NotImplementedError) as exc:
        logger.error("Secure random number generator failed: %s", exc)
        raise EntropySourceError("Secure random number generator is unavailable") from exc
    if len(secret) != length:
        raise EntropySourceError(
            f"Random number generator returned {len(secret)} bytes, expected {length}"
        )
    logger.debug("Generated %d-byte secret", length)
    return secret


# ── HMAC ─────────────────────────────────────────────────────────────────────

def compute_hmac(
    secret: bytes,
    message: bytes,
    algorithm: AlgorithmLike = Algorithm.SHA1,
) -> bytes:
    """
    Compute ``HMAC(secret, message)`` with the selected hash.

    Args:
        secret:    Raw key bytes, used verbatim.
        message:   Data to authenticate, normally the 8-byte counter.
        algorithm: Hash to use (default SHA1).

    Returns:
        The raw digest: 20, 32 or 64 bytes.

    Raises:
        InvalidKeyError:           If ``secret`` is empty or not bytes-like.
        UnsupportedAlgorithmError: If the algorithm is unknown or the
            backend refuses it.
    """
    alg = resolve_algorithm(algorithm)
    if not isinstance(secret, (bytes, bytearray, memoryview)):
        raise InvalidKeyError(f"Secret must be bytes, got {type(secret).__name__}")
    key = bytes(secret)
    if not key:
        raise InvalidKeyError("Secret must not be empty.")

    try:
        mac = crypto_hmac.HMAC(key, _HASH_MAP[alg]())
    except UnsupportedAlgorithm as exc:
        raise UnsupportedAlgorithmError(
            f"HMAC-{alg.value} is not available from the cryptography backend"
        ) from exc
    mac.update(bytes(message))
    return mac.finalize()


def constant_time_compare(a: str, b: str) -> bool:
    """Return True if *a* == *b* in constant time (timing-safe)."""
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
