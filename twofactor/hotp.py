"""
HOTP (HMAC-based One-Time Password) implementation following RFC 4226.

The same functions back TOTP: pass a time step from :mod:`twofactor.totp`
as the counter.
"""

import logging

from twofactor.crypto import Algorithm, AlgorithmLike, compute_hmac, constant_time_compare
from twofactor.utils import DEFAULT_DIGITS, counter_to_bytes, validate_digits

logger = logging.getLogger(__name__)

_POWERS_OF_TEN = tuple(10**n for n in range(11))


def derive_code(hmac_digest: bytes, digits: int = DEFAULT_DIGITS) -> str:
    """
    Turn an HMAC digest into a decimal code (RFC 4226 §5.3).

    Args:
        hmac_digest: HMAC output, at least 20 bytes for the supported hashes.
        digits:      Code length, 1 to 10.

    Returns:
        Zero-padded code of exactly ``digits`` characters.

    Raises:
        InvalidDigitCountError: If ``digits`` is outside ``[1, 10]``.
        ValueError: If the digest is too short for the selected offset.
    """
    validate_digits(digits)
    if not hmac_digest:
        raise ValueError("HMAC digest must not be empty")

    # Dynamic truncation
    offset = hmac_digest[-1] & 0x0F
    if len(hmac_digest) < offset + 4:
        raise ValueError(
            f"HMAC digest of {len(hmac_digest)} bytes is too short for offset {offset}"
        )
    code = (
        (hmac_digest[offset] & 0x7F) << 24
        | (hmac_digest[offset + 1] & 0xFF) << 16
        | (hmac_digest[offset + 2] & 0xFF) << 8
        | (hmac_digest[offset + 3] & 0xFF)
    )
    otp = code % _POWERS_OF_TEN[digits]
    return str(otp).zfill(digits)


def calculate_verification_code(
    secret: bytes,
    time_step: int,
    algorithm: AlgorithmLike = Algorithm.SHA1,
    digits: int = DEFAULT_DIGITS,
) -> str:
    """
    Generate the code for a counter or time step.

    Args:
        secret:    Raw shared secret bytes.
        time_step: HOTP counter, or TOTP time step.
        algorithm: HMAC algorithm.
        digits:    Number of OTP digits.

    Returns:
        Zero-padded OTP string.
    """
    validate_digits(digits)
    digest = compute_hmac(secret, counter_to_bytes(time_step), algorithm)
    return derive_code(digest, digits)


def verify_code(
    secret: bytes,
    time_step: int,
    candidate_code: str,
    algorithm: AlgorithmLike = Algorithm.SHA1,
    digits: int = DEFAULT_DIGITS,
) -> bool:
    """
    Check ``candidate_code`` against the code for exactly one time step.

    The comparison runs in constant time. Clock-drift tolerance is up to the
    caller: call once per time step in the accepted range.

    Args:
        secret:         Raw shared secret bytes.
        time_step:      HOTP counter, or TOTP time step.
        candidate_code: Code supplied by the user, compared as-is.
        algorithm:      HMAC algorithm.
        digits:         Expected OTP length.

    Returns:
        True if the code matches.
    """
    expected = calculate_verification_code(secret, time_step, algorithm, digits)
    if not isinstance(candidate_code, str):
        return False
    matched = constant_time_compare(candidate_code, expected)
    if not matched:
        logger.debug("Code rejected for time step %d", time_step)
    return matched
