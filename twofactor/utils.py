"""
Utility helpers for twofactor.
"""

import base64
import binascii
import re
import struct

from twofactor.errors import (
    InvalidDigitCountError,
    InvalidKeyError,
    InvalidTimeStepError,
    InvalidWindowSizeError,
)

# ── Constants ─────────────────────────────────────────────────────────────────

DEFAULT_DIGITS = 6
MIN_DIGITS = 1
MAX_DIGITS = 10           # a 31-bit truncated value has at most 10 digits
DEFAULT_WINDOW_SIZE = 30  # RFC 6238 §5.2
COUNTER_SIZE = 8
MAX_COUNTER = 2**64 - 1


# ── Counter ───────────────────────────────────────────────────────────────────

def counter_to_bytes(counter: int) -> bytes:
    """
    Pack a HOTP counter / TOTP time step as the 8-byte big-endian HMAC message.

    Args:
        counter: Value in ``[0, 2**64 - 1]``.

    Returns:
        8 bytes.

    Raises:
        InvalidTimeStepError: If the value is not an int or out of range.
    """
    if isinstance(counter, bool) or not isinstance(counter, int):
        raise InvalidTimeStepError(f"Time step must be an integer, got {counter!r}")
    if counter < 0 or counter > MAX_COUNTER:
        raise InvalidTimeStepError(f"Time step {counter} does not fit in 64 unsigned bits")
    return struct.pack(">Q", counter)


# ── Validation ────────────────────────────────────────────────────────────────

def validate_digits(digits: int) -> None:
    if isinstance(digits, bool) or not isinstance(digits, int) or not (
        MIN_DIGITS <= digits <= MAX_DIGITS
    ):
        raise InvalidDigitCountError(
            f"Digits must be between {MIN_DIGITS} and {MAX_DIGITS}, got {digits!r}"
        )


def validate_window_size(window_size: int) -> None:
    if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size < 1:
        raise InvalidWindowSizeError(
            f"Window size must be a positive number of seconds, got {window_size!r}"
        )


# ── Base32 ────────────────────────────────────────────────────────────────────

def normalize_secret(secret: str) -> str:
    """
    Normalise a base32 secret: strip spaces and dashes, uppercase, add padding.

    Args:
        secret: Raw user-supplied secret string.

    Returns:
        Uppercase base32 string with correct padding.

    Raises:
        InvalidKeyError: If the string is empty or contains invalid base32
            characters.
    """
    secret = secret.strip().upper().replace(" ", "").replace("-", "").rstrip("=")
    # Base32 alphabet: A-Z and 2-7
    if not re.fullmatch(r"[A-Z2-7]+", secret):
        raise InvalidKeyError("Secret contains invalid base32 characters.")
    pad = (8 - len(secret) % 8) % 8
    return secret + "=" * pad


def decode_secret(secret: str) -> bytes:
    """
    Decode a base32-encoded secret string to raw bytes.

    Args:
        secret: Base32 secret (spaces, dashes and missing padding tolerated).

    Returns:
        Raw bytes.

    Raises:
        InvalidKeyError: On invalid base32 input.
    """
    try:
        return base64.b32decode(normalize_secret(secret))
    except binascii.Error as exc:
        raise InvalidKeyError(f"Invalid base32 secret: {exc}") from exc


def encode_secret(raw: bytes) -> str:
    """Encode raw bytes as a base32 string (no padding)."""
    return base64.b32encode(raw).decode("ascii").rstrip("=")


# ── Base64 ────────────────────────────────────────────────────────────────────

def encode_secret_base64(raw: bytes) -> str:
    """Encode raw bytes as standard, padded base64. Nothing is trimmed."""
    return base64.b64encode(raw).decode("ascii")


def decode_secret_base64(secret: str) -> bytes:
    """
    Decode a standard base64 secret to raw bytes.

    Raises:
        InvalidKeyError: On invalid base64 input.
    """
    try:
        return base64.b64decode(secret.strip(), validate=True)
    except ValueError as exc:  # binascii.Error or non-ASCII input
        raise InvalidKeyError(f"Invalid base64 secret: {exc}") from exc


# ── Display ───────────────────────────────────────────────────────────────────

def format_otp(code: str, group: int = 3) -> str:
    """
    Format an OTP code with spaces for readability.

    Example::

        >>> format_otp("123456")
        '123 456'

    Args:
        code:  Digit string.
        group: Digit grouping size.

    Returns:
        Spaced OTP string.
    """
    if group < 1:
        raise ValueError("group must be at least 1")
    return " ".join(code[i : i + group] for i in range(0, len(code), group))
