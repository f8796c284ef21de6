"""Text encodings for displaying discriminators."""

import base64

import base58  # type: ignore[import-untyped]


def to_hex(b: bytes) -> str:
    return b.hex()


def to_prefixed_hex(b: bytes) -> str:
    return "0x" + b.hex()


def to_byte_array(b: bytes) -> str:
    """Decimal byte list, e.g. ``[181, 16, 140, 34, 85, 113, 210, 20]``."""
    return "[" + ", ".join(str(x) for x in b) + "]"


def to_base64(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")


def to_base58(b: bytes) -> str:
    """Base58 form, as RPC memcmp filters expect for account data prefixes."""
    return base58.b58encode(b).decode()
