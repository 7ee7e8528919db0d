"""
Domain entities for secret values returned by a secret store.
Zero external dependencies: pure Python dataclasses only.

A fetched secret is one of three variants; an absent secret is represented
by None wherever a SecretValue is optional.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Optional


@dataclass(frozen=True)
class SecretValue:
    value: Any

    kind: ClassVar[str] = "unknown"


@dataclass(frozen=True)
class BinarySecret(SecretValue):
    value: bytes

    kind: ClassVar[str] = "binary"


@dataclass(frozen=True)
class StructuredSecret(SecretValue):
    """A secret string that parsed as JSON (usually a key/value object)."""

    value: Any

    kind: ClassVar[str] = "structured"


@dataclass(frozen=True)
class PlainTextSecret(SecretValue):
    value: str

    kind: ClassVar[str] = "plaintext"


@dataclass(frozen=True)
class SecretPayload:
    """Raw response of a secret store: at most one of the two payloads is set."""

    binary: Optional[bytes] = None
    text: Optional[str] = None
