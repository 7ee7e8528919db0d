"""
Domain entity for the result of resolving one lookup key.
Zero external dependencies: pure Python dataclass and enum only.

The three statuses are kept apart so the host decides how to unwind:
  - FOUND:     the backend answered with a value.
  - NOT_FOUND: the backend declines to answer for this key (filtered out,
               or nothing found while continue_if_not_found is set). A Hiera
               host moves on to its next backend.
  - NO_VALUE:  the backend answered "no such secret"; the host receives an
               explicit empty value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from hiera_aws_sm.domain.entities.secret_value import SecretValue


class LookupStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    NO_VALUE = "no_value"


@dataclass(frozen=True)
class LookupOutcome:
    status: LookupStatus
    secret: Optional[SecretValue] = None

    @classmethod
    def found(cls, secret: SecretValue) -> "LookupOutcome":
        return cls(LookupStatus.FOUND, secret)

    @classmethod
    def not_found(cls) -> "LookupOutcome":
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def no_value(cls) -> "LookupOutcome":
        return cls(LookupStatus.NO_VALUE)

    @property
    def value(self) -> Any:
        """The raw secret value, or None unless the status is FOUND."""
        return self.secret.value if self.secret is not None else None
