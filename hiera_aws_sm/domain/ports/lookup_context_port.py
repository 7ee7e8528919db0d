"""
Port (interface) for the host's lookup session.
The host owns the session cache and the explain log; the resolver only uses them.
Infrastructure adapters (e.g. InMemoryLookupContext) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Callable

from hiera_aws_sm.domain.entities.secret_value import SecretValue


class ILookupContext(ABC):
    @abstractmethod
    def explain(self, message: Callable[[], str]) -> None:
        """Record a diagnostic. *message* is only called if explanations are wanted."""
        ...

    @abstractmethod
    def cache_has_key(self, key: str) -> bool: ...

    @abstractmethod
    def cached_value(self, key: str) -> SecretValue: ...

    @abstractmethod
    def cache(self, key: str, value: SecretValue) -> SecretValue:
        """Store *value* under *key* for the rest of the session and return it."""
        ...


class IHostLookupContext(ILookupContext):
    """Lookup session as seen by a Hiera-style host that can unwind on not-found."""

    @abstractmethod
    def not_found(self) -> None:
        """Tell the host this backend declines to answer. May not return."""
        ...
