"""
Infrastructure adapter: in-process lookup session -> ILookupContext.

One instance is one lookup session. Explanations go to the module logger at
DEBUG and, when collect_explanations is set, to an in-memory list so callers
(e.g. the HTTP service) can return them.
"""

import logging
from typing import Callable

from hiera_aws_sm.domain.entities.secret_value import SecretValue
from hiera_aws_sm.domain.ports.lookup_context_port import ILookupContext

logger = logging.getLogger(__name__)


class InMemoryLookupContext(ILookupContext):
    """Session cache plus explain log, scoped to the lifetime of the instance."""

    def __init__(self, collect_explanations: bool = False) -> None:
        self._cache: dict[str, SecretValue] = {}
        self._collect = collect_explanations
        self.explanations: list[str] = []

    def explain(self, message: Callable[[], str]) -> None:
        if not (self._collect or logger.isEnabledFor(logging.DEBUG)):
            return
        text = message()
        logger.debug(text)
        if self._collect:
            self.explanations.append(text)

    def cache_has_key(self, key: str) -> bool:
        return key in self._cache

    def cached_value(self, key: str) -> SecretValue:
        return self._cache[key]

    def cache(self, key: str, value: SecretValue) -> SecretValue:
        self._cache[key] = value
        return value
