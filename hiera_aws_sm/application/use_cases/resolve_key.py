"""
Use-case: resolve one lookup key to a secret for the current lookup session.
Depends only on Domain ports and entities: no infrastructure imports.

Flow: filter -> session cache -> transform into candidates -> fetch each
candidate in order until one is present -> cache -> outcome.
"""

from typing import Callable, Union

from hiera_aws_sm.application.services.key_filter import KeyFilter
from hiera_aws_sm.application.services.key_transformer import KeyTransformer
from hiera_aws_sm.application.services.secret_fetcher import SecretFetcher
from hiera_aws_sm.domain.entities.lookup_options import LookupOptions, ResolvedCredentials
from hiera_aws_sm.domain.entities.lookup_outcome import LookupOutcome
from hiera_aws_sm.domain.ports.lookup_context_port import ILookupContext
from hiera_aws_sm.domain.ports.secret_store_port import ISecretStore

SecretStoreFactory = Callable[[ResolvedCredentials], ISecretStore]


class ResolveKeyUseCase:
    def __init__(
        self,
        store_factory: SecretStoreFactory,
        key_filter: KeyFilter | None = None,
        key_transformer: KeyTransformer | None = None,
    ) -> None:
        """
        Args:
            store_factory:   Builds an ISecretStore from resolved credentials.
                             Called at most once per execute().
            key_filter:      Optional KeyFilter override.
            key_transformer: Optional KeyTransformer override.
        """
        self._store_factory = store_factory
        self._key_filter = key_filter or KeyFilter()
        self._key_transformer = key_transformer or KeyTransformer()

    def execute(
        self,
        key: Union[str, int, float],
        options: LookupOptions,
        context: ILookupContext,
    ) -> LookupOutcome:
        """Resolve *key* and report what the backend found.

        Returns:
            LookupOutcome.found(secret) when a candidate yields a value,
            LookupOutcome.not_found() when the key is filtered out or nothing
            is found with continue_if_not_found set, otherwise
            LookupOutcome.no_value().

        Raises:
            ConfigurationError: on malformed patterns or credentials.
            SecretLookupError:  on a bad confine_to_keys regexp, or when the
                                store denies access or fails. Remaining
                                candidates are not tried.
        """
        key = str(key)

        if not self._key_filter.is_eligible(key, options.confine_to_keys):
            context.explain(
                lambda: f"[hiera-aws-sm] Skipping secrets manager as {key} doesn't match confine_to_keys"
            )
            return LookupOutcome.not_found()

        if context.cache_has_key(key):
            context.explain(lambda: f"[hiera-aws-sm] Returning cached value for {key}")
            return LookupOutcome.found(context.cached_value(key))

        candidates = self._key_transformer.candidates(key, options)
        credentials = options.client_options.resolve_credentials()
        fetcher = SecretFetcher(self._store_factory(credentials))

        for candidate in candidates:
            secret = fetcher.fetch(candidate, context)
            if secret is not None:
                return LookupOutcome.found(context.cache(key, secret))

        if options.continue_if_not_found:
            return LookupOutcome.not_found()
        return LookupOutcome.no_value()
