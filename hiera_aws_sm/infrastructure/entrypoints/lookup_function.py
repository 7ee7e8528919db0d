"""
Hiera-style lookup_key entry point: the plugin function a host calls once per
key with its raw option map and its lookup session.

This module is the Composition Root for in-process hosts: it wires the
SecretsManagerAdapter into ResolveKeyUseCase and maps the three outcomes onto
the host protocol (value, None, or context.not_found()).
"""

from typing import Any, Mapping, Optional, Union

from hiera_aws_sm.application.use_cases.resolve_key import (
    ResolveKeyUseCase,
    SecretStoreFactory,
)
from hiera_aws_sm.domain.entities.lookup_options import LookupOptions
from hiera_aws_sm.domain.entities.lookup_outcome import LookupStatus
from hiera_aws_sm.domain.ports.lookup_context_port import IHostLookupContext
from hiera_aws_sm.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter


def lookup_key(
    key: Union[str, int, float],
    options: Optional[Mapping[str, Any]],
    context: IHostLookupContext,
    store_factory: SecretStoreFactory = SecretsManagerAdapter,
) -> Any:
    """Resolve *key* in AWS Secrets Manager on behalf of the host.

    Returns:
        bytes for binary secrets, the parsed JSON value for JSON secrets, the
        raw string otherwise, or None when no secret exists. When the backend
        declines the key, context.not_found() is called and its result (if
        it returns at all) is returned.

    Raises:
        ConfigurationError: on malformed options.
        SecretLookupError:  on permission or service failures.
    """
    use_case = ResolveKeyUseCase(store_factory)
    outcome = use_case.execute(key, LookupOptions.from_mapping(options), context)
    if outcome.status is LookupStatus.NOT_FOUND:
        return context.not_found()
    return outcome.value
