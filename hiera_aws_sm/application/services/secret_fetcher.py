"""
Application service: fetches one candidate id from the secret store and
decodes the payload.

Store errors are classified here:
  - SecretNotFoundError       -> None (absent, not an error)
  - AuthorizationDeniedError  -> SecretLookupError, aborts the resolution
  - SecretStoreServiceError   -> SecretLookupError, aborts the resolution
"""

import json
from typing import Optional

from hiera_aws_sm.domain.entities.secret_value import (
    BinarySecret,
    PlainTextSecret,
    SecretPayload,
    SecretValue,
    StructuredSecret,
)
from hiera_aws_sm.domain.exceptions import (
    AuthorizationDeniedError,
    SecretLookupError,
    SecretNotFoundError,
    SecretStoreServiceError,
)
from hiera_aws_sm.domain.ports.lookup_context_port import ILookupContext
from hiera_aws_sm.domain.ports.secret_store_port import ISecretStore


def decode_secret_string(secret_string: str) -> Optional[SecretValue]:
    """Parse *secret_string* as JSON, falling back to the string itself.

    A JSON null decodes to None, so the secret counts as absent.
    """
    try:
        parsed = json.loads(secret_string)
    except (ValueError, RecursionError):
        return PlainTextSecret(secret_string)
    if parsed is None:
        return None
    return StructuredSecret(parsed)


def decode_secret(payload: SecretPayload) -> Optional[SecretValue]:
    """Turn a raw store payload into a SecretValue. Never raises.

    A binary payload is returned verbatim and never parsed as text.
    """
    if payload.binary is not None:
        return BinarySecret(payload.binary)
    if payload.text is not None:
        return decode_secret_string(payload.text)
    return None


class SecretFetcher:
    def __init__(self, store: ISecretStore) -> None:
        self._store = store

    def fetch(self, secret_id: str, context: ILookupContext) -> Optional[SecretValue]:
        """Look up *secret_id* and return its decoded value, or None if absent.

        Raises:
            SecretLookupError: on missing permission or any other store failure.
        """
        context.explain(lambda: f"[hiera-aws-sm] Looking up {secret_id}")
        try:
            payload = self._store.get_secret_value(secret_id)
        except SecretNotFoundError:
            context.explain(lambda: f"[hiera-aws-sm] No data found for {secret_id}")
            return None
        except AuthorizationDeniedError as exc:
            raise SecretLookupError(
                f"[hiera-aws-sm] Skipping backend. No permission to access {secret_id}"
            ) from exc
        except SecretStoreServiceError as exc:
            raise SecretLookupError(
                f"[hiera-aws-sm] Skipping backend. Failed to lookup {secret_id}"
                f" due to {exc.detail or exc}"
            ) from exc

        secret = decode_secret(payload)
        if isinstance(secret, BinarySecret):
            context.explain(lambda: f"[hiera-aws-sm] {secret_id} is a binary")
        elif isinstance(secret, PlainTextSecret):
            context.explain(lambda: "[hiera-aws-sm] Not a hashable result")
        elif secret is None:
            context.explain(lambda: f"[hiera-aws-sm] {secret_id} holds no value")
        return secret
