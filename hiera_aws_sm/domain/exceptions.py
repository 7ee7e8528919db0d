"""
Exception hierarchy for the hiera-aws-sm lookup backend.

Two families live here:
  - Lookup-level errors raised to the host (ConfigurationError, SecretLookupError).
  - Store-level errors raised by ISecretStore adapters and classified by the
    SecretFetcher. Store errors never reach the host directly.
"""


class HieraAwsSmError(Exception):
    """Base exception class for all hiera-aws-sm exceptions."""

    pass


class ConfigurationError(HieraAwsSmError):
    """Raised when lookup options are malformed (wrong types, bad regexp)."""

    pass


class SecretLookupError(HieraAwsSmError):
    """Raised when the backend cannot answer: permission denied or service failure."""

    pass


class SecretStoreError(HieraAwsSmError):
    """Base class for errors reported by a secret store adapter."""

    def __init__(self, secret_id: str, detail: str = ""):
        self.secret_id = secret_id
        self.detail = detail
        message = f"{secret_id}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class SecretNotFoundError(SecretStoreError):
    """The store has no entry for the requested id."""

    pass


class AuthorizationDeniedError(SecretStoreError):
    """The caller lacks permission to read the requested id."""

    pass


class SecretStoreServiceError(SecretStoreError):
    """Any other remote failure (throttling, connectivity, service-side errors)."""

    pass
