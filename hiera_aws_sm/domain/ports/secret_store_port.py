"""
Port (interface) for secret stores.
Infrastructure adapters (e.g. SecretsManagerAdapter) must implement this interface.
"""

from abc import ABC, abstractmethod

from hiera_aws_sm.domain.entities.secret_value import SecretPayload


class ISecretStore(ABC):
    @abstractmethod
    def get_secret_value(self, secret_id: str) -> SecretPayload:
        """Fetch the raw payload stored under *secret_id*.

        Raises:
            SecretNotFoundError:      the store has no such entry.
            AuthorizationDeniedError: the caller may not read the entry.
            SecretStoreServiceError:  any other remote failure.
        """
        ...
