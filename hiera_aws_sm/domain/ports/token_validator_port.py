"""
Port (interface) for bearer token validators guarding the HTTP lookup service.
Infrastructure adapters (e.g. JwksTokenValidator) must implement this interface.
"""

from abc import ABC, abstractmethod


class ITokenValidator(ABC):
    @abstractmethod
    def validate(self, token: str) -> dict:
        """Check the bearer token sent to POST /lookup and return its claims.

        The returned claims identify the caller in lookup failure logs
        (the "sub" claim); no other claim is read by the service.

        Raises:
            ValueError: if the token should not be allowed to read secrets
                        (bad signature, expired, foreign issuer or audience).
        """
        ...
