"""
Infrastructure adapter: OIDC JWKS endpoint -> ITokenValidator.

Guards the HTTP lookup service. Validates RS256-signed tokens by fetching the
issuer's public JWKS and verifying signature, audience, issuer and, when
configured, the token_use claim that Cognito adds to its tokens.
The JWKS document is fetched once per validator instance.
"""

from typing import Optional

import httpx
from jose import JWTError, jwt

from hiera_aws_sm.domain.ports.token_validator_port import ITokenValidator


class JwksTokenValidator(ITokenValidator):
    """Validates bearer tokens against an issuer's public JWKS."""

    def __init__(
        self,
        issuer: str,
        audience: str,
        jwks_url: Optional[str] = None,
        token_use: Optional[str] = None,
    ) -> None:
        self._issuer = issuer.rstrip("/")
        self._audience = audience
        self._jwks_url = jwks_url or f"{self._issuer}/.well-known/jwks.json"
        self._token_use = token_use
        self._jwks: Optional[dict] = None

    @classmethod
    def for_cognito(
        cls,
        user_pool_id: str,
        client_id: str,
        region: str = "us-east-1",
    ) -> "JwksTokenValidator":
        """Validator for ID tokens issued by a Cognito user pool."""
        return cls(
            issuer=f"https://cognito-idp.{region}.amazonaws.com/{user_pool_id}",
            audience=client_id,
            token_use="id",
        )

    def _get_jwks(self) -> dict:
        if self._jwks is None:
            response = httpx.get(self._jwks_url, timeout=10)
            response.raise_for_status()
            self._jwks = response.json()
        return self._jwks

    def validate(self, token: str) -> dict:
        """Decode and validate a bearer token.

        Raises:
            ValueError: on any validation failure (bad signature, expiry,
                        wrong audience/issuer, wrong token_use) or when the
                        JWKS document cannot be fetched.
        """
        try:
            jwks = self._get_jwks()
        except httpx.HTTPError as exc:
            raise ValueError(f"Unable to fetch JWKS: {exc}") from exc

        try:
            kid = jwt.get_unverified_header(token).get("kid")
            signing_key = next(
                (key for key in jwks.get("keys", []) if key.get("kid") == kid),
                None,
            )
            if not signing_key:
                raise ValueError("Matching key not found in JWKS; token may be stale.")

            claims = jwt.decode(
                token,
                signing_key,
                algorithms=["RS256"],
                audience=self._audience,
                issuer=self._issuer,
            )
        except JWTError as exc:
            raise ValueError(f"Token validation failed: {exc}") from exc

        if self._token_use and claims.get("token_use") != self._token_use:
            raise ValueError(
                f"Invalid token_use: expected {self._token_use!r}, got {claims.get('token_use')!r}"
            )
        return claims
