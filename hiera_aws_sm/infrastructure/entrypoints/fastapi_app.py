"""
FastAPI entry point: HTTP lookup service for hosts that query secrets over
HTTP (e.g. a Hiera HTTP backend or a deployment script).

Each POST /lookup request is one lookup session: every key in the request
shares a single InMemoryLookupContext, so repeated keys are fetched once.
Authentication is performed by an ITokenValidator reading the Bearer JWT
from each request.

Run locally:
    uvicorn hiera_aws_sm.infrastructure.entrypoints.fastapi_app:build_default_app \\
        --factory --port 8000
"""

import base64
import dataclasses
import logging
import os
from typing import Any, Optional, Union

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from hiera_aws_sm.application.use_cases.resolve_key import ResolveKeyUseCase
from hiera_aws_sm.domain.entities.lookup_options import (
    CLIENT_OPTIONS,
    ClientOptions,
    LookupOptions,
)
from hiera_aws_sm.domain.entities.lookup_outcome import LookupOutcome
from hiera_aws_sm.domain.entities.secret_value import BinarySecret
from hiera_aws_sm.domain.exceptions import ConfigurationError, SecretLookupError
from hiera_aws_sm.domain.ports.token_validator_port import ITokenValidator
from hiera_aws_sm.infrastructure.context.in_memory_context import InMemoryLookupContext

logger = logging.getLogger(__name__)


class LookupRequest(BaseModel):
    keys: list[Union[str, int, float]]
    options: dict[str, Any] = Field(default_factory=dict)
    explain: bool = False


class LookupResult(BaseModel):
    key: str
    status: str
    value: Any = None
    encoding: Optional[str] = None


class LookupResponse(BaseModel):
    results: list[LookupResult]
    explanations: list[str] = Field(default_factory=list)


def _to_result(key: str, outcome: LookupOutcome) -> LookupResult:
    secret = outcome.secret
    if secret is None:
        return LookupResult(key=key, status=outcome.status.value)
    if isinstance(secret, BinarySecret):
        return LookupResult(
            key=key,
            status=outcome.status.value,
            value=base64.b64encode(secret.value).decode("ascii"),
            encoding="base64",
        )
    return LookupResult(key=key, status=outcome.status.value, value=secret.value, encoding=secret.kind)


def create_app(
    use_case: ResolveKeyUseCase,
    validator: ITokenValidator,
    client_options: Optional[ClientOptions] = None,
) -> FastAPI:
    """Build the FastAPI app around an already wired use case and validator.

    Args:
        use_case:       ResolveKeyUseCase wired with a secret store factory.
        validator:      ITokenValidator for the Bearer JWT.
        client_options: Server-side AWS connection settings. Requests may not
                        set region, credentials, profile or endpoint_url.
    """
    client_options = client_options or ClientOptions()
    app = FastAPI(title="hiera-aws-sm lookup service")

    async def get_current_user(request: Request) -> dict:
        """FastAPI dependency: validate the JWT from the Authorization header."""
        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            raise HTTPException(status_code=401, detail="Missing or invalid Authorization header.")
        token = auth_header.split(" ", 1)[1]
        try:
            return validator.validate(token)
        except ValueError as exc:
            raise HTTPException(status_code=401, detail=str(exc)) from exc

    @app.post("/lookup", response_model=LookupResponse)
    def lookup(body: LookupRequest, user: dict = Depends(get_current_user)) -> LookupResponse:
        """Resolve every requested key within one lookup session."""
        forbidden = sorted(CLIENT_OPTIONS.intersection(body.options))
        if forbidden:
            raise HTTPException(
                status_code=400,
                detail=f"[hiera-aws-sm] Client options cannot be set per request: {', '.join(forbidden)}",
            )
        try:
            options = LookupOptions.from_mapping(body.options)
        except ConfigurationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        options = dataclasses.replace(options, client_options=client_options)

        context = InMemoryLookupContext(collect_explanations=body.explain)
        results: list[LookupResult] = []
        for raw_key in body.keys:
            key = str(raw_key)
            try:
                outcome = use_case.execute(key, options, context)
            except ConfigurationError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
            except SecretLookupError as exc:
                logger.warning("Lookup of %s for %s failed: %s", key, user.get("sub"), exc)
                raise HTTPException(status_code=502, detail=str(exc)) from exc
            results.append(_to_result(key, outcome))

        return LookupResponse(results=results, explanations=context.explanations)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


def build_default_app() -> FastAPI:
    """Composition Root for the service: wire adapters from the environment."""
    load_dotenv()

    from hiera_aws_sm.infrastructure.auth.jwks_validator import JwksTokenValidator
    from hiera_aws_sm.infrastructure.observability.logging_setup import configure_logging
    from hiera_aws_sm.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter

    configure_logging(os.environ.get("LOG_LEVEL", "INFO"))
    validator = JwksTokenValidator.for_cognito(
        user_pool_id=os.environ["COGNITO_USER_POOL_ID"],
        client_id=os.environ["COGNITO_CLIENT_ID"],
        region=os.environ.get("COGNITO_REGION", "us-east-1"),
    )
    client_options = ClientOptions(
        region=os.environ.get("AWS_DEFAULT_REGION"),
        profile=os.environ.get("HIERA_AWS_SM_PROFILE"),
        endpoint_url=os.environ.get("HIERA_AWS_SM_ENDPOINT_URL"),
    )
    return create_app(ResolveKeyUseCase(SecretsManagerAdapter), validator, client_options)
