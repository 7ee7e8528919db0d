"""
Infrastructure adapter: AWS Secrets Manager -> ISecretStore.

All boto3/botocore details (session construction, error codes, response keys)
are confined here; the rest of the codebase depends only on ISecretStore.
"""

import logging
import os
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from hiera_aws_sm.domain.entities.lookup_options import (
    CredentialSource,
    ResolvedCredentials,
)
from hiera_aws_sm.domain.entities.secret_value import SecretPayload
from hiera_aws_sm.domain.exceptions import (
    AuthorizationDeniedError,
    ConfigurationError,
    SecretNotFoundError,
    SecretStoreServiceError,
)
from hiera_aws_sm.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = frozenset({"ResourceNotFoundException"})
AUTHORIZATION_CODES = frozenset({"UnrecognizedClientException", "AccessDeniedException"})


class SecretsManagerAdapter(ISecretStore):
    """Reads secret values from AWS Secrets Manager."""

    def __init__(
        self,
        credentials: ResolvedCredentials | None = None,
        _client: Any = None,
    ) -> None:
        """
        Args:
            credentials: Resolved credentials; None uses the default chain.
            _client:     Optional pre-built secretsmanager client (used by
                         tests with botocore.stub.Stubber). Pass nothing for
                         normal instantiation.
        """
        if _client is not None:
            self._client = _client
        else:
            self._client = self._build_client(
                credentials or ResolvedCredentials(source=CredentialSource.DEFAULT_CHAIN)
            )

    @classmethod
    def _build_client(cls, credentials: ResolvedCredentials) -> Any:
        """Create the secretsmanager client.

        Raises:
            ConfigurationError: if botocore rejects the configuration (unknown
                                profile, malformed endpoint_url).
        """
        try:
            return cls._create_client(credentials)
        except (BotoCoreError, ValueError) as exc:
            target = f"profile {credentials.profile}" if credentials.profile else credentials.source.value
            raise ConfigurationError(
                f"[hiera-aws-sm] Failed to create Secrets Manager client for {target}: {exc}"
            ) from exc

    @staticmethod
    def _create_client(credentials: ResolvedCredentials) -> Any:
        if credentials.source is CredentialSource.EXPLICIT:
            session = boto3.Session(
                aws_access_key_id=credentials.access_key_id,
                aws_secret_access_key=credentials.secret_access_key,
                aws_session_token=credentials.session_token,
            )
        elif credentials.source is CredentialSource.PROFILE:
            session = boto3.Session(profile_name=credentials.profile)
        else:
            session = boto3.Session()

        region = (
            credentials.region
            or session.region_name
            or os.environ.get("AWS_DEFAULT_REGION", "us-east-1")
        )
        logger.debug(
            "Creating secretsmanager client (region=%s, credentials=%s)",
            region,
            credentials.source.value,
        )
        return session.client(
            "secretsmanager",
            region_name=region,
            endpoint_url=credentials.endpoint_url,
        )

    def get_secret_value(self, secret_id: str) -> SecretPayload:
        try:
            response = self._client.get_secret_value(SecretId=secret_id)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            message = exc.response.get("Error", {}).get("Message") or str(exc)
            if code in NOT_FOUND_CODES:
                raise SecretNotFoundError(secret_id, message) from exc
            if code in AUTHORIZATION_CODES:
                raise AuthorizationDeniedError(secret_id, message) from exc
            raise SecretStoreServiceError(secret_id, f"{code}: {message}" if code else message) from exc
        except BotoCoreError as exc:
            raise SecretStoreServiceError(secret_id, str(exc)) from exc

        return SecretPayload(
            binary=response.get("SecretBinary"),
            text=response.get("SecretString"),
        )
