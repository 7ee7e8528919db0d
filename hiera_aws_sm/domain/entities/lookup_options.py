"""
Domain entities for the lookup options passed by the host on every call.
Zero external dependencies: pure Python dataclasses only.

The host hands over an untyped key/value map. LookupOptions.from_mapping()
validates it once at the boundary; everything downstream works with the
typed, immutable record.
"""

import difflib
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from hiera_aws_sm.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = "/"

_ACCESS_KEY_NAMES = ("aws_access_key", "aws_access_key_id")
_SECRET_KEY_NAMES = ("aws_secret_key", "aws_secret_access_key")

CLIENT_OPTIONS = frozenset(
    {
        "region",
        "aws_session_token",
        "aws_profile",
        "endpoint_url",
        *_ACCESS_KEY_NAMES,
        *_SECRET_KEY_NAMES,
    }
)

KNOWN_OPTIONS = frozenset(
    {
        "confine_to_keys",
        "strip_from_keys",
        "prefixes",
        "prefix",
        "delimiter",
        "continue_if_not_found",
        *CLIENT_OPTIONS,
    }
)


class CredentialSource(Enum):
    EXPLICIT = "explicit"
    PROFILE = "profile"
    DEFAULT_CHAIN = "default_chain"


@dataclass(frozen=True)
class ResolvedCredentials:
    """Credentials settled once per resolution and handed to the store factory."""

    source: CredentialSource
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    access_key_id: Optional[str] = field(default=None, repr=False)
    secret_access_key: Optional[str] = field(default=None, repr=False)
    session_token: Optional[str] = field(default=None, repr=False)
    profile: Optional[str] = None


@dataclass(frozen=True)
class ClientOptions:
    region: Optional[str] = None
    access_key_id: Optional[str] = field(default=None, repr=False)
    secret_access_key: Optional[str] = field(default=None, repr=False)
    session_token: Optional[str] = field(default=None, repr=False)
    profile: Optional[str] = None
    endpoint_url: Optional[str] = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "ClientOptions":
        return cls(
            region=options.get("region"),
            access_key_id=_first_of(options, _ACCESS_KEY_NAMES),
            secret_access_key=_first_of(options, _SECRET_KEY_NAMES),
            session_token=options.get("aws_session_token"),
            profile=options.get("aws_profile"),
            endpoint_url=options.get("endpoint_url"),
        )

    def resolve_credentials(self) -> ResolvedCredentials:
        """Apply the precedence explicit keys > named profile > default chain.

        Raises:
            ConfigurationError: if only one half of the access key pair is set.
        """
        if bool(self.access_key_id) != bool(self.secret_access_key):
            raise ConfigurationError(
                "[hiera-aws-sm] aws_access_key and aws_secret_key must be set together"
            )
        if self.access_key_id:
            return ResolvedCredentials(
                source=CredentialSource.EXPLICIT,
                region=self.region,
                endpoint_url=self.endpoint_url,
                access_key_id=self.access_key_id,
                secret_access_key=self.secret_access_key,
                session_token=self.session_token,
            )
        if self.profile:
            return ResolvedCredentials(
                source=CredentialSource.PROFILE,
                region=self.region,
                endpoint_url=self.endpoint_url,
                profile=self.profile,
            )
        return ResolvedCredentials(
            source=CredentialSource.DEFAULT_CHAIN,
            region=self.region,
            endpoint_url=self.endpoint_url,
        )


@dataclass(frozen=True)
class LookupOptions:
    confine_to_keys: Optional[tuple[str, ...]] = None
    strip_from_keys: Optional[tuple[str, ...]] = None
    prefixes: Optional[tuple[str, ...]] = None
    delimiter: str = DEFAULT_DELIMITER
    continue_if_not_found: bool = False
    client_options: ClientOptions = field(default_factory=ClientOptions)

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "LookupOptions":
        """Validate a host option map and build the typed record.

        Unknown keys are ignored; a close misspelling of a known option is
        logged as a warning.

        Raises:
            ConfigurationError: on non-list pattern/prefix options or a
                                non-string delimiter.
        """
        options = options or {}
        _warn_on_misspelled_keys(options)

        confine_to_keys = _optional_list(options, "confine_to_keys")
        strip_from_keys = _optional_list(options, "strip_from_keys")
        prefixes = _optional_list(options, "prefixes")
        if prefixes is None and options.get("prefix") is not None:
            prefixes = (str(options["prefix"]),)

        delimiter = options.get("delimiter")
        if delimiter is None:
            delimiter = DEFAULT_DELIMITER
        elif prefixes is not None and not isinstance(delimiter, str):
            raise ConfigurationError("[hiera-aws-sm] delimiter must be a String")

        return cls(
            confine_to_keys=confine_to_keys,
            strip_from_keys=strip_from_keys,
            prefixes=prefixes,
            delimiter=str(delimiter),
            continue_if_not_found=bool(options.get("continue_if_not_found", False)),
            client_options=ClientOptions.from_mapping(options),
        )


def _optional_list(options: Mapping[str, Any], name: str) -> Optional[tuple[str, ...]]:
    value = options.get(name)
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"[hiera-aws-sm] {name} must be an array")
    return tuple(str(item) for item in value)


def _first_of(options: Mapping[str, Any], names: tuple[str, ...]) -> Optional[str]:
    for name in names:
        if options.get(name):
            return options[name]
    return None


def _warn_on_misspelled_keys(options: Mapping[str, Any]) -> None:
    for key in options:
        if key in KNOWN_OPTIONS:
            continue
        close = difflib.get_close_matches(str(key), KNOWN_OPTIONS, n=1, cutoff=0.8)
        if close:
            logger.warning(
                "[hiera-aws-sm] Ignoring unknown option %r (did you mean %r?)",
                key,
                close[0],
            )
