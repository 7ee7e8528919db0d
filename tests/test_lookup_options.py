import logging

import pytest

from hiera_aws_sm.domain.entities.lookup_options import (
    ClientOptions,
    CredentialSource,
    LookupOptions,
)
from hiera_aws_sm.domain.exceptions import ConfigurationError


def test_defaults_for_empty_options():
    options = LookupOptions.from_mapping({})

    assert options.confine_to_keys is None
    assert options.strip_from_keys is None
    assert options.prefixes is None
    assert options.delimiter == "/"
    assert options.continue_if_not_found is False
    assert options.client_options == ClientOptions()


def test_none_options_are_treated_as_empty():
    assert LookupOptions.from_mapping(None) == LookupOptions()


def test_lists_become_tuples():
    options = LookupOptions.from_mapping(
        {"confine_to_keys": ["^app::.*"], "prefixes": ["puppet/common"], "strip_from_keys": ["::"]}
    )

    assert options.confine_to_keys == ("^app::.*",)
    assert options.prefixes == ("puppet/common",)
    assert options.strip_from_keys == ("::",)


@pytest.mark.parametrize("name", ["confine_to_keys", "strip_from_keys", "prefixes"])
def test_non_list_option_is_rejected(name):
    with pytest.raises(ConfigurationError, match=f"{name} must be an array"):
        LookupOptions.from_mapping({name: "not-a-list"})


def test_non_string_delimiter_is_rejected_with_prefixes():
    with pytest.raises(ConfigurationError, match="delimiter must be a String"):
        LookupOptions.from_mapping({"prefixes": ["a"], "delimiter": 5})


def test_singular_prefix_becomes_single_prefix_list():
    options = LookupOptions.from_mapping({"prefix": "puppet"})

    assert options.prefixes == ("puppet",)


def test_prefixes_win_over_singular_prefix():
    options = LookupOptions.from_mapping({"prefix": "puppet", "prefixes": ["a", "b"]})

    assert options.prefixes == ("a", "b")


def test_unknown_keys_are_ignored():
    options = LookupOptions.from_mapping({"uri": "ignored", "something_else": 1})

    assert options == LookupOptions()


def test_misspelled_key_is_logged(caplog):
    with caplog.at_level(logging.WARNING):
        LookupOptions.from_mapping({"confine_to_key": ["x"]})

    assert "did you mean 'confine_to_keys'" in caplog.text


def test_client_options_accept_both_key_spellings():
    short = ClientOptions.from_mapping({"aws_access_key": "AK", "aws_secret_key": "SK"})
    long = ClientOptions.from_mapping({"aws_access_key_id": "AK", "aws_secret_access_key": "SK"})

    assert short == long
    assert short.access_key_id == "AK"


def test_explicit_keys_take_precedence_over_profile():
    client = ClientOptions(
        region="eu-west-1",
        access_key_id="AK",
        secret_access_key="SK",
        profile="ops",
    )

    credentials = client.resolve_credentials()

    assert credentials.source is CredentialSource.EXPLICIT
    assert credentials.region == "eu-west-1"
    assert credentials.access_key_id == "AK"
    assert credentials.profile is None


def test_profile_used_without_explicit_keys():
    credentials = ClientOptions(profile="ops").resolve_credentials()

    assert credentials.source is CredentialSource.PROFILE
    assert credentials.profile == "ops"


def test_default_chain_when_nothing_configured():
    credentials = ClientOptions(endpoint_url="http://localhost:4566").resolve_credentials()

    assert credentials.source is CredentialSource.DEFAULT_CHAIN
    assert credentials.endpoint_url == "http://localhost:4566"


def test_half_key_pair_is_rejected():
    with pytest.raises(ConfigurationError, match="must be set together"):
        ClientOptions(access_key_id="AK").resolve_credentials()


def test_credentials_repr_hides_secrets():
    credentials = ClientOptions(access_key_id="AK", secret_access_key="SK").resolve_credentials()

    assert "SK" not in repr(credentials)
