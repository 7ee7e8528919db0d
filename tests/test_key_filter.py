import pytest

from hiera_aws_sm.application.services.key_filter import KeyFilter
from hiera_aws_sm.domain.exceptions import SecretLookupError


def test_no_patterns_means_every_key_is_eligible():
    assert KeyFilter().is_eligible("anything", None)


def test_key_matching_whole_pattern_is_eligible():
    assert KeyFilter().is_eligible("app::db_password", ["app::.*"])


def test_substring_match_is_not_enough():
    assert not KeyFilter().is_eligible("myapp::db_password", ["app::db"])


def test_any_pattern_may_match():
    assert KeyFilter().is_eligible("secret_b", ["^secret_a$", "^secret_b$"])


def test_union_uses_leftmost_first_match():
    # "pass" matches first and only covers part of the key.
    assert not KeyFilter().is_eligible("password", ["pass", "password"])
    assert KeyFilter().is_eligible("password", ["password", "pass"])


def test_empty_pattern_list_rejects_every_key():
    assert not KeyFilter().is_eligible("key", [])


def test_invalid_pattern_raises_lookup_error():
    with pytest.raises(SecretLookupError, match="Failed to create regexp with error"):
        KeyFilter().is_eligible("key", ["("])


def test_inline_flags_stay_local_to_their_pattern():
    assert KeyFilter().is_eligible("BAR", ["foo", "(?i)bar"])
    assert not KeyFilter().is_eligible("FOO", ["foo", "(?i)bar"])


def test_patterns_may_reuse_group_names():
    assert KeyFilter().is_eligible("b", ["(?P<x>a)", "(?P<x>b)"])


def test_earliest_match_wins_across_patterns():
    # "word" matches at position 4, "pass" at position 0.
    assert not KeyFilter().is_eligible("password", ["word", "pass"])
