"""
Application service: decides whether a key is eligible for this backend.

A key is eligible when the union of the confine_to_keys patterns matches the
whole key. The union is searched leftmost-first, so an earlier pattern that
only matches a prefix of the key makes it ineligible even if a later pattern
would match it entirely.
"""

import re
from typing import Optional, Sequence

from hiera_aws_sm.domain.exceptions import SecretLookupError


class KeyFilter:
    def is_eligible(self, key: str, confine_to_keys: Optional[Sequence[str]]) -> bool:
        """Return True if *key* may be looked up.

        Raises:
            SecretLookupError: if a pattern is not a valid regular expression.
        """
        if confine_to_keys is None:
            return True

        if not confine_to_keys:
            return False

        try:
            patterns = [re.compile(p) for p in confine_to_keys]
        except re.error as exc:
            raise SecretLookupError(
                f"[hiera-aws-sm] Failed to create regexp with error {exc}"
            ) from exc

        # Patterns are searched separately so inline flags and group names
        # stay local to each one; ties on start position go to the earlier pattern.
        matches = [m for m in (p.search(key) for p in patterns) if m is not None]
        if not matches:
            return False
        first = min(matches, key=lambda m: m.start())
        return first.group(0) == key
