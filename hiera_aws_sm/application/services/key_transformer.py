"""
Application service: rewrites a lookup key into the ordered list of secret ids
to try. The order of the returned list is the fetch priority.
"""

import re
from typing import Optional, Sequence

from hiera_aws_sm.domain.entities.lookup_options import LookupOptions
from hiera_aws_sm.domain.exceptions import ConfigurationError


class KeyTransformer:
    def strip(self, key: str, strip_from_keys: Optional[Sequence[str]]) -> str:
        """Delete the first match of every pattern, applied in declaration order."""
        for pattern in strip_from_keys or ():
            try:
                key = re.sub(pattern, "", key, count=1)
            except re.error as exc:
                raise ConfigurationError(
                    f"[hiera-aws-sm] Invalid strip_from_keys pattern {pattern!r}: {exc}"
                ) from exc
        return key

    def candidates(self, key: str, options: LookupOptions) -> list[str]:
        """Return the candidate secret ids for *key*, never empty.

        Raises:
            ConfigurationError: if a strip_from_keys pattern does not compile.
        """
        key = self.strip(key, options.strip_from_keys)
        if options.prefixes is None:
            return [key]

        delimiter = options.delimiter
        return [
            f"{_drop_trailing(prefix, delimiter)}{delimiter}{key}"
            for prefix in options.prefixes
        ]


def _drop_trailing(prefix: str, delimiter: str) -> str:
    if delimiter and prefix.endswith(delimiter):
        return prefix[: -len(delimiter)]
    return prefix
