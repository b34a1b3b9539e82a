"""Display labels for series identifiers (presentation only, never for lookup)."""

import re

# Trailing "_<token>" type suffix such as "_Price"
_SUFFIX_RE = re.compile(r"_[^_]+$")


def normalize_label(identifier: str) -> str:
    """
    Strip the trailing type suffix and turn underscores into spaces.

    Idempotent: the result contains no underscores, so a second pass has
    nothing left to strip or replace.

    Examples:
        >>> normalize_label("S&P_500_Price")
        'S&P 500'
        >>> normalize_label("Gold")
        'Gold'
    """
    return _SUFFIX_RE.sub("", str(identifier)).replace("_", " ")
