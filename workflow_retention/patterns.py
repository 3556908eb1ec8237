"""Parsing of the comma-separated pattern options."""

ALL_SENTINEL = "ALL"


def parse_pattern_list(pattern: str | None) -> frozenset[str]:
    """Split a comma-separated pattern into a set of trimmed entries.

    Entries are compared case-sensitively by callers. An empty or missing
    pattern yields an empty set.
    """
    if not pattern:
        return frozenset()
    return frozenset(item.strip() for item in pattern.split(","))


def is_all_sentinel(pattern: str | None) -> bool:
    """Return True when the pattern is the case-insensitive 'ALL' keyword."""
    return bool(pattern) and pattern.strip().upper() == ALL_SENTINEL
