"""Single-wildcard filename matching.

A filter such as ``shader.*`` is split around its first ``*`` into a prefix
and a suffix. Matching is substring containment rather than anchored glob
matching: the prefix may appear anywhere in the name, as may the suffix.
"""

from __future__ import annotations

WILDCARD = "*"


def has_wildcard(segment: str) -> bool:
    """True if a path segment contains the wildcard character."""
    return WILDCARD in segment


def split_filter(pattern: str) -> tuple[str, str]:
    """Split a filter into (prefix, suffix) around its first wildcard.

    A pattern without a wildcard is treated as all prefix.

    Examples:
        >>> split_filter("shader.*")
        ('shader.', '')
        >>> split_filter("*.frag")
        ('', '.frag')
        >>> split_filter("a*b*c")
        ('a', 'b*c')
    """
    pos = pattern.find(WILDCARD)
    if pos == -1:
        return pattern, ""
    return pattern[:pos], pattern[pos + 1 :]


def matches(candidate: str, prefix: str, suffix: str) -> bool:
    """Check whether a filename satisfies a split filter.

    Empty prefix and suffix match everything. The prefix is searched from the
    start of the name and the suffix from the end.

    Args:
        candidate: File name to test (final path component).
        prefix: Text before the wildcard.
        suffix: Text after the wildcard.

    Returns:
        True if both non-empty parts are contained in the name.
    """
    if not prefix and not suffix:
        return True
    prefix_found = not prefix or candidate.find(prefix) != -1
    suffix_found = not suffix or candidate.rfind(suffix) != -1
    return prefix_found and suffix_found


class WildcardMatcher:
    """A compiled filter, reusable across directory scans."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self.prefix, self.suffix = split_filter(pattern)

    def __call__(self, candidate: str) -> bool:
        return matches(candidate, self.prefix, self.suffix)

    def __repr__(self) -> str:
        return f"WildcardMatcher({self.pattern!r})"
