"""Path matching — compare one route pattern with one request path.

Pure functions, no state. The router calls ``match_pattern`` once per route
and keeps the most specific result.

Specificity is the inverse of the captured-variable count: ``/test/static/:v1``
beats ``/test/:v1/:v2`` for the path ``/test/static/foo``.
"""

from iota.routing.route import PatternMatch


def split_path(path: str) -> list[str]:
    """Split a path or pattern into segments.

    Leading and trailing slashes are trimmed first, so ``"/"`` and ``""``
    both become ``[""]``::

        "/users/:id/" -> ["users", ":id"]
        "/"           -> [""]
    """
    return path.strip("/").split("/")


def match_pattern(pattern: str, path_segments: list[str]) -> PatternMatch | None:
    """Match *pattern* against an already split request path.

    Returns a ``PatternMatch`` with the captured variables, or ``None`` when
    the pattern does not match. Segment counts must be equal. Literal
    segments compare exactly (case-sensitive); ``:name`` segments capture the
    raw path segment. An empty pattern segment never captures anything, so
    patterns like ``/a//b`` only match the identical path.
    """
    if ":" not in pattern and pattern.strip("/") == "/".join(path_segments):
        return PatternMatch()

    pattern_segments = split_path(pattern)
    if len(pattern_segments) != len(path_segments):
        return None

    variables: dict[str, str] = {}
    for pat, seg in zip(pattern_segments, path_segments, strict=True):
        if pat == seg:
            continue
        if not pat:
            return None
        if pat[0] == ":":
            variables[pat[1:]] = seg
            continue
        return None
    return PatternMatch(variables)
