"""Query parameter parsing for framework adapters."""

from exposurelog.core.schema import INTEGER_MAX


def _parse_since_param(params: dict[str, list[str]]) -> int:
    """Parse and validate the 'since' query parameter.

    Args:
        params: Parsed query string parameters (as returned by urllib.parse.parse_qs).

    Returns:
        Epoch millis as int, defaulting to 0 if missing, non-integer or negative.
        Values past the largest storable date are capped at INTEGER_MAX, which
        still selects no records.
    """
    try:
        value = int(params.get("since", ["0"])[0])
    except ValueError:
        return 0
    if value < 0:
        return 0
    return min(value, INTEGER_MAX)
