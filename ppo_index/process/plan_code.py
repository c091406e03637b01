# Path: ppo_index/process/plan_code.py
"""
Plan Code Extractor

Pulls the region/plan code token out of a file reference location.

Index files name their rate files like
    2026-01_302_42B0_in-network-rates_1_of_3.json.gz
and the token between the first and third underscore (302_42B0) is a
proxy for the region the file covers.
"""

from urllib.parse import unquote, urlsplit

from ..constants import PLAN_CODE_SEPARATOR, PATH_ROOT_MARKER
from ..errors import PlanCodeError, PlanCodeFailure


def _final_segment(path: str) -> str:
    """Return the last path segment, ignoring trailing slashes."""
    if not path:
        return ''
    stripped = path.rstrip(PATH_ROOT_MARKER)
    if not stripped:
        return PATH_ROOT_MARKER
    return stripped.rsplit(PATH_ROOT_MARKER, 1)[-1]


def extract_plan_code(url: str) -> str:
    """
    Extract the plan code from a location URL.

    Args:
        url: Location URL of a file reference

    Returns:
        Substring strictly between the first and third '_' of the
        final path segment

    Raises:
        PlanCodeError: With kind INVALID_URL, NO_FILENAME,
            INSUFFICIENT_SEPARATORS or INVALID_SEPARATOR_SPACING

    Example:
        >>> extract_plan_code('https://h/p/2026-01_302_42B0_rates.json.gz')
        '302_42B0'
    """
    try:
        path = unquote(urlsplit(url).path)
    except ValueError as e:
        raise PlanCodeError(PlanCodeFailure.INVALID_URL, url, f"cannot parse URL: {e}") from e

    filename = _final_segment(path)
    if filename == '' or filename == PATH_ROOT_MARKER:
        raise PlanCodeError(
            PlanCodeFailure.NO_FILENAME, url, "no filename found in URL path"
        )

    first = filename.find(PLAN_CODE_SEPARATOR)
    second = filename.find(PLAN_CODE_SEPARATOR, first + 1) if first != -1 else -1
    third = filename.find(PLAN_CODE_SEPARATOR, second + 1) if second != -1 else -1

    if third == -1:
        raise PlanCodeError(
            PlanCodeFailure.INSUFFICIENT_SEPARATORS,
            url,
            f"filename {filename!r} does not contain enough underscores"
        )

    if third <= first + 1:
        raise PlanCodeError(
            PlanCodeFailure.INVALID_SEPARATOR_SPACING,
            url,
            f"invalid underscore positions in filename {filename!r}"
        )

    return filename[first + 1:third]


__all__ = ['extract_plan_code']
