"""
Segment classification by type tag.

Pipeline stages receive loosely ordered lists of values produced by other
builders. These helpers read the ``segment_type`` tag of each value and check
it against the set a stage accepts.
"""

import logging
from collections.abc import Iterable

from typing_extensions import Any, List, Optional, Tuple

from pydantic import BaseModel

from gchat_cards.errors import InvalidSegmentTypeError
from gchat_cards.models import Segment, SegmentType

logger = logging.getLogger(__name__)


def as_segment_list(values: Any) -> List[Any]:
    """Normalize a pipeline input (None, one value, or an iterable) to a list."""
    if values is None:
        return []
    if isinstance(values, (BaseModel, str, bytes, dict)) or not isinstance(values, Iterable):
        return [values]
    return list(values)


def segment_type_of(value: Any) -> Optional[SegmentType]:
    """Return the type tag of ``value``, or None for untagged values."""
    if isinstance(value, Segment):
        return getattr(type(value), "segment_type", None)
    return None


def describe_type(value: Any) -> str:
    """Name used for ``value`` in error messages: its tag, else its Python type."""
    tag = segment_type_of(value)
    return tag.value if tag is not None else type(value).__name__


def _allowed_names(allowed: Iterable[SegmentType]) -> List[str]:
    return sorted(tag.value for tag in allowed)


def validate_segments(values: Any, allowed: Iterable[SegmentType]) -> Tuple[bool, List[str]]:
    """
    Check every value against the allowed tags without raising.

    Returns:
        Tuple of (is_valid, issues). Each issue names the index, the actual
        type and the allowed types.
    """
    allowed = frozenset(allowed)
    issues = []
    for index, value in enumerate(as_segment_list(values)):
        if segment_type_of(value) not in allowed:
            issues.append(
                f"Item {index} has type {describe_type(value)}; "
                f"allowed types: {', '.join(_allowed_names(allowed))}"
            )
    return not issues, issues


def ensure_segment_types(
    values: Any, allowed: Iterable[SegmentType], parameter: str = "segments"
) -> List[Segment]:
    """
    Return ``values`` as a list after checking that every item carries an allowed tag.

    Raises:
        InvalidSegmentTypeError: listing the allowed types and every offending
            type, before any item is processed.
    """
    allowed = frozenset(allowed)
    items = as_segment_list(values)
    invalid = [describe_type(item) for item in items if segment_type_of(item) not in allowed]
    if invalid:
        error = InvalidSegmentTypeError(_allowed_names(allowed), invalid, parameter=parameter)
        logger.debug(f"Rejected {parameter}: {error}")
        raise error
    return items
