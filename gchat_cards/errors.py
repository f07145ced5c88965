"""
Errors raised by the card builders.
"""

from typing import Iterable, List


class InvalidSegmentTypeError(TypeError):
    """A card action or pipeline segment did not carry an accepted type tag.

    Raised before anything is applied, so the aggregate being built is never
    returned half-populated.
    """

    def __init__(self, allowed: Iterable[str], actual: Iterable[str], parameter: str = "segments"):
        self.allowed: List[str] = sorted(set(allowed))
        self.actual: List[str] = list(actual)
        self.parameter = parameter
        super().__init__(
            f"Invalid type(s) for '{parameter}': {', '.join(self.actual)}. "
            f"Allowed types: {', '.join(self.allowed)}"
        )
