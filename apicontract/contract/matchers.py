"""Range matcher for fluent timing assertions.

``within_range`` works like ``pytest.approx``: it compares equal to any
number inside the inclusive range, so

    assert elapsed_ms == within_range(0, 3000)

reads naturally and, with the ``pytest_assertrepr_compare`` hook in the root
``conftest.py``, fails with "expected X to be within range A - B".
"""

from typing import Any, List, Optional


def is_within_range(value: float, floor: float, ceiling: float) -> bool:
    """True when ``floor <= value <= ceiling``."""
    return floor <= value <= ceiling


class WithinRange:
    """Comparison object matching numbers inside ``[floor, ceiling]``."""

    __slots__ = ("floor", "ceiling")

    def __init__(self, floor: float, ceiling: float):
        if floor > ceiling:
            raise ValueError(f"floor {floor} is above ceiling {ceiling}")
        self.floor = floor
        self.ceiling = ceiling

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, bool) or not isinstance(other, (int, float)):
            return NotImplemented
        return is_within_range(other, self.floor, self.ceiling)

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"within_range({self.floor}, {self.ceiling})"

    def explain(self, value: Any) -> List[str]:
        """Failure lines for the pytest assertion hook."""
        return [f"expected {value!r} to be within range {self.floor} - {self.ceiling}"]


def within_range(floor: float, ceiling: float) -> WithinRange:
    return WithinRange(floor, ceiling)


def explain_comparison(op: str, left: Any, right: Any) -> Optional[List[str]]:
    """Return assertion lines when one side of ``==`` is a ``WithinRange``."""
    if op != "==":
        return None
    if isinstance(right, WithinRange):
        return right.explain(left)
    if isinstance(left, WithinRange):
        return left.explain(right)
    return None
