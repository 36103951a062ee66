"""Contract validators.

Each validator inspects a captured response (or a raw value pulled out of
one) and raises ``ValidationFailure`` on the first violated expectation.
Validators never modify what they inspect.

``ValidationFailure`` subclasses ``AssertionError`` so pytest reports it like
any other failed assertion.
"""

import statistics
import time
from collections.abc import Mapping
from typing import Any, Hashable, Iterable, Optional, Sequence, Union

from apicontract.client.models import CapturedResponse, RequestDescriptor


class ValidationFailure(AssertionError):
    """A contract expectation was not met."""

    def __init__(
        self,
        message: str,
        expected: Any = None,
        actual: Any = None,
        request: Optional[RequestDescriptor] = None,
    ):
        self.expected = expected
        self.actual = actual
        self.request = request
        text = f"{message}: expected {expected!r}, got {actual!r}"
        if request is not None:
            text = f"{text} [{request.describe()}]"
        super().__init__(text)


def start_timer() -> float:
    """Timestamp to pass to ``validate_response_time`` later."""
    return time.monotonic()


def validate_status_code(response: CapturedResponse, expected: int) -> None:
    """Fail unless the response status equals ``expected``."""
    if response.status != expected:
        raise ValidationFailure("Unexpected status code", expected, response.status, response.request)


def validate_response_structure(
    response: Optional[CapturedResponse],
    required_keys: Iterable[str] = (),
) -> None:
    """Fail when there is no response or body, or a required key is absent."""
    if response is None:
        raise ValidationFailure("Missing response", "a response", None)
    if response.body is None:
        raise ValidationFailure("Missing response body", "a body", None, response.request)

    for key in required_keys:
        if not isinstance(response.body, Mapping) or key not in response.body:
            raise ValidationFailure(
                "Response body is missing a key", key, _keys_of(response.body), response.request
            )


def validate_headers(
    response: CapturedResponse,
    expected_headers: Union[str, Mapping[str, Any], Iterable[str]],
) -> None:
    """Fail unless every named header is present (case-insensitive).

    Only presence is checked; when a mapping is given its values are ignored.
    A bare string names a single header.
    """
    if isinstance(expected_headers, str):
        expected_headers = [expected_headers]
    for name in expected_headers:
        if name not in response.headers:
            raise ValidationFailure(
                "Response header is missing", name, sorted(response.headers.keys()), response.request
            )


def validate_response_time(start_time: float, max_ms: float = 5000) -> int:
    """Fail if at least ``max_ms`` elapsed since ``start_time``.

    ``start_time`` must come from ``start_timer()``. Returns the elapsed
    milliseconds for further assertions.
    """
    elapsed_ms = max(0, int(round((time.monotonic() - start_time) * 1000)))
    if elapsed_ms >= max_ms:
        raise ValidationFailure("Response too slow", f"< {max_ms} ms", f"{elapsed_ms} ms")
    return elapsed_ms


def validate_array_response(data: Any, min_length: int = 0) -> None:
    """Fail unless ``data`` is a list/tuple holding at least ``min_length`` items."""
    if not isinstance(data, (list, tuple)):
        raise ValidationFailure("Expected an array", "list", type(data).__name__)
    if len(data) < min_length:
        raise ValidationFailure("Array too short", f">= {min_length} items", len(data))


def validate_object_properties(obj: Any, required_props: Iterable[str] = ()) -> None:
    """Fail on the first property absent from ``obj``.

    A property that is present with a JSON ``null`` value passes.
    """
    if not isinstance(obj, Mapping):
        raise ValidationFailure("Expected an object", "mapping", type(obj).__name__)
    for prop in required_props:
        if prop not in obj:
            raise ValidationFailure("Object is missing a property", prop, _keys_of(obj))


def validate_variation(values: Iterable[Hashable], min_distinct: int = 2) -> None:
    """Fail unless ``values`` holds at least ``min_distinct`` distinct items.

    Meant for randomizing endpoints, where some variation is expected but
    uniqueness is not guaranteed.
    """
    distinct = len(set(values))
    if distinct < min_distinct:
        raise ValidationFailure("Not enough variation", f">= {min_distinct} distinct", distinct)


def validate_unique_ratio(values: Sequence[Hashable], min_ratio: float) -> None:
    """Fail unless the share of distinct items is strictly above ``min_ratio``."""
    if not values:
        raise ValidationFailure("No values to compare", "a non-empty sequence", [])
    ratio = len(set(values)) / len(values)
    if ratio <= min_ratio:
        raise ValidationFailure("Too many duplicates", f"unique ratio > {min_ratio}", round(ratio, 3))


def validate_consistent_timings(timings_ms: Sequence[float], max_deviation_ms: float) -> float:
    """Fail if any timing strays ``max_deviation_ms`` or more from the mean.

    Returns the mean timing.
    """
    if not timings_ms:
        raise ValidationFailure("No timings to compare", "a non-empty sequence", [])
    mean = statistics.fmean(timings_ms)
    deviation = max(abs(t - mean) for t in timings_ms)
    if deviation >= max_deviation_ms:
        raise ValidationFailure("Inconsistent response times", f"< {max_deviation_ms} ms", f"{deviation:.0f} ms")
    return mean


def _keys_of(value: Any) -> Any:
    if isinstance(value, Mapping):
        return sorted(value.keys(), key=str)
    return type(value).__name__
