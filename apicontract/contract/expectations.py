"""Declarative response expectations.

An expectation is a small frozen record describing one required property
of a response. Each variant delegates to the matching validator, so a
contract can be written once as data and checked against many responses:

    contract = [StatusEquals(200), RequiredKey("id"), MaxElapsed(3000)]
    verify(response, *contract)
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from jsonschema import ValidationError, validate

from apicontract.client.models import CapturedResponse
from apicontract.common.metrics import MetricsCollector

from .validators import (
    ValidationFailure,
    validate_array_response,
    validate_headers,
    validate_response_structure,
    validate_status_code,
)


@dataclass(frozen=True)
class Expectation:
    """Base class for expectation variants."""

    def check(self, response: CapturedResponse) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class StatusEquals(Expectation):
    status: int

    def check(self, response: CapturedResponse) -> None:
        validate_status_code(response, self.status)


@dataclass(frozen=True)
class RequiredKey(Expectation):
    key: str

    def check(self, response: CapturedResponse) -> None:
        validate_response_structure(response, [self.key])


@dataclass(frozen=True)
class HeaderPresent(Expectation):
    name: str

    def check(self, response: CapturedResponse) -> None:
        validate_headers(response, [self.name])


@dataclass(frozen=True)
class MaxElapsed(Expectation):
    """The client-measured ``elapsed_ms`` must stay below ``max_ms``."""
    max_ms: int

    def check(self, response: CapturedResponse) -> None:
        if response.elapsed_ms >= self.max_ms:
            raise ValidationFailure(
                "Response too slow", f"< {self.max_ms} ms", f"{response.elapsed_ms} ms", response.request
            )


@dataclass(frozen=True)
class MinArrayLength(Expectation):
    """The body, or ``body[key]`` when ``key`` is set, must be an array of ``min_length``+ items."""
    min_length: int
    key: Optional[str] = None

    def check(self, response: CapturedResponse) -> None:
        data = response.body
        if self.key is not None:
            validate_response_structure(response, [self.key])
            data = data[self.key]
        validate_array_response(data, self.min_length)


@dataclass(frozen=True, eq=False)
class BodyMatchesSchema(Expectation):
    """The body must validate against a JSON Schema."""
    schema: Dict[str, Any]

    def check(self, response: CapturedResponse) -> None:
        try:
            validate(response.body, self.schema)
        except ValidationError as exc:
            location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
            raise ValidationFailure(
                f"Body violates schema at {location}", exc.validator, exc.message, response.request
            ) from exc


def verify(
    response: CapturedResponse,
    *expectations: Expectation,
    metrics: Optional[MetricsCollector] = None,
) -> None:
    """Check ``expectations`` in order, stopping at the first failure.

    When ``metrics`` is given, each outcome is counted under the variant's
    class name.
    """
    for expectation in expectations:
        check = type(expectation).__name__
        try:
            expectation.check(response)
        except ValidationFailure:
            if metrics is not None:
                metrics.record_check(check, passed=False)
            raise
        if metrics is not None:
            metrics.record_check(check, passed=True)
