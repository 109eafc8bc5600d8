"""Custom exception hierarchy for billboard-charts."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar


class ErrorKind(StrEnum):
    """Stable discriminator carried by every ChartError."""

    NETWORK = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    PARSE = "PARSE_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"


class BillboardChartsError(Exception):
    """Base exception for all billboard-charts errors.

    All exceptions carry an optional `context` dict for structured error
    metadata that can be logged or serialized without parsing the message.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ConfigError(BillboardChartsError):
    """Invalid or missing configuration.

    Raised by load_config() during startup. Should be treated as fatal.

    Context keys:
        field (str): the config field that failed validation
        value (Any): the invalid value
    """


class ChartError(BillboardChartsError):
    """Base of the chart retrieval taxonomy.

    Callers branch on `kind` rather than on the message text. `cause` holds
    the underlying exception, if any; raise sites also chain it with
    `raise ... from cause`.
    """

    kind: ClassVar[ErrorKind]

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.cause = cause

    @property
    def code(self) -> str:
        """The kind as a plain string, e.g. "NOT_FOUND"."""
        return self.kind.value


class NetworkError(ChartError):
    """Connection, DNS, or HTTP status failure.

    Raised after retries are exhausted, or immediately for non-retryable
    status codes such as 404.

    Context keys:
        url (str): the URL that was being fetched
        attempts (int): number of requests made
        status_code (int | None): HTTP status if a response was received
    """

    kind = ErrorKind.NETWORK


class RequestTimeoutError(ChartError):
    """The request exceeded the configured timeout on its final attempt.

    Context keys:
        url (str): the URL that was being fetched
        attempts (int): number of requests made
        timeout (float): per-attempt timeout in seconds
    """

    kind = ErrorKind.TIMEOUT


class ParsingError(ChartError):
    """Unexpected failure while traversing fetched markup."""

    kind = ErrorKind.PARSE


class NotFoundError(ChartError):
    """The page parsed but yielded no chart entries.

    Usually means the upstream markup changed, not a transient fault.
    """

    kind = ErrorKind.NOT_FOUND


class InvalidInputError(ChartError):
    """Caller-supplied chart name or date failed validation.

    Raised before any network access.

    Context keys:
        field (str): "chart_name" or "date"
        value (Any): the rejected value
    """

    kind = ErrorKind.INVALID_INPUT
