"""Exception taxonomy for the browser automation helpers."""

from __future__ import annotations


class AutomationError(Exception):
    """Base exception for every failure raised by the suite helpers."""


class WaitTimeoutError(AutomationError):
    """An element or page did not reach the awaited state within its budget."""

    def __init__(
        self,
        description: str,
        condition: str,
        timeout_ms: int,
        elapsed_ms: int,
    ) -> None:
        self.description = description
        self.condition = condition
        self.timeout_ms = timeout_ms
        self.elapsed_ms = elapsed_ms
        super().__init__(
            f"Timed out after {elapsed_ms}ms waiting for {description} "
            f"to be {condition} (timeout {timeout_ms}ms)"
        )


class ActionFailureError(AutomationError):
    """A click, fill or select failed after the element became visible."""

    def __init__(self, action: str, description: str, cause: BaseException | None = None) -> None:
        self.action = action
        self.description = description
        self.cause = cause
        message = f"{action} failed on {description}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class UnexpectedStatusError(AutomationError):
    """An HTTP response carried a different status code than expected."""

    def __init__(self, expected: int, actual: int, body: str, url: str = "") -> None:
        self.expected = expected
        self.actual = actual
        self.body = body
        self.url = url
        target = f" from {url}" if url else ""
        super().__init__(
            f"Expected status {expected}, got {actual}{target}. Response: {body}"
        )


class ConfigMissingError(AutomationError):
    """A required environment key is absent and has no default."""

    def __init__(self, key: str, message: str | None = None) -> None:
        self.key = key
        super().__init__(
            message or f"Environment variable {key} is not set and no default provided"
        )


class ConfigValueError(ConfigMissingError):
    """An environment key is present but its value cannot be parsed."""

    def __init__(self, key: str, value: str, expected: str = "number") -> None:
        self.value = value
        super().__init__(key, f"Environment variable {key} is not a valid {expected}: {value!r}")
