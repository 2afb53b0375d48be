"""
Wait and retry helpers layered over Playwright.

Every UI action in the suite goes through one of these helpers so that it
has a bounded, observable wait instead of a fixed sleep.  The helpers do
not retry on their own: ``retry`` is an explicit wrapper a caller composes
around any action that should tolerate transient failures.

All durations are milliseconds, matching Playwright's own API.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar, Union

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page, Response
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from hrm_e2e.errors import ActionFailureError, WaitTimeoutError

T = TypeVar("T")

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_PROBE_TIMEOUT_MS = 5_000
# Sites with analytics or long-poll traffic never go network-idle, so the
# idle attempt gets a short slice of the budget before falling back to "load".
NETWORK_IDLE_BUDGET_MS = 5_000


class WaitCondition(str, Enum):
    """Element states a wait can target."""

    VISIBLE = "visible"
    HIDDEN = "hidden"
    ATTACHED = "attached"
    DETACHED = "detached"


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget and exponential backoff for ``retry``."""

    max_attempts: int = 3
    base_delay_ms: int = 1000

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.base_delay_ms < 0:
            raise ValueError(f"base_delay_ms must not be negative, got {self.base_delay_ms}")

    def delay_before(self, attempt: int) -> int:
        """Return the sleep in ms that precedes ``attempt`` (1-based)."""
        if attempt <= 1:
            return 0
        return self.base_delay_ms * 2 ** (attempt - 2)


@dataclass(frozen=True)
class Found:
    """Probe outcome: the element became visible."""

    elapsed_ms: int

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class NotFoundWithinTimeout:
    """Probe outcome: the element did not become visible in time."""

    timeout_ms: int

    def __bool__(self) -> bool:
        return False


ProbeResult = Union[Found, NotFoundWithinTimeout]


@dataclass(frozen=True)
class SelectOption:
    """A dropdown choice addressed by exactly one of label, value or index."""

    label: str | None = None
    value: str | None = None
    index: int | None = None

    def __post_init__(self) -> None:
        given = [v for v in (self.label, self.value, self.index) if v is not None]
        if len(given) != 1:
            raise ValueError("SelectOption needs exactly one of label, value or index")

    @classmethod
    def coerce(cls, option: "str | SelectOption") -> "SelectOption":
        if isinstance(option, SelectOption):
            return option
        return cls(label=option)

    def as_kwargs(self) -> dict[str, Any]:
        if self.label is not None:
            return {"label": self.label}
        if self.value is not None:
            return {"value": self.value}
        return {"index": self.index}


def describe(locator: Any) -> str:
    """Human-readable description of a locator for logs and errors."""
    if isinstance(locator, str):
        return locator
    return str(locator)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def _is_satisfied(locator: Locator, condition: WaitCondition) -> bool:
    """Single, non-polling check of the element state."""
    if condition is WaitCondition.VISIBLE:
        return locator.is_visible()
    if condition is WaitCondition.HIDDEN:
        return locator.is_hidden()
    count = locator.count()
    if condition is WaitCondition.ATTACHED:
        return count > 0
    return count == 0


# ---------------------------------------------------------------------------
# Waiting
# ---------------------------------------------------------------------------


def wait_for_condition(
    locator: Locator,
    condition: WaitCondition | str = WaitCondition.VISIBLE,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    *,
    description: str | None = None,
) -> int:
    """
    Wait until the element matches ``condition``.

    An element already in the requested state returns at once.  With
    ``timeout_ms <= 0`` only that single check is made; Playwright treats a
    zero timeout as "wait forever", so it is never passed through.

    Args:
        locator: Element to observe. Resolved lazily by Playwright.
        condition: Target state.
        timeout_ms: Budget for the wait.
        description: Name used in errors. Defaults to the locator repr.

    Returns:
        Milliseconds spent waiting.

    Raises:
        WaitTimeoutError: The state was not reached within the budget.
    """
    condition = WaitCondition(condition)
    description = description or describe(locator)
    started = time.monotonic()

    if _is_satisfied(locator, condition):
        return _elapsed_ms(started)
    if timeout_ms <= 0:
        raise WaitTimeoutError(description, condition.value, timeout_ms, _elapsed_ms(started))

    try:
        locator.wait_for(state=condition.value, timeout=timeout_ms)
    except PlaywrightTimeoutError as exc:
        raise WaitTimeoutError(
            description, condition.value, timeout_ms, _elapsed_ms(started)
        ) from exc
    return _elapsed_ms(started)


def probe_visible(
    locator: Locator,
    timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS,
    *,
    description: str | None = None,
) -> ProbeResult:
    """
    Check whether an element becomes visible, without raising on timeout.

    Returns:
        ``Found`` or ``NotFoundWithinTimeout``.
    """
    try:
        elapsed = wait_for_condition(
            locator, WaitCondition.VISIBLE, timeout_ms, description=description
        )
    except WaitTimeoutError:
        logger.debug("Not visible within %sms: %s", timeout_ms, description or describe(locator))
        return NotFoundWithinTimeout(timeout_ms)
    return Found(elapsed)


def wait_for_network_idle_or_load(page: Page, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> str:
    """
    Wait for network idle, falling back to the ``load`` milestone.

    The idle attempt gets ``min(5000, timeout_ms)``; the fallback gets what
    remains of the budget.  This is a heuristic, not a guarantee that the
    page has settled.

    Returns:
        The load state that completed: ``"networkidle"`` or ``"load"``.

    Raises:
        ValueError: ``timeout_ms`` is not positive.
        WaitTimeoutError: Neither state was reached within the budget.
    """
    if timeout_ms <= 0:
        raise ValueError(f"timeout_ms must be positive, got {timeout_ms}")

    started = time.monotonic()
    try:
        page.wait_for_load_state("networkidle", timeout=min(NETWORK_IDLE_BUDGET_MS, timeout_ms))
        return "networkidle"
    except PlaywrightTimeoutError:
        logger.debug("Network never went idle; falling back to load state")

    remaining = max(timeout_ms - _elapsed_ms(started), 1)
    try:
        page.wait_for_load_state("load", timeout=remaining)
    except PlaywrightTimeoutError as exc:
        raise WaitTimeoutError("page load", "load", timeout_ms, _elapsed_ms(started)) from exc
    return "load"


def response_matcher(url_pattern: str | re.Pattern[str]) -> Callable[[Response], bool]:
    """Build a predicate matching responses by URL substring or regex."""
    if isinstance(url_pattern, str):
        return lambda response: url_pattern in response.url
    return lambda response: url_pattern.search(response.url) is not None


def wait_for_response(
    page: Page,
    url_pattern: str | re.Pattern[str],
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> Response:
    """Wait for the next HTTP response whose URL matches ``url_pattern``."""
    started = time.monotonic()
    try:
        return page.wait_for_event(
            "response", predicate=response_matcher(url_pattern), timeout=timeout_ms
        )
    except PlaywrightTimeoutError as exc:
        pattern = url_pattern if isinstance(url_pattern, str) else url_pattern.pattern
        raise WaitTimeoutError(
            f"response matching {pattern!r}", "received", timeout_ms, _elapsed_ms(started)
        ) from exc


# ---------------------------------------------------------------------------
# Retry
# ---------------------------------------------------------------------------


def retry(
    operation: Callable[[], T],
    policy: RetryPolicy | None = None,
    *,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], Any] = time.sleep,
) -> T:
    """
    Run ``operation`` with exponential backoff.

    After failed attempt ``k`` the helper sleeps ``base_delay_ms * 2**(k-1)``
    before trying again.  There is no sleep after the final attempt and no
    jitter.  Invocations share no state.

    Args:
        operation: Zero-argument callable to run.
        policy: Attempt budget and base delay. Defaults to 3 attempts, 1s.
        retry_on: Exception types that count as a retryable failure.
        sleep: Sleep function taking seconds.

    Returns:
        The first successful result.

    Raises:
        The last failure, unchanged, when every attempt fails.
    """
    policy = policy or RetryPolicy()
    last_error: BaseException | None = None

    for attempt in range(1, policy.max_attempts + 1):
        if attempt > 1:
            sleep(policy.delay_before(attempt) / 1000)
        try:
            return operation()
        except retry_on as exc:
            last_error = exc
            logger.warning(
                "Attempt %s/%s failed: %s", attempt, policy.max_attempts, exc
            )

    assert last_error is not None
    raise last_error


# ---------------------------------------------------------------------------
# Guarded actions
# ---------------------------------------------------------------------------


def click_with_safety(
    locator: Locator,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    force: bool = False,
    *,
    description: str | None = None,
) -> None:
    """
    Wait for the element to be visible, then click it.

    ``force=True`` skips Playwright's actionability checks (for example an
    overlay covering the element).

    Raises:
        WaitTimeoutError: The element never became visible.
        ActionFailureError: The click itself failed.
    """
    description = description or describe(locator)
    wait_for_condition(locator, WaitCondition.VISIBLE, timeout_ms, description=description)
    try:
        locator.click(force=force, timeout=timeout_ms)
    except PlaywrightError as exc:
        logger.error("Failed to click element: %s", description)
        raise ActionFailureError("click", description, exc) from exc
    logger.debug("Clicked element: %s", description)


def type_with_validation(
    locator: Locator,
    text: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    clear: bool = True,
    *,
    description: str | None = None,
) -> str:
    """
    Wait for the field, fill it, and read the value back.

    A value that differs from ``text`` after filling is logged as a warning
    only; assertions downstream decide whether it matters.

    Returns:
        The value the field reports after filling.

    Raises:
        WaitTimeoutError: The field never became visible.
        ActionFailureError: Clearing, filling or reading back failed.
    """
    description = description or describe(locator)
    wait_for_condition(locator, WaitCondition.VISIBLE, timeout_ms, description=description)
    try:
        if clear:
            locator.clear(timeout=timeout_ms)
        locator.fill(text, timeout=timeout_ms)
        actual = locator.input_value(timeout=timeout_ms)
    except PlaywrightError as exc:
        logger.error("Failed to type text: %s", description)
        raise ActionFailureError("type", description, exc) from exc

    if actual != text:
        logger.warning("Text mismatch on %s. Expected: %r, Actual: %r", description, text, actual)
    logger.debug("Typed text into element: %s", description)
    return actual


def select_option(
    locator: Locator,
    option: str | SelectOption,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    *,
    description: str | None = None,
) -> list[str]:
    """
    Select an option of a native ``<select>`` by label, value or index.

    A plain string selects by label.

    Returns:
        Values of the selected options, as reported by Playwright.

    Raises:
        WaitTimeoutError: The dropdown never became visible.
        ActionFailureError: The selection failed.
    """
    description = description or describe(locator)
    option = SelectOption.coerce(option)
    wait_for_condition(locator, WaitCondition.VISIBLE, timeout_ms, description=description)
    try:
        selected = locator.select_option(timeout=timeout_ms, **option.as_kwargs())
    except PlaywrightError as exc:
        logger.error("Failed to select option: %s", description)
        raise ActionFailureError("select", description, exc) from exc
    logger.debug("Selected option in dropdown: %s", description)
    return selected
