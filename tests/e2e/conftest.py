"""Playwright fixtures for the OrangeHRM browser suites."""

from __future__ import annotations

import os
from collections.abc import Generator
from typing import Any

import pytest
from playwright.sync_api import Browser, BrowserContext, Page

from hrm_e2e.config import Settings
from hrm_e2e.live_site import require_live_site
from hrm_e2e.logging_utils import StepLogger
from tests.e2e.pages.admin_page import AdminPage
from tests.e2e.pages.dashboard_page import DashboardPage
from tests.e2e.pages.employee_page import EmployeePage
from tests.e2e.pages.header_page import HeaderPage
from tests.e2e.pages.login_page import LoginPage
from tests.e2e.pages.pim_page import PIMPage

ARTIFACT_DIR = "test-results"


@pytest.fixture(scope="session")
def live_server(settings: Settings) -> str:
    """
    Return the base URL of a reachable OrangeHRM instance.

    Set BASE_URL to target another instance; the public demo is used
    otherwise.  An unreachable site skips the browser tests.
    """
    return require_live_site(settings)


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args: dict[str, Any], settings: Settings) -> dict[str, Any]:
    return {**browser_type_launch_args, "headless": settings.headless}


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args: dict[str, Any]) -> dict[str, Any]:
    return {
        **browser_context_args,
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }


@pytest.fixture(scope="function")
def context(
    browser: Browser,
    browser_context_args: dict[str, Any],
    request: pytest.FixtureRequest,
) -> Generator[BrowserContext, None, None]:
    """
    Fresh browser context per test, traced; the trace is kept on failure only.
    """
    context = browser.new_context(**browser_context_args)
    context.tracing.start(screenshots=True, snapshots=True)
    yield context

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        trace_dir = f"{ARTIFACT_DIR}/traces"
        os.makedirs(trace_dir, exist_ok=True)
        context.tracing.stop(path=f"{trace_dir}/{_artifact_name(request.node)}.zip")
    else:
        context.tracing.stop()
    context.close()


@pytest.fixture(scope="function")
def page(context: BrowserContext, settings: Settings) -> Generator[Page, None, None]:
    page = context.new_page()
    page.set_default_timeout(settings.action_timeout_ms)
    page.set_default_navigation_timeout(settings.navigation_timeout_ms)
    yield page
    page.close()


# -----------------------------------------------------------------------------
# Page Object Fixtures
# -----------------------------------------------------------------------------

def _page_kwargs(settings: Settings, step_logger: StepLogger) -> dict[str, Any]:
    return {"settings": settings, "logger": step_logger}


@pytest.fixture
def login_page(page: Page, live_server: str, settings: Settings, step_logger: StepLogger) -> LoginPage:
    return LoginPage(page, live_server, **_page_kwargs(settings, step_logger))


@pytest.fixture
def dashboard_page(page: Page, live_server: str, settings: Settings, step_logger: StepLogger) -> DashboardPage:
    return DashboardPage(page, live_server, **_page_kwargs(settings, step_logger))


@pytest.fixture
def header_page(page: Page, live_server: str, settings: Settings, step_logger: StepLogger) -> HeaderPage:
    return HeaderPage(page, live_server, **_page_kwargs(settings, step_logger))


@pytest.fixture
def admin_page(page: Page, live_server: str, settings: Settings, step_logger: StepLogger) -> AdminPage:
    return AdminPage(page, live_server, **_page_kwargs(settings, step_logger))


@pytest.fixture
def pim_page(page: Page, live_server: str, settings: Settings, step_logger: StepLogger) -> PIMPage:
    return PIMPage(page, live_server, **_page_kwargs(settings, step_logger))


@pytest.fixture
def employee_page(page: Page, live_server: str, settings: Settings, step_logger: StepLogger) -> EmployeePage:
    return EmployeePage(page, live_server, **_page_kwargs(settings, step_logger))


@pytest.fixture
def logged_in(login_page: LoginPage, dashboard_page: DashboardPage) -> DashboardPage:
    """Log in with the configured credentials and wait for the dashboard."""
    login_page.navigate()
    login_page.login_with_defaults()
    dashboard_page.verify_page_loaded()
    return dashboard_page


# -----------------------------------------------------------------------------
# Failure Artifacts
# -----------------------------------------------------------------------------

def _artifact_name(item: pytest.Item) -> str:
    return item.name.replace("/", "_").replace("::", "_")


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose phase reports to fixtures and capture a screenshot on failure."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)

    if report.when == "call" and report.failed:
        page = item.funcargs.get("page")
        if page:
            screenshot_dir = f"{ARTIFACT_DIR}/screenshots"
            os.makedirs(screenshot_dir, exist_ok=True)
            screenshot_path = f"{screenshot_dir}/{_artifact_name(item)}.png"
            try:
                page.screenshot(path=screenshot_path, full_page=True)
                print(f"\nScreenshot saved: {screenshot_path}")
            except Exception as exc:  # pragma: no cover - best effort logging
                print(f"\nFailed to capture screenshot: {exc}")
