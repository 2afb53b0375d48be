"""
Support library for the OrangeHRM end-to-end suite.

Modules:
- config: environment-driven run settings
- logging_utils: step-marking logger
- errors: exception taxonomy
- waits: wait, probe and retry helpers over Playwright
- api_client: thin HTTP client for API checks
- test_data: records and generators for fixtures
- live_site: reachability checks for the remote application
"""

from hrm_e2e.config import EnvConfig, Settings
from hrm_e2e.errors import (
    ActionFailureError,
    AutomationError,
    ConfigMissingError,
    ConfigValueError,
    UnexpectedStatusError,
    WaitTimeoutError,
)
from hrm_e2e.logging_utils import StepLogger, configure_logging, get_logger

__all__ = [
    "ActionFailureError",
    "AutomationError",
    "ConfigMissingError",
    "ConfigValueError",
    "EnvConfig",
    "Settings",
    "StepLogger",
    "UnexpectedStatusError",
    "WaitTimeoutError",
    "configure_logging",
    "get_logger",
]
