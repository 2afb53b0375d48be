"""
Page Object Model (POM) classes for the OrangeHRM suite.

This package contains page objects that encapsulate page-specific
locators and interactions. The POM pattern provides:
- Separation of test logic from page details
- Reusable page interactions
- Maintainable test code (changes to UI only require updates in one place)
"""

from tests.e2e.pages.admin_page import AdminPage
from tests.e2e.pages.base_page import BasePage
from tests.e2e.pages.dashboard_page import DashboardPage
from tests.e2e.pages.employee_page import EmployeePage
from tests.e2e.pages.header_page import HeaderPage
from tests.e2e.pages.login_page import LoginPage
from tests.e2e.pages.pim_page import PIMPage

__all__ = [
    "AdminPage",
    "BasePage",
    "DashboardPage",
    "EmployeePage",
    "HeaderPage",
    "LoginPage",
    "PIMPage",
]
