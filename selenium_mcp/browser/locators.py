"""Locator strategies accepted by the tools and their Selenium equivalents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from selenium.webdriver.common.by import By

from selenium_mcp.errors import InvalidArgumentError

__all__ = [
    'LOCATOR_STRATEGIES',
    'Locator',
]

# 'tag' is a CSS selector restricted to a bare tag name ('button', 'input')
LOCATOR_STRATEGIES: dict[str, str] = {
    'id': By.ID,
    'css': By.CSS_SELECTOR,
    'xpath': By.XPATH,
    'name': By.NAME,
    'tag': By.CSS_SELECTOR,
    'class': By.CLASS_NAME,
    'linkText': By.LINK_TEXT,
    'partialLinkText': By.PARTIAL_LINK_TEXT,
}


@dataclass(frozen=True)
class Locator:
    by: str
    value: str

    @classmethod
    def of(cls, by: str, value: str) -> Self:
        """Validate a strategy/value pair.

        Raises:
            InvalidArgumentError: Unsupported strategy or empty selector value.
        """
        if by not in LOCATOR_STRATEGIES:
            supported = ', '.join(LOCATOR_STRATEGIES)
            raise InvalidArgumentError(f'Unsupported locator strategy: {by} (expected one of: {supported})')
        if not value or not value.strip():
            raise InvalidArgumentError(f'Selector value for locator strategy {by} cannot be empty')
        return cls(by=by, value=value)

    @property
    def selenium(self) -> tuple[str, str]:
        """``(By.*, value)`` tuple accepted by ``find_element`` and expected conditions."""
        return LOCATOR_STRATEGIES[self.by], self.value

    def __str__(self) -> str:
        return f'{self.by}="{self.value}"'
