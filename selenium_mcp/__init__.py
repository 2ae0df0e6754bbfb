"""Selenium WebDriver automation exposed as an MCP server."""

from __future__ import annotations
