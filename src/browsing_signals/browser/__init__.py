"""Browser history input (Safari + Chrome, macOS)."""

from browsing_signals.browser.reader import BrowserHistoryReader
from browsing_signals.browser.parser import parse_visit, parse_visits

__all__ = [
    "BrowserHistoryReader",
    "parse_visit",
    "parse_visits",
]
