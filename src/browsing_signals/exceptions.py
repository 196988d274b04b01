"""Unified exception hierarchy for browsing-signals."""


class BrowsingSignalsError(Exception):
    """Base exception for all browsing-signals errors."""


class ConfigError(BrowsingSignalsError):
    """Invalid configuration value."""


# Browser
class BrowserError(BrowsingSignalsError):
    """Base exception for browser history operations."""


class BrowserHistoryReadError(BrowserError):
    """Failed to read browser history."""


# Projects
class CandidateError(BrowsingSignalsError):
    """Base exception for project candidate operations."""


class CandidateNotFoundError(CandidateError):
    """No tracked candidate has the requested id."""
