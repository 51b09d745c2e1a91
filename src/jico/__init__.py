"""jico - command-line helper for Jira Cloud."""

__version__ = "0.1.0"
