"""Core utilities and shared components for jico."""

# Note: Import context lazily to avoid circular imports
# Use: from jico.core.context import JicoContext, pass_context
from jico.core.exceptions import JicoError, ConfigError, ValidationError, JiraError
from jico.core.output import OutputFormatter, OutputFormat

__all__ = [
    "JicoError",
    "ConfigError",
    "ValidationError",
    "JiraError",
    "OutputFormatter",
    "OutputFormat",
]
