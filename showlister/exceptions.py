"""
Exception types raised across the pipeline.
"""


class ShowListerError(Exception):
    """Base class for pipeline errors."""


class FetchError(ShowListerError):
    """A provider request failed (HTTP status, bad JSON, retries exhausted)."""


class ConfigError(ShowListerError):
    """Display options could not be turned into a DisplayConfig."""


class TemplateError(ShowListerError):
    """The page template is unreadable or is missing its data placeholders."""
