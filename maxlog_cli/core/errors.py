"""
Exception types shared by the maxlog core, configuration and backends.
"""


class MaxlogError(Exception):
    """Base exception for all maxlog failures."""
    pass


class ConfigError(MaxlogError):
    """Exception raised when configuration or command line values are invalid."""
    pass


class BackendError(MaxlogError):
    """Exception raised when a log backend cannot be reached or queried."""
    pass


class SourceReadError(MaxlogError):
    """Exception raised when a log stream fails for a reason other than end of data."""
    pass
