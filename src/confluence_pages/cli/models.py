"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): Unexpected failure
    - CONFIG_ERROR (2): Missing or invalid configuration
    - API_ERROR (3): Confluence answered with an error status
    - NETWORK_ERROR (4): Confluence could not be reached
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIG_ERROR = 2
    API_ERROR = 3
    NETWORK_ERROR = 4
