"""Command-line interface for Confluence page operations.

Provides the `confluence-pages` command with list, create and update
subcommands.
"""

from .config import ConfigLoader, TaskConfig
from .models import ExitCode

__all__ = ['ConfigLoader', 'TaskConfig', 'ExitCode']
