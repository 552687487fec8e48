"""Frontend interfaces for two-player matches."""

from .cli import CLIMatch

__all__ = ["CLIMatch"]
