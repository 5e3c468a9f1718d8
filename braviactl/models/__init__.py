"""Data models for commands and decoded device state."""

from braviactl.models.commands import CommandKind, LogicalCommand, PowerState

__all__ = [
    "CommandKind",
    "LogicalCommand",
    "PowerState",
]
