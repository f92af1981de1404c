"""Batched RCI write commands.

A command is a nested key/value tree addressed by a dotted subsystem
path, e.g. ``ip.hotspot.host``::

    command("ip.hotspot.host", mac="aa:bb:cc:dd:ee:ff", permit=True)
    # {"ip": {"hotspot": {"host": {"mac": "aa:bb:cc:dd:ee:ff", "permit": True}}}}

Commands are collected in a :class:`CommandBatch` and submitted as one
JSON array to ``POST /rci/``. The router applies them in array order.

Omitting a field leaves it unchanged on the router; ``{"no": true}``
explicitly clears it. The two are never interchangeable.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List

Command = Dict[str, Any]

RCI_PATH = "/rci/"


def delete_marker() -> Dict[str, bool]:
    """Return the ``{"no": true}`` marker that clears a field."""
    return {"no": True}


def command(path: str, **params: Any) -> Command:
    """Build a command tree for a dotted subsystem path.

    Args:
        path: Dotted path such as ``"known.host"``.
        **params: Leaf parameters of the command.

    Returns:
        Nested dictionary with ``params`` at the innermost level.

    Raises:
        ValueError: If the path is empty.
    """
    keys = [key for key in path.split(".") if key]
    if not keys:
        raise ValueError("Command path must not be empty")

    tree: Command = dict(params)
    for key in reversed(keys):
        tree = {key: tree}
    return tree


def show_command(path: str) -> Command:
    """Build a ``show`` command that reads a subtree through ``/rci/``."""
    return command(f"show.{path}")


class CommandBatch:
    """Ordered list of commands submitted in a single request."""

    def __init__(self, commands: Iterable[Command] = ()) -> None:
        self._commands: List[Command] = list(commands)

    def add(self, path: str, **params: Any) -> CommandBatch:
        """Append a command built from a dotted path."""
        self._commands.append(command(path, **params))
        return self

    def append(self, cmd: Command) -> CommandBatch:
        """Append a prebuilt command tree."""
        self._commands.append(cmd)
        return self

    def extend(self, commands: Iterable[Command]) -> CommandBatch:
        """Append several prebuilt command trees, keeping their order."""
        self._commands.extend(commands)
        return self

    def to_payload(self) -> List[Command]:
        """Get the JSON array sent to the router."""
        return list(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __bool__(self) -> bool:
        return bool(self._commands)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CommandBatch):
            return self._commands == other._commands
        if isinstance(other, list):
            return self._commands == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"CommandBatch({self._commands!r})"
