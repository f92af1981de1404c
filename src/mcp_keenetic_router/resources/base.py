"""Base class for resource accessors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from ..commands import Command, show_command
from ..normalize import dig

if TYPE_CHECKING:
    from ..client import KeeneticClient


class Resource:
    """Accessor bound to a client; holds no state of its own."""

    def __init__(self, client: KeeneticClient) -> None:
        self.client = client

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.client.get(path, params)

    def _batch(self, commands: Iterable[Command]) -> List[Any]:
        return self.client.batch(commands)

    def _show(self, path: str) -> Any:
        """Read a configuration subtree with a ``show`` batch command.

        The router echoes the command tree with the data filled in, so
        ``_show("sc.ip.policy")`` returns ``result["show"]["sc"]["ip"]["policy"]``.

        Returns:
            The subtree, or None when the router returned nothing usable.
        """
        results = self._batch([show_command(path)])
        if not isinstance(results, list) or not results:
            return None
        return dig(results[0], "show", *path.split("."))
