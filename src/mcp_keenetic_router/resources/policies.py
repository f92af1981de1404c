"""Routing (VPN) policies and which devices use them.

Policies and their per-device assignments live in the running
configuration, so both are read with ``show sc`` batch commands rather
than through a ``GET /rci/show/...`` endpoint.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..exceptions import NotFoundError
from ..models import Policy
from ..normalize import as_bool, as_list, as_str, keyed_items
from .base import Resource

# Configure module logger
logger = logging.getLogger(__name__)

POLICIES_CONFIG = "sc.ip.policy"
HOSTS_CONFIG = "sc.ip.hotspot.host"

UNNAMED_POLICY = "Unnamed Policy"


def policy_name(description: Any) -> str:
    """Derive a display name, dropping the leading ``!`` the web UI adds."""
    name = (as_str(description) or "").strip()
    if name.startswith("!"):
        name = name[1:].strip()
    return name or UNNAMED_POLICY


def normalize_policy(policy_id: str, data: Dict[str, Any]) -> Policy:
    interfaces = []
    for permit in as_list(data.get("permit")):
        if not isinstance(permit, dict):
            continue
        if as_bool(permit.get("enabled")) and not as_bool(permit.get("no")) and as_str(permit.get("interface")):
            interfaces.append(permit["interface"])

    description = as_str(data.get("description")) or policy_id
    return Policy(
        id=policy_id,
        description=description,
        name=policy_name(description),
        interfaces=interfaces,
    )


def normalize_policies(config: Any) -> List[Policy]:
    """Normalize the ``ip policy`` configuration subtree (id-keyed)."""
    if not isinstance(config, dict):
        if config is not None:
            logger.warning("Unexpected policy configuration: %r", config)
        return []
    return [normalize_policy(policy_id, data) for policy_id, data in keyed_items(config)]


def normalize_assignments(config: Any) -> Dict[str, str]:
    """Map lowercase MAC to policy id from the ``ip hotspot host`` subtree.

    Hosts without a policy are left out.
    """
    assignments: Dict[str, str] = {}
    for host in as_list(config):
        if not isinstance(host, dict) or not host.get("policy") or not host.get("mac"):
            continue
        assignments[str(host["mac"]).lower()] = host["policy"]
    return assignments


class Policies(Resource):
    """Routing policies."""

    def all(self) -> List[Policy]:
        """Fetch all policies with their active interfaces."""
        return normalize_policies(self._show(POLICIES_CONFIG))

    def find(self, policy_id: str) -> Policy:
        """Find a policy by id, e.g. ``"Policy0"``.

        Raises:
            NotFoundError: If no policy has that id.
        """
        for policy in self.all():
            if policy.id == policy_id:
                return policy
        raise NotFoundError(f"Policy {policy_id} not found")

    def device_assignments(self) -> Dict[str, str]:
        """Fetch the MAC to policy id mapping of devices that have a policy."""
        return normalize_assignments(self._show(HOSTS_CONFIG))
