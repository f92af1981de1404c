"""System resources, firmware information, defaults and license."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..models import CpuInfo, License, MemoryInfo, SwapInfo, SystemInfo, SystemResources
from ..normalize import as_dict, as_int, optional_bool, percent, snake_keys
from .base import Resource

# Configure module logger
logger = logging.getLogger(__name__)

SYSTEM_PATH = "/rci/show/system"
VERSION_PATH = "/rci/show/version"
DEFAULTS_PATH = "/rci/show/defaults"
LICENSE_PATH = "/rci/show/license"


def normalize_resources(response: Any) -> SystemResources:
    """Map ``show system`` output to CPU, memory and swap usage.

    Memory figures are kilobytes. ``used`` excludes buffers and page
    cache, matching what the router's own dashboard reports.
    """
    if not isinstance(response, dict):
        logger.warning("Unexpected system response: %r", response)
        return SystemResources()

    return SystemResources(
        cpu=_normalize_cpu(response.get("cpuload")),
        memory=_normalize_memory(response),
        swap=_normalize_swap(response),
        uptime=as_int(response.get("uptime")),
    )


def _normalize_cpu(cpuload: Any) -> Optional[CpuInfo]:
    load = as_int(cpuload)
    if load is None:
        return None
    return CpuInfo(load_percent=load)


def _normalize_memory(response: Dict[str, Any]) -> Optional[MemoryInfo]:
    total = as_int(response.get("memtotal"))
    free = as_int(response.get("memfree"))
    if total is None or free is None:
        return None

    buffers = as_int(response.get("membuffers")) or 0
    cached = as_int(response.get("memcache")) or 0
    used = total - free - buffers - cached

    return MemoryInfo(
        total=total,
        free=free,
        used=used,
        buffers=buffers,
        cached=cached,
        used_percent=percent(used, total),
    )


def _normalize_swap(response: Dict[str, Any]) -> Optional[SwapInfo]:
    total = as_int(response.get("swaptotal"))
    free = as_int(response.get("swapfree"))
    if not total or free is None:
        return None

    used = total - free
    return SwapInfo(total=total, free=free, used=used, used_percent=percent(used, total))


def normalize_info(response: Any) -> SystemInfo:
    """Map ``show version`` output to model and firmware details."""
    if not isinstance(response, dict):
        logger.warning("Unexpected version response: %r", response)
        return SystemInfo()

    ndm = as_dict(response.get("ndm"))
    ndw = as_dict(response.get("ndw"))

    return SystemInfo(
        model=response.get("model"),
        device=response.get("device"),
        manufacturer=response.get("manufacturer"),
        vendor=response.get("vendor"),
        hw_version=response.get("hw_version"),
        hw_id=response.get("hw_id"),
        firmware=response.get("title"),
        firmware_version=response.get("release"),
        ndm_version=ndm.get("exact") or ndm.get("version"),
        arch=response.get("arch"),
        ndw_version=ndw.get("version"),
        components=response.get("components"),
        sandbox=response.get("sandbox"),
    )


def normalize_license(response: Any) -> License:
    """Map ``show license`` output, decoding string booleans."""
    if not isinstance(response, dict):
        logger.warning("Unexpected license response: %r", response)
        return License()

    return License(
        valid=optional_bool(response.get("valid")),
        active=optional_bool(response.get("active")),
        expires=response.get("expires"),
        type=response.get("type"),
        features=_normalize_features(response.get("features")),
        services=_normalize_services(response.get("services")),
    )


def _normalize_features(features: Any) -> List[Any]:
    if not isinstance(features, list):
        return []
    return [snake_keys(feature) if isinstance(feature, dict) else feature for feature in features]


def _normalize_services(services: Any) -> List[Any]:
    if not isinstance(services, list):
        return []

    result = []
    for service in services:
        if isinstance(service, dict):
            service = snake_keys(service)
            for key in ("enabled", "active"):
                if key in service:
                    service[key] = optional_bool(service[key])
        result.append(service)
    return result


class System(Resource):
    """Router-wide status."""

    def resources(self) -> SystemResources:
        """Fetch CPU, memory and swap usage."""
        return normalize_resources(self._get(SYSTEM_PATH))

    def info(self) -> SystemInfo:
        """Fetch model and firmware information."""
        return normalize_info(self._get(VERSION_PATH))

    def uptime(self) -> Optional[int]:
        """Fetch system uptime in seconds."""
        response = self._get(SYSTEM_PATH)
        if not isinstance(response, dict):
            return None
        return as_int(response.get("uptime"))

    def defaults(self) -> Dict[str, Any]:
        """Fetch factory default settings with ``snake_case`` keys."""
        response = self._get(DEFAULTS_PATH)
        if not isinstance(response, dict):
            return {}
        return snake_keys(response)

    def license(self) -> License:
        """Fetch license status and enabled features."""
        return normalize_license(self._get(LICENSE_PATH))
