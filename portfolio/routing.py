"""
Reader for the deployment routing descriptor (vercel.json).

Only the options this project relies on are recognized: version,
builds[].src, builds[].use, routes[].src, routes[].dest, routes[].methods.
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from portfolio.config import BASE_DIR

DESCRIPTOR_FILE = BASE_DIR / "vercel.json"

_TOP_LEVEL_KEYS = {"version", "builds", "routes"}


class RoutingDescriptorError(ValueError):
    """The routing descriptor is missing, malformed or uses unknown options."""


@dataclass(frozen=True)
class BuildSpec:
    src: str
    use: str


@dataclass(frozen=True)
class RouteSpec:
    src: str
    dest: str
    methods: Optional[List[str]] = None

    def matches(self, path: str, method: str) -> bool:
        if self.methods is not None and method.upper() not in self.methods:
            return False
        return re.fullmatch(self.src, path) is not None


@dataclass(frozen=True)
class RoutingDescriptor:
    version: int
    builds: List[BuildSpec] = field(default_factory=list)
    routes: List[RouteSpec] = field(default_factory=list)

    def resolve(self, path: str, method: str = "GET") -> Optional[str]:
        """Destination of the first route matching the whole path, or None."""
        for route in self.routes:
            if route.matches(path, method):
                return route.dest
        return None


def _entries(raw: dict, key: str) -> list:
    """The list under `key`, each item checked to be an object."""
    entries = raw.get(key, [])
    if not isinstance(entries, list):
        raise RoutingDescriptorError(f"{key} must be a list")
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise RoutingDescriptorError(f"{key}[{i}] must be an object")
    return entries


def _require_str(entry: dict, key: str, where: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise RoutingDescriptorError(f"{where}.{key} must be a non-empty string")
    return value


def parse_descriptor(raw: dict) -> RoutingDescriptor:
    if not isinstance(raw, dict):
        raise RoutingDescriptorError("descriptor must be a JSON object")
    unknown = set(raw) - _TOP_LEVEL_KEYS
    if unknown:
        raise RoutingDescriptorError(f"unknown options: {', '.join(sorted(unknown))}")

    version = raw.get("version")
    # bool is an int subclass
    if not isinstance(version, int) or isinstance(version, bool):
        raise RoutingDescriptorError("version must be an integer")

    builds = []
    for i, entry in enumerate(_entries(raw, "builds")):
        where = f"builds[{i}]"
        builds.append(BuildSpec(src=_require_str(entry, "src", where), use=_require_str(entry, "use", where)))

    routes = []
    for i, entry in enumerate(_entries(raw, "routes")):
        where = f"routes[{i}]"
        src = _require_str(entry, "src", where)
        try:
            re.compile(src)
        except re.error as e:
            raise RoutingDescriptorError(f"{where}.src is not a valid pattern: {e}") from e
        methods = entry.get("methods")
        if methods is not None:
            if not isinstance(methods, list) or not all(isinstance(m, str) for m in methods):
                raise RoutingDescriptorError(f"{where}.methods must be a list of strings")
            methods = [m.upper() for m in methods]
        routes.append(RouteSpec(src=src, dest=_require_str(entry, "dest", where), methods=methods))

    return RoutingDescriptor(version=version, builds=builds, routes=routes)


def load_descriptor(path: Path = DESCRIPTOR_FILE) -> RoutingDescriptor:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise RoutingDescriptorError(f"{path} not found") from e
    except json.JSONDecodeError as e:
        raise RoutingDescriptorError(f"{path} is not valid JSON: {e}") from e
    return parse_descriptor(raw)
