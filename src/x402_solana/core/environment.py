"""
Layered ``X402_*`` settings for the client.

Three layers are merged: the process environment (or a supplied ``base``),
an optional ``.env`` file that only fills keys the base leaves unset, and
explicit overrides. Only keys carrying :data:`ENV_PREFIX` are kept, and the
layer each value came from is recorded so misconfiguration can be traced.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

__all__ = [
    "ENV_PREFIX",
    "SOURCE_BASE",
    "SOURCE_FILE",
    "SOURCE_OVERRIDE",
    "ClientEnvironment",
    "build_environment",
]

ENV_PREFIX = "X402_"

SOURCE_BASE = "environment"
SOURCE_FILE = "env-file"
SOURCE_OVERRIDE = "override"


def _parse_value(raw: str) -> str:
    value = raw.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    # Unquoted values may carry a trailing " # comment".
    marker = value.find(" #")
    return value[:marker].rstrip() if marker != -1 else value


def _parse_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for lineno, raw_line in enumerate(data.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            logging.warning("Ignoring malformed line %d in %s", lineno, path)
            continue
        values[key] = _parse_value(value)
    return values


def _scoped(values: Mapping[str, str]) -> Dict[str, str]:
    return {key: value for key, value in values.items() if key.startswith(ENV_PREFIX)}


@dataclass(frozen=True)
class ClientEnvironment:
    variables: Mapping[str, str]
    sources: Mapping[str, str] = field(default_factory=dict)
    env_file: Optional[str] = None

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)

    def source_of(self, key: str) -> Optional[str]:
        """Name of the layer that supplied ``key``, or ``None`` when unset."""
        return self.sources.get(key)


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    Assemble a :class:`ClientEnvironment`.

    Set ``env_file`` to ``None`` to skip file loading.
    """
    merged = _scoped(os.environ if base is None else base)
    sources = dict.fromkeys(merged, SOURCE_BASE)

    if env_file is not None:
        for key, value in _scoped(_parse_env_file(Path(env_file))).items():
            if key not in merged:
                merged[key] = value
                sources[key] = SOURCE_FILE

    for key, value in _scoped(overrides or {}).items():
        merged[key] = value
        sources[key] = SOURCE_OVERRIDE

    return ClientEnvironment(variables=merged, sources=sources, env_file=env_file)
