"""Triggering CI event, passed explicitly to whoever needs it."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from affected.core.errors import ConfigReadError


@dataclass(frozen=True, slots=True)
class EventContext:
    """Event kind, its JSON payload and the repository it fired for."""

    event_name: str
    payload: dict[str, Any] = field(default_factory=dict)
    repository: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EventContext:
        """Build from the GITHUB_* variables the runner exports.

        A missing GITHUB_EVENT_PATH yields an empty payload; a path that
        cannot be read or parsed raises ConfigReadError.
        """
        env = os.environ if environ is None else environ
        event_path = env.get("GITHUB_EVENT_PATH", "").strip()
        payload = load_event_payload(Path(event_path)) if event_path else {}
        return cls(
            event_name=env.get("GITHUB_EVENT_NAME", "").strip(),
            payload=payload,
            repository=env.get("GITHUB_REPOSITORY", "").strip(),
        )

    def _split_repository(self) -> tuple[str, str]:
        owner, sep, name = self.repository.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ConfigReadError.invalid_repository(self.repository)
        return owner, name

    @property
    def owner(self) -> str:
        return self._split_repository()[0]

    @property
    def repo(self) -> str:
        return self._split_repository()[1]

    def get(self, *keys: str) -> Any:
        """Walk nested payload keys, returning None at the first gap."""
        node: Any = self.payload
        for key in keys:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        return node


def load_event_payload(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError.unreadable(str(path), str(e)) from e
    except json.JSONDecodeError as e:
        raise ConfigReadError.unreadable(str(path), f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigReadError.unreadable(str(path), "event payload must be a JSON object")
    return data
