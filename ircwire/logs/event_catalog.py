"""Human readable texts for logged events, keyed by ``(domain, action)``.

The texts live in ``event_templates.json`` next to this module as
``{"domain": {"action": "template"}}``. Templates use ``str.format``
placeholders filled from the event's keyword context.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def _read_catalog(path: Path | None) -> Any:
    if path is not None:
        return json.loads(path.read_text(encoding="utf-8"))
    source = resources.files(__package__).joinpath("event_templates.json")
    return json.loads(source.read_text(encoding="utf-8"))


def _flatten(raw: Any) -> dict[tuple[str, str], str]:
    if not isinstance(raw, dict):
        raise ValueError("catalog root must be an object")
    return {
        (domain, action): text
        for domain, actions in raw.items()
        if isinstance(actions, dict)
        for action, text in actions.items()
        if isinstance(text, str)
    }


def _load_event_templates(path: Path | None = None) -> dict[tuple[str, str], str]:
    """Load the catalog; failures leave one ``("app", "load_error")`` entry."""
    try:
        return _flatten(_read_catalog(path))
    except FileNotFoundError:
        return {("app", "load_error"): "Event templates file missing"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}


def reload_event_templates(path: Path | None = None) -> None:
    # In place, so the logger's reference stays valid.
    EVENT_TEMPLATES.clear()
    EVENT_TEMPLATES.update(_load_event_templates(path))


def template_for(domain: str, action: str) -> str | None:
    return EVENT_TEMPLATES.get((domain, action))


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "reload_event_templates", "template_for"]
