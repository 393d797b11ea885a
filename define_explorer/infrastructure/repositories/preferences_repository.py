from __future__ import annotations

import json
from pathlib import Path
from typing import Any, cast, override
import warnings

from ...application.ports.repositories import PreferencesRepositoryPort
from ..io.exceptions import DefineExplorerError


class PreferencesSaveError(DefineExplorerError):
    pass


def _to_json_compatible(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(cast("set[Any]", value), key=str)
    if isinstance(value, dict):
        return {
            str(key): _to_json_compatible(item)
            for key, item in cast("dict[Any, Any]", value).items()
        }
    if isinstance(value, (list, tuple)):
        return [_to_json_compatible(item) for item in cast("list[Any]", value)]
    return value


class JsonPreferencesRepository(PreferencesRepositoryPort):
    """UI preferences persisted as one JSON object.

    Set values are written as sorted lists. A missing or unreadable file
    loads as an empty mapping.
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)

    @override
    def load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            warnings.warn(
                f"Failed to load preferences from {self.path}: {exc}", stacklevel=2
            )
            return {}
        if not isinstance(data, dict):
            warnings.warn(
                f"Ignoring preferences in {self.path}: expected a JSON object",
                stacklevel=2,
            )
            return {}
        return cast("dict[str, Any]", data)

    @override
    def save(self, preferences: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                json.dump(_to_json_compatible(preferences), handle, indent=2)
        except (OSError, TypeError, ValueError) as exc:
            raise PreferencesSaveError(
                f"Failed to save preferences to {self.path}: {exc}"
            ) from exc
