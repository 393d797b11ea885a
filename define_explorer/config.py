from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults


@dataclass(frozen=True, slots=True)
class ExplorerConfig:
    max_file_size_mb: int = Defaults.MAX_FILE_SIZE_MB
    allowed_extensions: tuple[str, ...] = Defaults.ALLOWED_EXTENSIONS
    vlm_dataset_class: str = Defaults.VLM_DATASET_CLASS
    missing_parameter_preview: int = Defaults.MISSING_PARAMETER_PREVIEW
    table_preview_rows: int = Defaults.TABLE_PREVIEW_ROWS
    preferences_file: Path = field(
        default_factory=lambda: Path(Defaults.PREFERENCES_FILE)
    )

    def __post_init__(self) -> None:
        if self.max_file_size_mb < 1:
            raise ValueError(
                f"max_file_size_mb must be positive, got {self.max_file_size_mb}"
            )
        if not self.allowed_extensions:
            raise ValueError("allowed_extensions must not be empty")
        if not self.vlm_dataset_class.strip():
            raise ValueError("vlm_dataset_class must not be blank")
        if self.missing_parameter_preview < 0:
            raise ValueError(
                f"missing_parameter_preview must not be negative, got {self.missing_parameter_preview}"
            )
        if self.table_preview_rows < 0:
            raise ValueError(
                f"table_preview_rows must not be negative, got {self.table_preview_rows}"
            )

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> ExplorerConfig:
        return cls(
            max_file_size_mb=int(
                os.getenv(
                    "DEFINE_EXPLORER_MAX_FILE_SIZE_MB", str(Defaults.MAX_FILE_SIZE_MB)
                )
            ),
            vlm_dataset_class=os.getenv(
                "DEFINE_EXPLORER_VLM_CLASS", Defaults.VLM_DATASET_CLASS
            ),
            preferences_file=Path(
                os.getenv(
                    "DEFINE_EXPLORER_PREFERENCES_FILE", Defaults.PREFERENCES_FILE
                )
            ),
        )


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> ExplorerConfig:
        config = ExplorerConfig.from_env()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(
        config_file: Path, base_config: ExplorerConfig
    ) -> ExplorerConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        limits = _get_table(data, "limits")
        vlm_section = _get_table(data, "vlm")
        paths = _get_table(data, "paths")
        max_file_size_mb = base_config.max_file_size_mb
        if (value := limits.get("max_file_size_mb")) is not None:
            max_file_size_mb = _coerce_int(value, key="limits.max_file_size_mb")
        allowed_extensions = base_config.allowed_extensions
        if (value := limits.get("allowed_extensions")) is not None:
            allowed_extensions = _coerce_extensions(
                value, key="limits.allowed_extensions"
            )
        vlm_dataset_class = base_config.vlm_dataset_class
        if (value := vlm_section.get("dataset_class")) is not None:
            vlm_dataset_class = str(value)
        missing_parameter_preview = base_config.missing_parameter_preview
        if (value := vlm_section.get("missing_parameter_preview")) is not None:
            missing_parameter_preview = _coerce_int(
                value, key="vlm.missing_parameter_preview"
            )
        table_preview_rows = base_config.table_preview_rows
        if (value := vlm_section.get("table_preview_rows")) is not None:
            table_preview_rows = _coerce_int(value, key="vlm.table_preview_rows")
        preferences_file = base_config.preferences_file
        if value := paths.get("preferences_file"):
            preferences_file = Path(str(value))
        return ExplorerConfig(
            max_file_size_mb=max_file_size_mb,
            allowed_extensions=allowed_extensions,
            vlm_dataset_class=vlm_dataset_class,
            missing_parameter_preview=missing_parameter_preview,
            table_preview_rows=table_preview_rows,
            preferences_file=preferences_file,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"{key} must be int-like or string, got {type(value).__name__}")


def _coerce_extensions(value: object, *, key: str) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list of strings, got {type(value).__name__}")
    extensions = [str(item).strip().lower() for item in cast("list[object]", value)]
    return tuple(ext if ext.startswith(".") else f".{ext}" for ext in extensions if ext)
