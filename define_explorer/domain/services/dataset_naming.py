"""Dataset identifier normalization.

File names (``adlb.xml``, ``ADLB.sas7bdat``), OID path segments (``ADLB``) and
display names are compared through :func:`normalize_dataset_id` so that the
same dataset is recognised whatever its source.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import re
from typing import TYPE_CHECKING

from ...constants import DatasetExtensions, Defaults

if TYPE_CHECKING:
    from ..entities import ItemGroup, ParsedDefineXML

_EXTENSION_PATTERN = re.compile(
    "(" + "|".join(re.escape(ext) for ext in DatasetExtensions.STRIPPED) + ")$",
    re.IGNORECASE,
)


def normalize_dataset_id(name: str | None) -> str:
    if not name:
        return ""
    return _EXTENSION_PATTERN.sub("", name).upper().strip()


def same_dataset(left: str | None, right: str | None) -> bool:
    return normalize_dataset_id(left) == normalize_dataset_id(right)


def find_dataset_by_name[T](datasets: Mapping[str, T], name: str) -> T | None:
    target = normalize_dataset_id(name)
    for key, value in datasets.items():
        if normalize_dataset_id(key) == target:
            return value
    return None


def get_display_name(group: ItemGroup) -> str:
    return group.sas_dataset_name or group.name or ""


def is_vlm_eligible(
    group: ItemGroup, vlm_class: str = Defaults.VLM_DATASET_CLASS
) -> bool:
    return (group.class_name or "").strip().upper() == vlm_class.strip().upper()


def list_vlm_datasets(
    document: ParsedDefineXML | Iterable[ItemGroup],
    vlm_class: str = Defaults.VLM_DATASET_CLASS,
) -> list[str]:
    groups = getattr(document, "item_groups", document)
    names: list[str] = []
    for group in groups:
        if is_vlm_eligible(group, vlm_class):
            display_name = get_display_name(group)
            if display_name and display_name not in names:
                names.append(display_name)
    return names
