from __future__ import annotations

from typing import TYPE_CHECKING

from ...constants import OIDPrefixes
from .dataset_naming import normalize_dataset_id

if TYPE_CHECKING:
    from ...application.ports.services import LoggerPort
    from ..entities import ParsedDefineXML, ValueListDef


def value_list_variable(oid: str | None) -> str | None:
    """Variable segment of a ``VL.<dataset>.<variable>`` OID."""
    parts = (oid or "").split(".")
    if len(parts) < 3 or parts[0] != OIDPrefixes.VALUE_LIST:
        return None
    return parts[2] or None


def find_value_list_defs(
    document: ParsedDefineXML,
    dataset_name: str,
    logger: LoggerPort | None = None,
) -> list[ValueListDef]:
    target = normalize_dataset_id(dataset_name)
    seen: set[str] = set()
    found: list[ValueListDef] = []
    for value_list_def in document.value_list_defs:
        oid = value_list_def.oid
        parts = (oid or "").split(".")
        if (
            oid
            and len(parts) >= 3
            and parts[0] == OIDPrefixes.VALUE_LIST
            and normalize_dataset_id(parts[1]) == target
            and oid not in seen
        ):
            seen.add(oid)
            found.append(value_list_def)

    if logger is not None:
        logger.debug(f"Found {len(found)} ValueListDefs for dataset {dataset_name}")
        for value_list_def in found:
            logger.debug(
                f"  {value_list_def.oid}: variable="
                f"{value_list_variable(value_list_def.oid) or 'unknown'}, "
                f"{len(value_list_def.item_refs)} ItemRefs"
            )
    return found
