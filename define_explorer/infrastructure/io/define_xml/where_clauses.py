"""WhereClauseDef extraction and CheckValue inference.

Some Define-XML producers emit RangeChecks without CheckValue children and only
encode the condition in the WhereClauseDef OID
(``WC.<dataset>.<variable>.<operation>.<value>[...]``). The inference rules
below recover values from that OID. They are a known lossy heuristic tuned to
specific dataset conventions; the rule order is significant and the first
matching rule wins.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import re
from typing import TYPE_CHECKING

from define_explorer.domain.entities import (
    COMPARATORS,
    SOFT_HARD_VALUES,
    RangeCheck,
    WhereClauseDef,
)

from ..exceptions import DefineParseError
from ..xml_utils import DefineNamespaces, get_attr, iter_local, text_content
from .constants import DEFAULT_COMPARATOR, DEFAULT_SOFT_HARD

if TYPE_CHECKING:
    from define_explorer.application.ports.services import LoggerPort

    from ..xml_utils import XmlElement

_UPPERCASE_BOUNDARY = re.compile(r"(?=[A-Z])")
LAB_DATASET = "ADLB"
MISSING_OPERATION = "MISSING"
VISIT_MARKERS = ("Week", "Baseline")


def split_on_uppercase(value: str) -> list[str]:
    """Split a camel-cased OID value into words.

    A value with no lowercase letters has no word boundaries to split on and is
    returned whole.
    """
    if value and not any(char.islower() for char in value):
        return [value]
    return [token for token in _UPPERCASE_BOUNDARY.split(value) if token]


@dataclass(frozen=True, slots=True)
class WhereClauseOIDContext:
    domain: str | None
    variables: tuple[str, ...]
    operations: tuple[str, ...]
    values: tuple[str, ...]

    @classmethod
    def from_oid(cls, oid: str) -> WhereClauseOIDContext:
        parts = oid.split(".")
        domain = parts[1] if len(parts) > 1 else None
        variables: list[str] = []
        operations: list[str] = []
        values: list[str] = []
        for index in range(2, len(parts), 3):
            triple = parts[index : index + 3]
            if len(triple) == 3 and all(triple):
                variable, operation, value = triple
                variables.append(variable)
                operations.append(operation)
                values.append(value)
        return cls(
            domain=domain,
            variables=tuple(variables),
            operations=tuple(operations),
            values=tuple(values),
        )


InferenceRule = Callable[[WhereClauseOIDContext], list[str] | None]


def _lab_category(context: WhereClauseOIDContext) -> list[str] | None:
    if context.domain != LAB_DATASET or "PARCAT1" not in context.variables:
        return None
    raw = context.values[context.variables.index("PARCAT1")]
    return [token.upper() for token in split_on_uppercase(raw)]


def _lab_variables(context: WhereClauseOIDContext) -> list[str] | None:
    if context.domain != LAB_DATASET:
        return None
    if not any(variable.startswith("LB") for variable in context.variables):
        return None
    return list(context.values)


def _missing_operation(context: WhereClauseOIDContext) -> list[str] | None:
    if MISSING_OPERATION in context.operations:
        return [""]
    return None


def _visit_values(context: WhereClauseOIDContext) -> list[str] | None:
    for value in context.values:
        if any(marker in value for marker in VISIT_MARKERS):
            return split_on_uppercase(value)
    return None


def _parameter_code(context: WhereClauseOIDContext) -> list[str] | None:
    if "PARAMCD" not in context.variables:
        return None
    return [context.values[context.variables.index("PARAMCD")]]


def _flag_variable(context: WhereClauseOIDContext) -> list[str] | None:
    if any(variable.endswith("FL") for variable in context.variables):
        return ["Y"]
    return None


def _date_variable(context: WhereClauseOIDContext) -> list[str] | None:
    for index, variable in enumerate(context.variables):
        if variable.endswith("DT"):
            if context.operations[index] == MISSING_OPERATION:
                return [""]
            return [context.values[index]]
    return None


def _last_value(context: WhereClauseOIDContext) -> list[str] | None:
    if context.values:
        return [context.values[-1]]
    return None


INFERENCE_RULES: tuple[InferenceRule, ...] = (
    _lab_category,
    _lab_variables,
    _missing_operation,
    _visit_values,
    _parameter_code,
    _flag_variable,
    _date_variable,
    _last_value,
)


def infer_check_values(context: WhereClauseOIDContext) -> list[str]:
    for rule in INFERENCE_RULES:
        inferred = rule(context)
        if inferred is not None:
            return inferred
    return []


class WhereClauseReader:
    def __init__(self, namespaces: DefineNamespaces, logger: LoggerPort) -> None:
        super().__init__()
        self._ns = namespaces
        self._logger = logger

    def read_all(self, metadata: XmlElement) -> tuple[WhereClauseDef, ...]:
        return tuple(
            self.read(element)
            for element in self._ns.iter_def(metadata, "WhereClauseDef")
        )

    def read(self, element: XmlElement) -> WhereClauseDef:
        oid = get_attr(element, "OID")
        if not oid:
            raise DefineParseError("WhereClauseDef must have an OID")
        context = WhereClauseOIDContext.from_oid(oid)
        self._logger.debug(
            f"WhereClauseDef {oid}: variables={list(context.variables)} "
            f"operations={list(context.operations)} values={list(context.values)}"
        )
        range_checks = tuple(
            self._read_range_check(check, oid, context)
            for check in iter_local(element, "RangeCheck")
        )
        return WhereClauseDef(
            oid=oid,
            comment_oid=self._ns.def_attr(element, "CommentOID"),
            range_checks=range_checks,
        )

    def _read_range_check(
        self, element: XmlElement, oid: str, context: WhereClauseOIDContext
    ) -> RangeCheck:
        comparator = get_attr(element, "Comparator")
        soft_hard = get_attr(element, "SoftHard")
        item_oid = self._ns.def_attr(element, "ItemOID")

        if not comparator or not item_oid:
            self._logger.warning(
                f"Invalid RangeCheck in WhereClauseDef {oid}: missing required attributes"
            )
            return RangeCheck(
                comparator=DEFAULT_COMPARATOR,
                soft_hard=DEFAULT_SOFT_HARD,
                item_oid=item_oid or "",
                check_values=(),
            )

        if comparator not in COMPARATORS:
            self._logger.warning(
                f'Invalid Comparator "{comparator}" in WhereClauseDef {oid}, using {DEFAULT_COMPARATOR}'
            )
            comparator = DEFAULT_COMPARATOR

        if soft_hard not in SOFT_HARD_VALUES:
            if soft_hard:
                self._logger.warning(
                    f'Invalid SoftHard "{soft_hard}" in WhereClauseDef {oid}, using {DEFAULT_SOFT_HARD}'
                )
            soft_hard = DEFAULT_SOFT_HARD

        check_values = [
            value
            for value in (
                (text_content(node) or "").strip()
                for node in iter_local(element, "CheckValue")
            )
            if value
        ]
        if not check_values:
            check_values = infer_check_values(context)
            if check_values:
                self._logger.debug(f"Inferred CheckValues for {oid}: {check_values}")
            else:
                self._logger.warning(
                    f"Unable to infer CheckValues for WhereClauseDef {oid}"
                )

        return RangeCheck(
            comparator=comparator,
            soft_hard=soft_hard,
            item_oid=item_oid,
            check_values=tuple(check_values),
        )
