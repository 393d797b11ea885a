from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from ...constants import VLMVariables
from ..entities import Condition, StratificationCondition, WhereClauseResult
from .dataset_naming import normalize_dataset_id

if TYPE_CHECKING:
    from ...application.ports.services import LoggerPort
    from ..entities import ParsedDefineXML, WhereClauseDef


class WhereClauseResolver:
    """Evaluate a WhereClauseDef's range checks against one dataset.

    Each surviving check is classified by its variable: PARAMCD selects
    parameters (``EQ``/``IN`` only), stratification variables are kept for
    display, and anything else becomes a special variable. Every surviving
    check is also recorded verbatim in ``conditions``.
    """

    def __init__(self, logger: LoggerPort) -> None:
        super().__init__()
        self.logger = logger

    def resolve(
        self,
        where_clause_oid: str,
        where_clause_defs: Sequence[WhereClauseDef],
        dataset_name: str,
    ) -> WhereClauseResult | None:
        where_clause = next(
            (wc for wc in where_clause_defs if wc.oid == where_clause_oid), None
        )
        if where_clause is None:
            self.logger.warning(f"No WhereClauseDef found for OID: {where_clause_oid}")
            return None
        return self.resolve_def(where_clause, dataset_name)

    def resolve_def(
        self, where_clause: WhereClauseDef, dataset_name: str
    ) -> WhereClauseResult:
        result = WhereClauseResult()
        if not where_clause.range_checks:
            self.logger.debug(f"No RangeChecks found in WhereClause {where_clause.oid}")
            return result

        target = normalize_dataset_id(dataset_name)
        for check in where_clause.range_checks:
            parts = check.item_oid.split(".")
            if len(parts) != 3:
                self.logger.warning(f"Invalid ItemOID format: {check.item_oid}")
                continue
            _, check_dataset, variable = parts
            if normalize_dataset_id(check_dataset) != target:
                self.logger.warning(
                    f"Dataset mismatch in {where_clause.oid}: expected {target}, "
                    f"got {normalize_dataset_id(check_dataset)}"
                )
                continue

            values = tuple(check.check_values)
            result.conditions.append(
                Condition(variable=variable, comparator=check.comparator, values=values)
            )
            if variable == VLMVariables.PARAMCD:
                if check.comparator in VLMVariables.SELECTING_COMPARATORS:
                    result.paramcds.extend(values)
            elif variable in VLMVariables.STRATIFICATION:
                result.stratification_variables[variable] = StratificationCondition(
                    comparator=check.comparator, values=values
                )
            else:
                result.special_variables[variable] = ",".join(values)
        return result

    def validate_no_circular_references(self, document: ParsedDefineXML) -> bool:
        # Where clauses never reference each other in the parsed model.
        return True
