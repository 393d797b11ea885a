from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from ...constants import Defaults, VLMVariables
from ..entities import NON_PARAMETERIZED, VLMValidationIssue, VLMValidationReport

if TYPE_CHECKING:
    from ...application.ports.services import LoggerPort
    from ..entities import ProcessedVLM, VLMVariable

MISSING_PARAMCD = "missing-paramcd"
MISSING_PARAM = "missing-param"
EMPTY_VARIABLE = "empty-variable"
COVERAGE_GAP = "coverage-gap"
DUPLICATE_PARAMETERS = "duplicate-parameters"
ORPHANED_METHOD = "orphaned-method"
EMPTY_DESCRIPTION = "empty-description"

_PARAMETER_VARIABLES = frozenset({VLMVariables.PARAMCD, VLMVariables.PARAM})


class VLMValidator:
    """Advisory consistency checks over a processed VLM structure.

    Every finding becomes one :class:`VLMValidationIssue`; nothing here blocks
    the VLM from being returned.
    """

    def __init__(
        self,
        logger: LoggerPort,
        missing_parameter_preview: int = Defaults.MISSING_PARAMETER_PREVIEW,
    ) -> None:
        super().__init__()
        self.logger = logger
        self.missing_parameter_preview = missing_parameter_preview

    def validate(self, vlm: ProcessedVLM) -> VLMValidationReport:
        self.logger.debug(f"Validating VLM structure for {vlm.dataset}")
        issues: list[VLMValidationIssue] = []
        issues.extend(self._check_parameter_variables(vlm))
        issues.extend(self._check_empty_variables(vlm))
        issues.extend(self._check_coverage(vlm))
        issues.extend(self._check_duplicates(vlm))
        issues.extend(self._check_orphaned_methods(vlm))
        issues.extend(self._check_descriptions(vlm))

        for issue in issues:
            self.logger.warning(f"Validation Warning: {issue.message}")
            if issue.code == COVERAGE_GAP:
                self._log_missing_parameters(issue)
        self.logger.debug(f"VLM validation completed with {len(issues)} warnings")
        return VLMValidationReport(issues=tuple(issues))

    @staticmethod
    def _check_parameter_variables(vlm: ProcessedVLM) -> list[VLMValidationIssue]:
        issues: list[VLMValidationIssue] = []
        if VLMVariables.PARAMCD not in vlm.variables:
            issues.append(
                VLMValidationIssue(
                    code=MISSING_PARAMCD,
                    message="PARAMCD variable is missing in VLM",
                    variable=VLMVariables.PARAMCD,
                )
            )
        if VLMVariables.PARAM not in vlm.variables:
            issues.append(
                VLMValidationIssue(
                    code=MISSING_PARAM,
                    message="PARAM variable is missing in VLM",
                    variable=VLMVariables.PARAM,
                )
            )
        return issues

    @staticmethod
    def _check_empty_variables(vlm: ProcessedVLM) -> list[VLMValidationIssue]:
        return [
            VLMValidationIssue(
                code=EMPTY_VARIABLE,
                message=f"Variable {name} has no ItemRefs",
                variable=name,
            )
            for name, variable in vlm.variables.items()
            if not variable.item_refs
        ]

    @staticmethod
    def _check_coverage(vlm: ProcessedVLM) -> list[VLMValidationIssue]:
        paramcd_variable = vlm.variables.get(VLMVariables.PARAMCD)
        if paramcd_variable is None:
            return []
        all_paramcds = _distinct_paramcds(paramcd_variable)
        issues: list[VLMValidationIssue] = []
        for name, variable in vlm.variables.items():
            if name in _PARAMETER_VARIABLES:
                continue
            covered = variable.covered_paramcds()
            missing = [paramcd for paramcd in all_paramcds if paramcd not in covered]
            if missing:
                issues.append(
                    VLMValidationIssue(
                        code=COVERAGE_GAP,
                        message=(
                            f"Variable {name} is missing definitions for "
                            f"{len(missing)} parameters"
                        ),
                        variable=name,
                        details=tuple(missing),
                    )
                )
        return issues

    @staticmethod
    def _check_duplicates(vlm: ProcessedVLM) -> list[VLMValidationIssue]:
        issues: list[VLMValidationIssue] = []
        for name, variable in vlm.variables.items():
            counts = Counter(
                ref.paramcd
                for ref in variable.item_refs
                if ref.paramcd != NON_PARAMETERIZED
            )
            duplicates = [paramcd for paramcd, count in counts.items() if count > 1]
            if duplicates:
                issues.append(
                    VLMValidationIssue(
                        code=DUPLICATE_PARAMETERS,
                        message=(
                            f"Variable {name} has duplicate definitions for "
                            f"parameters: {', '.join(duplicates)}"
                        ),
                        variable=name,
                        details=tuple(duplicates),
                    )
                )
        return issues

    @staticmethod
    def _check_orphaned_methods(vlm: ProcessedVLM) -> list[VLMValidationIssue]:
        return [
            VLMValidationIssue(
                code=ORPHANED_METHOD,
                message=(
                    f"ItemRef for {name} (PARAMCD={ref.paramcd}) references methodOID "
                    f"{ref.method_oid} but no method definition was found"
                ),
                variable=name,
                details=(ref.method_oid,),
            )
            for name, variable in vlm.variables.items()
            for ref in variable.item_refs
            if ref.method_oid and ref.method is None
        ]

    @staticmethod
    def _check_descriptions(vlm: ProcessedVLM) -> list[VLMValidationIssue]:
        issues: list[VLMValidationIssue] = []
        for name, variable in vlm.variables.items():
            empty = sum(
                1
                for ref in variable.item_refs
                if not (ref.item_description or "").strip()
            )
            if empty:
                issues.append(
                    VLMValidationIssue(
                        code=EMPTY_DESCRIPTION,
                        message=(
                            f"Variable {name} has {empty} ItemRefs with empty descriptions"
                        ),
                        variable=name,
                    )
                )
        return issues

    def _log_missing_parameters(self, issue: VLMValidationIssue) -> None:
        preview = self.missing_parameter_preview
        if len(issue.details) <= preview:
            self.logger.verbose(f"  Missing parameters: {', '.join(issue.details)}")
        else:
            self.logger.verbose(
                f"  First {preview} missing parameters: "
                f"{', '.join(issue.details[:preview])}..."
            )


def _distinct_paramcds(variable: VLMVariable) -> list[str]:
    seen: dict[str, None] = {}
    for ref in variable.item_refs:
        if ref.paramcd != NON_PARAMETERIZED:
            seen.setdefault(ref.paramcd, None)
    return list(seen)
