from __future__ import annotations

from typing import TYPE_CHECKING

from define_explorer.domain.entities import AnalysisResult

from ..xml_utils import (
    DefineNamespaces,
    find_local,
    get_attr,
    iter_local,
    iter_ns,
    local_name,
    path_text,
    text_content,
)
from .constants import RESULT_DISPLAY

if TYPE_CHECKING:
    from ..xml_utils import XmlElement


def _join_attrs(elements: list[XmlElement], name: str) -> str:
    return ", ".join(value for value in (get_attr(e, name) for e in elements) if value)


class AnalysisResultReader:
    """Read ARM ``AnalysisResult`` elements.

    ElementTree keeps no parent pointers, so a child-to-parent index over the
    metadata subtree is built once to find each result's enclosing
    ``ResultDisplay``.
    """

    def __init__(self, namespaces: DefineNamespaces) -> None:
        super().__init__()
        self._ns = namespaces

    def read_all(self, metadata: XmlElement) -> tuple[AnalysisResult, ...]:
        results = list(iter_ns(metadata, self._ns.arm, "AnalysisResult"))
        if not results:
            return ()
        parents = {child: parent for parent in metadata.iter() for child in parent}
        return tuple(self._read(element, parents) for element in results)

    def _read(
        self, element: XmlElement, parents: dict[XmlElement, XmlElement]
    ) -> AnalysisResult:
        display = self._enclosing_display(element, parents)
        pages = None
        if display is not None:
            pages = _join_attrs(list(iter_local(display, "PDFPageRef")), "PageRefs")

        documentation = find_local(element, "Documentation")
        programming = find_local(element, "ProgrammingCode")
        datasets = find_local(element, "AnalysisDatasets")

        return AnalysisResult(
            display=get_attr(display, "Name"),
            id=get_attr(element, "OID") or None,
            description=path_text(element, "Description", "TranslatedText"),
            variables=_join_attrs(
                list(iter_local(element, "AnalysisVariable")), "ItemOID"
            ),
            reason=get_attr(element, "AnalysisReason") or None,
            purpose=get_attr(element, "AnalysisPurpose") or None,
            selection_criteria=_join_attrs(
                list(iter_local(element, "WhereClauseRef")), "WhereClauseOID"
            ),
            join_comment=self._ns.def_attr(datasets, "CommentOID") or None,
            documentation=path_text(documentation, "TranslatedText"),
            documentation_refs=(
                _join_attrs(list(iter_local(documentation, "DocumentRef")), "leafID")
                if documentation is not None
                else ""
            ),
            programming_context=get_attr(programming, "Context") or None,
            programming_code=(
                text_content(find_local(programming, "Code")) or None
                if programming is not None
                else None
            ),
            programming_document=(
                get_attr(find_local(programming, "DocumentRef"), "leafID") or None
                if programming is not None
                else None
            ),
            pages=pages,
        )

    @staticmethod
    def _enclosing_display(
        element: XmlElement, parents: dict[XmlElement, XmlElement]
    ) -> XmlElement | None:
        current = parents.get(element)
        while current is not None:
            if local_name(current.tag) == RESULT_DISPLAY:
                return current
            current = parents.get(current)
        return None
