"""Define-XML document parser.

Turns raw Define-XML 2.0/2.1 text (optionally carrying the ARM extension) into
an immutable :class:`ParsedDefineXML`. Structural failures abort the parse with
:class:`DefineParseError`; gaps in optional content are logged and left empty.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING
from xml.etree import ElementTree as ET

from define_explorer.domain.entities import (
    Comment,
    Document,
    ItemDef,
    ItemGroup,
    ItemRef,
    MetaDataVersion,
    Method,
    ParsedDefineXML,
    Standard,
    Study,
    ValueListDef,
)

from ...logging.null_logger import NullLogger
from ..exceptions import DefineFileError, DefineParseError
from ..xml_utils import (
    DefineNamespaces,
    children_local,
    find_local,
    get_attr,
    iter_local,
    ns_attr,
    path_text,
    text_content,
)
from .analysis import AnalysisResultReader
from .codelists import CodeListReader
from .constants import AFFIRMATIVE, ARM_NS, ARM_PREFIX, DEF_PREFIX, XLINK_NS, XML_NS
from .where_clauses import WhereClauseReader

if TYPE_CHECKING:
    from define_explorer.application.ports.services import LoggerPort

    from ..xml_utils import XmlElement

_NAMESPACE_SCAN_CHUNK = 64 * 1024


def _root_namespaces(xml_text: str) -> dict[str, str]:
    """Collect the ``xmlns`` declarations made on the root element.

    Feeding stops at the root's start tag, so the rest of the document is
    never scanned again.
    """
    pull = ET.XMLPullParser(events=("start-ns", "start"))
    namespaces: dict[str, str] = {}
    for offset in range(0, len(xml_text), _NAMESPACE_SCAN_CHUNK):
        pull.feed(xml_text[offset : offset + _NAMESPACE_SCAN_CHUNK])
        for event, payload in pull.read_events():
            if event == "start":
                return namespaces
            prefix, uri = payload
            namespaces[prefix] = uri
    return namespaces


def _read_root(xml_text: str) -> tuple[XmlElement, dict[str, str]]:
    """Parse ``xml_text`` and return the root with its namespace declarations."""
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise DefineParseError(f"XML parsing error: {exc}") from exc
    return root, _root_namespaces(xml_text)


class DefineXMLParser:
    pass

    def __init__(self, logger: LoggerPort | None = None) -> None:
        super().__init__()
        self._logger = logger or NullLogger()

    def parse_file(self, path: Path | str, encoding: str = "utf-8") -> ParsedDefineXML:
        path = Path(path)
        if not path.is_file():
            raise DefineFileError(f"File not found: {path}")
        try:
            xml_text = path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise DefineFileError(f"Unable to read {path}: {exc}") from exc
        self._logger.debug(f"Read {len(xml_text):,} characters from {path.name}")
        return self.parse(xml_text)

    def parse(self, xml_text: str) -> ParsedDefineXML:
        if not xml_text or not isinstance(xml_text, str):
            raise DefineParseError("Invalid input: XML string required")

        root, declared = _read_root(xml_text)
        define_uri = declared.get(DEF_PREFIX)
        if not define_uri:
            raise DefineParseError("Required namespace 'def' not found in XML")
        ns = DefineNamespaces(
            define=define_uri,
            arm=declared.get(ARM_PREFIX, ARM_NS),
            xlink=declared.get("xlink", XLINK_NS),
            xml=XML_NS,
        )

        study = self._read_study(root)
        metadata_element = find_local(root, "MetaDataVersion")
        if metadata_element is None:
            raise DefineParseError("Required element 'MetaDataVersion' not found")
        metadata = MetaDataVersion(
            oid=get_attr(metadata_element, "OID"),
            name=get_attr(metadata_element, "Name"),
            description=get_attr(metadata_element, "Description"),
            define_version=ns.def_attr(metadata_element, "DefineVersion"),
        )

        item_groups = tuple(
            self._read_item_group(ns, group)
            for group in iter_local(metadata_element, "ItemGroupDef")
        )
        code_lists, dictionaries = CodeListReader(ns).read_all(metadata_element)
        where_clause_defs = WhereClauseReader(ns, self._logger).read_all(
            metadata_element
        )

        document = ParsedDefineXML(
            study=study,
            metadata=metadata,
            standards=tuple(
                self._read_standard(ns, standard)
                for standard in ns.iter_def(metadata_element, "Standard")
            ),
            item_groups=item_groups,
            item_defs=tuple(
                self._read_item_def(ns, item)
                for item in iter_local(metadata_element, "ItemDef")
            ),
            methods=tuple(
                self._read_method(ns, method)
                for method in iter_local(metadata_element, "MethodDef")
            ),
            comments=tuple(
                Comment(
                    oid=get_attr(comment, "OID") or None,
                    description=path_text(comment, "Description", "TranslatedText"),
                )
                for comment in iter_local(metadata_element, "CommentDef")
            ),
            item_refs=tuple(ref for group in item_groups for ref in group.item_refs),
            code_lists=code_lists,
            dictionaries=dictionaries,
            where_clause_defs=where_clause_defs,
            value_list_defs=tuple(
                self._read_value_list_def(ns, vld)
                for vld in ns.iter_def(metadata_element, "ValueListDef")
            ),
            documents=tuple(
                Document(
                    id=get_attr(leaf, "ID") or None,
                    title=text_content(ns.find_def(leaf, "title")) or None,
                    href=ns_attr(leaf, ns.xlink, "href") or None,
                )
                for leaf in metadata_element
                if ns.is_def(leaf, "leaf")
            ),
            analysis_results=AnalysisResultReader(ns).read_all(metadata_element),
        )

        for name, count in document.collection_counts().items():
            self._logger.debug(f"Parsed {count} {name}")
        return document

    @staticmethod
    def _read_study(root: XmlElement) -> Study:
        return Study(
            oid=get_attr(find_local(root, "Study"), "OID"),
            name=path_text(root, "StudyName"),
            description=path_text(root, "StudyDescription"),
            protocol_name=path_text(root, "ProtocolName"),
        )

    @staticmethod
    def _read_standard(ns: DefineNamespaces, element: XmlElement) -> Standard:
        return Standard(
            oid=get_attr(element, "OID"),
            name=get_attr(element, "Name"),
            type=get_attr(element, "Type"),
            status=get_attr(element, "Status"),
            version=get_attr(element, "Version"),
            publishing_set=get_attr(element, "PublishingSet"),
            comment_oid=ns.def_attr(element, "CommentOID"),
        )

    def _read_item_group(self, ns: DefineNamespaces, element: XmlElement) -> ItemGroup:
        class_name = ns.def_attr(element, "Class") or get_attr(
            find_local(element, "Class"), "Name"
        )
        return ItemGroup(
            oid=get_attr(element, "OID"),
            name=get_attr(element, "Name"),
            sas_dataset_name=get_attr(element, "SASDatasetName"),
            repeating=get_attr(element, "Repeating"),
            purpose=get_attr(element, "Purpose"),
            is_reference_data=get_attr(element, "IsReferenceData"),
            standard_oid=ns.def_attr(element, "StandardOID"),
            structure=ns.def_attr(element, "Structure"),
            archive_location_id=ns.def_attr(element, "ArchiveLocationID"),
            comment_oid=ns.def_attr(element, "CommentOID"),
            description=path_text(element, "Description", "TranslatedText"),
            class_name=class_name or None,
            item_refs=tuple(
                self._read_item_ref(ns, ref) for ref in children_local(element, "ItemRef")
            ),
        )

    @staticmethod
    def _read_item_ref(ns: DefineNamespaces, element: XmlElement) -> ItemRef:
        where_clause_ref = next(
            (
                child
                for child in children_local(element, "WhereClauseRef")
                if ns.is_def(child, "WhereClauseRef")
            ),
            None,
        )
        return ItemRef(
            oid=get_attr(element, "ItemOID") or None,
            mandatory=get_attr(element, "Mandatory") or None,
            order_number=get_attr(element, "OrderNumber") or None,
            method_oid=get_attr(element, "MethodOID") or None,
            role=get_attr(element, "Role") or None,
            where_clause_oid=get_attr(where_clause_ref, "WhereClauseOID") or None,
            key_sequence=get_attr(element, "KeySequence") or None,
            role_code_list_oid=get_attr(element, "RoleCodeListOID") or None,
        )

    @staticmethod
    def _read_item_def(ns: DefineNamespaces, element: XmlElement) -> ItemDef:
        oid = get_attr(element, "OID") or None
        parts = oid.split(".") if oid else []
        origin = find_local(element, "Origin")
        display_format = ns.def_attr(element, "DisplayFormat") or None
        return ItemDef(
            oid=oid,
            dataset=parts[1] or None if len(parts) > 1 else None,
            name=get_attr(element, "Name") or None,
            sas_field_name=get_attr(element, "SASFieldName") or None,
            data_type=get_attr(element, "DataType") or None,
            length=get_attr(element, "Length") or None,
            description=path_text(element, "Description", "TranslatedText"),
            origin_type=get_attr(origin, "Type") or None,
            origin=path_text(origin, "Description", "TranslatedText"),
            origin_source=get_attr(origin, "Source") or None,
            code_list_oid=get_attr(find_local(element, "CodeListRef"), "CodeListOID")
            or None,
            significant_digits=get_attr(element, "SignificantDigits") or None,
            format=display_format,
            has_no_data=ns.def_attr(element, "HasNoData") or None,
            assigned_value=ns.def_attr(element, "AssignedValue") or None,
            common=True if ns.def_attr(element, "Common") == AFFIRMATIVE else None,
            pages=ns.def_attr(element, "Pages") or None,
            display_format=display_format,
            comment_oid=ns.def_attr(element, "CommentOID") or None,
            developer_notes=text_content(ns.find_def(element, "DeveloperNotes"))
            or None,
        )

    @staticmethod
    def _read_method(ns: DefineNamespaces, element: XmlElement) -> Method:
        document_ref = ns.find_def(element, "DocumentRef")
        description = path_text(element, "Description", "TranslatedText")
        return Method(
            oid=get_attr(element, "OID") or None,
            name=get_attr(element, "Name") or None,
            type=get_attr(element, "Type") or None,
            description=description,
            document=get_attr(document_ref, "leafID") or None,
            pages=get_attr(ns.find_def(document_ref, "PDFPageRef"), "PageRefs")
            or None,
            translated_text=description,
        )

    def _read_value_list_def(
        self, ns: DefineNamespaces, element: XmlElement
    ) -> ValueListDef:
        value_list_def = ValueListDef(
            oid=get_attr(element, "OID") or None,
            item_refs=tuple(
                self._read_item_ref(ns, ref) for ref in children_local(element, "ItemRef")
            ),
            description=path_text(element, "Description", "TranslatedText"),
        )
        self._logger.debug(
            f"Parsed ValueListDef {value_list_def.oid}: "
            f"{len(value_list_def.item_refs)} ItemRefs"
        )
        return value_list_def


def parse_define_xml(
    xml_text: str, *, logger: LoggerPort | None = None
) -> ParsedDefineXML:
    return DefineXMLParser(logger).parse(xml_text)


def parse_define_file(
    path: Path | str,
    *,
    encoding: str = "utf-8",
    logger: LoggerPort | None = None,
) -> ParsedDefineXML:
    return DefineXMLParser(logger).parse_file(path, encoding=encoding)
