"""Define Explorer package.

This package reads CDISC Define-XML metadata files and derives the views a
reviewer needs to work with them:

Features:
- Define-XML 2.0 / 2.1 parsing, including ARM analysis results
- Value-level metadata resolution per ADaM dataset
- Parameter coverage tables and consistency warnings
- OID relationship graph export
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("define-explorer")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

# Core exports
from define_explorer.domain.entities.define_document import ParsedDefineXML
from define_explorer.domain.entities.vlm import ProcessedVLM
from define_explorer.domain.services.graph_builder import build_relationship_graph
from define_explorer.infrastructure.io.define_xml.parser import (
    parse_define_file,
    parse_define_xml,
)

__all__ = [
    "__version__",
    # Define-XML
    "ParsedDefineXML",
    "parse_define_file",
    "parse_define_xml",
    # Value-level metadata
    "ProcessedVLM",
    # Relationship graph
    "build_relationship_graph",
]
