"""Define-XML 2.0/2.1 reading (infrastructure).

Keep this package's public surface minimal; import implementation details from
their defining modules (no broad re-exports).
"""

from .parser import DefineXMLParser, parse_define_file, parse_define_xml
from .where_clauses import WhereClauseOIDContext, infer_check_values

__all__ = [
    "DefineXMLParser",
    "WhereClauseOIDContext",
    "infer_check_values",
    "parse_define_file",
    "parse_define_xml",
]
