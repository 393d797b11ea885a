"""Infrastructure I/O layer.

This package contains the Define-XML reader and the namespace-aware XML
helpers it is built on.

Architecture note:
- Avoid re-exporting symbols from here; import from the defining modules.
- Application DTOs live in define_explorer.application.models.
"""

from .exceptions import DefineExplorerError, DefineFileError, DefineParseError

__all__ = [
    "DefineExplorerError",
    "DefineFileError",
    "DefineParseError",
]
