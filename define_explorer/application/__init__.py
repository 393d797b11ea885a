"""Application layer.

Use cases that orchestrate the domain services behind the CLI: importing a
Define-XML file and deriving value-level metadata for one dataset.
"""

from .define_import_use_case import DefineImportUseCase
from .vlm_use_case import VLMUseCase

__all__ = ["DefineImportUseCase", "VLMUseCase"]
