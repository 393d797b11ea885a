from typing import ClassVar


class Defaults:
    MAX_FILE_SIZE_MB = 500
    ALLOWED_EXTENSIONS: ClassVar[tuple[str, ...]] = (".xml",)
    VLM_DATASET_CLASS = "BASIC DATA STRUCTURE"
    MISSING_PARAMETER_PREVIEW = 5
    TABLE_PREVIEW_ROWS = 5
    PREFERENCES_FILE = ".define_explorer/preferences.json"
    CONFIG_FILE = "define_explorer.toml"


class OIDPrefixes:
    ITEM_DEF = "IT"
    VALUE_LIST = "VL"


class VLMVariables:
    PARAMCD = "PARAMCD"
    PARAM = "PARAM"
    STRATIFICATION: ClassVar[frozenset[str]] = frozenset(
        {"DTYPE", "PARCAT", "PARCAT1", "PARCAT2"}
    )
    SELECTING_COMPARATORS: ClassVar[frozenset[str]] = frozenset({"EQ", "IN"})
    MANDATORY_YES = "Yes"


class DatasetExtensions:
    STRIPPED: ClassVar[tuple[str, ...]] = (".sas7bdat", ".xml")


class CoverageMarkers:
    COVERED = "✓"
    MISSING = "-"
