class DefineExplorerError(Exception):
    pass


class DefineParseError(DefineExplorerError):
    pass


class DefineFileError(DefineExplorerError):
    pass
