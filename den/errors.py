"""Exception types raised by Den."""


class DenError(Exception):
    """Base class for all Den errors."""


class ConfigError(DenError):
    """The configuration file could not be read, parsed or written."""


class CacheError(DenError):
    """The discovery cache could not be read, parsed or written."""


class DispatchError(DenError):
    """An external program (editor, file manager, clipboard) failed."""


class DirectoryValidationError(DenError):
    """A directory submitted for addition was rejected."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class DirectoryNotFoundError(DirectoryValidationError):
    def __init__(self, path: str, reason: str = ""):
        detail = f": {reason}" if reason else ""
        super().__init__(path, f"cannot access directory {path}{detail}")


class PathNotDirectoryError(DirectoryValidationError):
    def __init__(self, path: str):
        super().__init__(path, f"not a directory: {path}")


class DuplicateDirectoryError(DirectoryValidationError):
    def __init__(self, path: str):
        super().__init__(path, f"directory already exists in config: {path}")
