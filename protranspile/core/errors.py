"""Exception hierarchy for protranspile

Item-level errors (one unit, one test case) are caught and recorded by the
generator that owns the item. Run-level errors propagate to the CLI.
"""

from pathlib import Path
from typing import Optional


class ProTranspileError(Exception):
    """Base class for all generator errors"""


class ConfigError(ProTranspileError):
    """Raised when the YAML configuration is unreadable or invalid"""


class HierarchyError(ProTranspileError):
    """Raised by the strict parent policy for a malformed parent class name"""

    def __init__(self, class_name: str, parent_name: str) -> None:
        self.class_name = class_name
        self.parent_name = parent_name
        super().__init__(
            f"Class '{class_name}' declares an unrecognized parent '{parent_name}'"
        )


class TransformError(ProTranspileError):
    """Raised when the transform engine fails on a source file"""

    def __init__(self, source: Path, message: str) -> None:
        self.source = source
        super().__init__(f"Cannot transform {source}: {message}")


class UnitSourceError(ProTranspileError):
    """Raised when a unit's canonical source is missing or has no class declaration"""


class TestSourceMissingError(ProTranspileError):
    """Raised when a test case's canonical source file does not exist"""

    __test__ = False

    def __init__(self, name: str, source: Path) -> None:
        self.name = name
        self.source = source
        super().__init__(f"Test source for '{name}' not found: {source}")


class TypeSurfaceDesyncError(ProTranspileError):
    """Raised when the ambient declaration file lacks the pro namespace block"""

    def __init__(self, path: Path, reason: Optional[str] = None) -> None:
        self.path = path
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Type surface file is out of sync: {path}{detail}")


class FileSystemError(ProTranspileError):
    """Raised when a folder cannot be created or a file cannot be written"""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Filesystem failure on {path}: {cause}")
