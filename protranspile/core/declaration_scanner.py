"""Class declaration scanner

Reads the constrained class-declaration grammar of canonical sources:

    export default class binance extends binanceRest {

Only the declaration line is recognized; class bodies are never parsed.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from protranspile.core.errors import UnitSourceError

DECLARATION_PATTERN = re.compile(
    r'^[ \t]*(?:export[ \t]+(?:default[ \t]+)?)?class[ \t]+([A-Za-z_$][\w$]*)[ \t]+extends[ \t]+([A-Za-z_$][\w$.]*)',
    re.MULTILINE,
)


@dataclass(frozen=True)
class ClassDeclaration:
    """A class name and its declared parent, with the 1-based source line"""
    class_name: str
    parent_name: str
    line: int


class ClassDeclarationScanner:
    """Finds ``class X extends Y`` declarations in source text"""

    def scan(self, source: str) -> List[ClassDeclaration]:
        declarations = []
        for match in DECLARATION_PATTERN.finditer(source):
            line = source.count('\n', 0, match.start()) + 1
            declarations.append(ClassDeclaration(match.group(1), match.group(2), line))
        return declarations

    def first(self, source: str) -> Optional[ClassDeclaration]:
        declarations = self.scan(source)
        return declarations[0] if declarations else None

    def scan_file(self, path: Path) -> ClassDeclaration:
        """Return the first declaration in path

        Raises:
            UnitSourceError: If the file is missing or declares no derived class
        """
        if not path.exists():
            raise UnitSourceError(f"Source file not found: {path}")
        try:
            source = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise UnitSourceError(f"Cannot read source file {path}: {e}") from e
        declaration = self.first(source)
        if declaration is None:
            raise UnitSourceError(f"No 'class X extends Y' declaration in {path}")
        return declaration
