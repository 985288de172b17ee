"""Type-surface exporter

Regenerates the ``export namespace pro { ... }`` block of the shared ambient
declaration file (``ccxt.d.ts``) so every streaming class is reachable from
TypeScript:

    export namespace pro {
        export const exchanges: string[]
        class Exchange  extends ExchangePro {}
        class binance extends Exchange {}
        ...
    }

The file is read once, the new content is computed in memory and written
back atomically. A missing or unbalanced block is an error.
"""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from protranspile.core.build_logger import BuildLogger
from protranspile.core.errors import TypeSurfaceDesyncError
from protranspile.core.fs import overwrite_file, read_text
from protranspile.core.naming import NamingScheme

BLOCK_OPENING = re.compile(r"\n\n[ \t]+export\s+namespace\s+pro\s*\{")

COMMON_DECLARATIONS = (
    "        export const exchanges: string[]",
    "        class Exchange  extends ExchangePro {}",
)


class TypeSurfaceExporter:
    """Replaces the pro namespace block with one line per class name"""

    def __init__(self, logger: Optional[BuildLogger] = None) -> None:
        self.logger = logger if logger is not None else BuildLogger(quiet=True)

    def build_block(self, class_names: Iterable[str]) -> str:
        """Block text from the blank lines before the opening marker
        through the namespace's closing brace"""
        lines = ["", "", "    export namespace pro {"]
        lines.extend(COMMON_DECLARATIONS)
        for name in NamingScheme.unique(class_names):
            lines.append(f"        class {name} extends Exchange {{}}")
        lines.append("    }")
        return "\n".join(lines)

    def locate_block(self, content: str, path: Path) -> Tuple[int, int]:
        """Start and end offsets of the pro namespace block

        The block runs from the blank lines preceding ``export namespace
        pro {`` through the brace that balances it.

        Raises:
            TypeSurfaceDesyncError: If the block is missing or never closes
        """
        match = BLOCK_OPENING.search(content)
        if match is None:
            raise TypeSurfaceDesyncError(path, "no 'export namespace pro {' block")

        depth = 1
        for index in range(match.end(), len(content)):
            char = content[index]
            if char == '{':
                depth += 1
            elif char == '}':
                depth -= 1
                if depth == 0:
                    return match.start(), index + 1
        raise TypeSurfaceDesyncError(path, "'export namespace pro {' block is not closed")

    def replace_block(self, content: str, class_names: Iterable[str], path: Path) -> str:
        start, end = self.locate_block(content, path)
        return content[:start] + self.build_block(class_names) + content[end:]

    def export(self, path: Path, class_names: Iterable[str]) -> List[str]:
        """Rewrite the pro namespace block of path

        Args:
            path: Ambient declaration file
            class_names: Generated class names, in output order

        Returns:
            The deduplicated class names written
        """
        names = NamingScheme.unique(class_names)
        self.logger.info(f"Exporting WS TypeScript class names → {path}")
        content = read_text(path)
        updated = self.replace_block(content, names, path)
        if updated != content:
            overwrite_file(path, updated)
        return names
