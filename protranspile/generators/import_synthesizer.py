"""Import synthesizer

Finds helper symbols (cache containers, order-book sides) in generated body
text and emits one import per family that is actually used.

Detection is a textual scan, not semantic analysis: a symbol reached only
through indirection (aliasing, dynamic lookup) is not seen.
"""

from typing import Dict, List, Optional, Sequence

from protranspile.core.models import ImportSpec, Target, default_import_specs


class ImportSynthesizer:
    """Builds helper imports for a generated body

    Output depends only on the body text and target: symbols are
    deduplicated and sorted, and families keep their configured order, so the same
    body always yields byte-identical imports.
    """

    def __init__(self, specs: Optional[Sequence[ImportSpec]] = None,
                 root_package: str = "ccxt") -> None:
        self.specs: List[ImportSpec] = list(specs) if specs is not None else default_import_specs(root_package)

    def find_symbols(self, body: str) -> Dict[str, List[str]]:
        """Matched symbols per family; families with no match are omitted"""
        found: Dict[str, List[str]] = {}
        for spec in self.specs:
            symbols = spec.find_symbols(body)
            if symbols:
                found[spec.family] = symbols
        return found

    def synthesize(self, body: str, target: Target) -> List[str]:
        """Import lines for target, one per referenced family

        Args:
            body: Generated body text of one class
            target: Target whose import template is used

        Returns:
            List of import statements (empty if nothing is referenced)
        """
        imports: List[str] = []
        for spec in self.specs:
            template = spec.templates.get(target)
            if template is None:
                continue
            symbols = spec.find_symbols(body)
            if not symbols:
                continue
            statement = template.format(symbols=", ".join(symbols))
            if statement not in imports:
                imports.append(statement)
        return imports
