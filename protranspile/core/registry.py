"""Unit registry for protranspile

The registry file is a JSON document whose ``ws`` key lists the exchanges
that have a streaming class. Each id maps to ``<ts_folder>/<id>.ts``.
"""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from protranspile.core.config import GeneratorConfig
from protranspile.core.declaration_scanner import ClassDeclarationScanner
from protranspile.core.errors import ConfigError
from protranspile.core.models import Target, Unit


class UnitRegistry:
    """Enumerates units and resolves them into Unit records"""

    def __init__(self, config: GeneratorConfig,
                 scanner: Optional[ClassDeclarationScanner] = None) -> None:
        self.config = config
        self.scanner = scanner if scanner is not None else ClassDeclarationScanner()
        self._ids: Optional[List[str]] = None

    def unit_ids(self) -> List[str]:
        """All registered unit ids, in registry order

        Raises:
            ConfigError: If the registry file is missing or malformed
        """
        if self._ids is not None:
            return list(self._ids)

        path = self.config.registry_path
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise ConfigError(f"Registry file not found: {path}")
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in registry file {path}: {e}") from e

        ids = data.get(self.config.registry_key) if isinstance(data, dict) else None
        if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
            raise ConfigError(
                f"Registry file {path} must map '{self.config.registry_key}' to a list of ids"
            )
        self._ids = list(dict.fromkeys(ids))
        return list(self._ids)

    def select(self, requested: Sequence[str] = ()) -> List[str]:
        """Registered ids restricted to requested (empty = all)

        Requested ids that are not registered are dropped; the caller sees
        an empty list when nothing matched.
        """
        ids = self.unit_ids()
        if not requested:
            return ids
        wanted = set(requested)
        return [unit_id for unit_id in ids if unit_id in wanted]

    def unknown(self, requested: Iterable[str]) -> List[str]:
        registered = set(self.unit_ids())
        return [unit_id for unit_id in requested if unit_id not in registered]

    def source_path(self, unit_id: str) -> Path:
        return self.config.class_folder(Target.TYPESCRIPT) / f"{unit_id}.ts"

    def output_paths(self, unit_id: str) -> Dict[Target, Path]:
        return {
            target: self.config.class_folder(target) / f"{unit_id}{target.extension}"
            for target in Target.generated()
        }

    def resolve(self, unit_id: str) -> Unit:
        """Scan the unit's canonical source and build its Unit

        Raises:
            UnitSourceError: If the source is missing or has no declaration
        """
        source = self.source_path(unit_id)
        declaration = self.scanner.scan_file(source)
        return Unit(
            identifier=unit_id,
            class_name=declaration.class_name,
            parent_name=declaration.parent_name,
            source_path=source,
            output_paths=self.output_paths(unit_id),
        )
