"""Generator configuration for protranspile

Settings are read from a YAML file (``protranspile.yaml`` by default). Every
key is optional; missing keys keep the defaults below, which match the
layout of the upstream repository.

Example:
    root_package: ccxt
    rest_marker: Rest
    parent_policy: permissive
    paths:
      ts_folder: ts/src/pro
      python_folder: python/ccxt/pro
      type_surface_file: ccxt.d.ts
    engine:
      command: [node, build/transpile-file.js, "{source}", "{target}"]
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from protranspile.core.errors import ConfigError
from protranspile.core.models import Target

DEFAULT_CONFIG_NAME = "protranspile.yaml"

DEFAULT_NOTICE = (
    "PLEASE DO NOT EDIT THIS FILE, IT IS GENERATED AND WILL BE OVERWRITTEN:",
    "https://github.com/ccxt/ccxt/blob/master/CONTRIBUTING.md#how-to-contribute-code",
)


class ParentPolicy(Enum):
    """What to do with a parent name that has no REST marker"""

    PERMISSIVE = "permissive"  # any such name is a direct streaming base
    STRICT = "strict"          # the name must also be a valid identifier


@dataclass
class PathsConfig:
    """Project-relative locations of sources and outputs"""
    ts_folder: str = "ts/src/pro"
    python_folder: str = "python/ccxt/pro"
    php_folder: str = "php/pro"
    ts_test_dir: str = "ts/src/pro/test"
    python_test_dir: str = "python/ccxt/pro/test"
    php_test_dir: str = "php/pro/test"
    registry_file: str = "exchanges.json"
    type_surface_file: Optional[str] = "ccxt.d.ts"


@dataclass
class EngineConfig:
    """External transform engine invocation"""
    command: List[str] = field(default_factory=list)


@dataclass
class GeneratorConfig:
    """Top-level configuration

    Attributes:
        root: Project root all relative paths resolve against
        root_package: Package/namespace root of the generated library
        rest_marker: Substring marking a parent as REST-derived
        parent_policy: Handling of marker-free parent names
        notice: The two generated-file notice lines
        registry_key: Key of the streaming exchange list in the registry file
        workers: Worker count for multiprocess mode (None = CPU count)
    """
    root: Path = field(default_factory=Path.cwd)
    root_package: str = "ccxt"
    rest_marker: str = "Rest"
    parent_policy: ParentPolicy = ParentPolicy.PERMISSIVE
    notice: Tuple[str, str] = DEFAULT_NOTICE
    registry_key: str = "ws"
    workers: Optional[int] = None
    paths: PathsConfig = field(default_factory=PathsConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)

    def resolve(self, relative: str) -> Path:
        path = Path(relative)
        return path if path.is_absolute() else self.root / path

    def class_folder(self, target: Target) -> Path:
        folders = {
            Target.TYPESCRIPT: self.paths.ts_folder,
            Target.PYTHON: self.paths.python_folder,
            Target.PHP: self.paths.php_folder,
        }
        return self.resolve(folders[target])

    def test_folder(self, target: Target) -> Path:
        folders = {
            Target.TYPESCRIPT: self.paths.ts_test_dir,
            Target.PYTHON: self.paths.python_test_dir,
            Target.PHP: self.paths.php_test_dir,
        }
        return self.resolve(folders[target])

    @property
    def registry_path(self) -> Path:
        return self.resolve(self.paths.registry_file)

    @property
    def type_surface_path(self) -> Optional[Path]:
        if not self.paths.type_surface_file:
            return None
        return self.resolve(self.paths.type_surface_file)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], root: Optional[Path] = None) -> 'GeneratorConfig':
        """Build a config from parsed YAML

        Raises:
            ConfigError: On unknown keys or invalid values
        """
        config = cls(root=Path(root) if root is not None else Path.cwd())
        data = dict(data or {})

        paths = data.pop('paths', None) or {}
        engine = data.pop('engine', None) or {}
        config.paths = _build_section(PathsConfig, paths, 'paths')
        config.engine = _build_section(EngineConfig, engine, 'engine')
        if not isinstance(config.engine.command, list):
            raise ConfigError("engine.command must be a list of arguments")

        if 'parent_policy' in data:
            value = data.pop('parent_policy')
            try:
                config.parent_policy = ParentPolicy(value)
            except ValueError:
                raise ConfigError(
                    f"parent_policy must be one of "
                    f"{', '.join(p.value for p in ParentPolicy)}, got {value!r}"
                )

        if 'notice' in data:
            notice = data.pop('notice')
            if not isinstance(notice, list) or len(notice) != 2:
                raise ConfigError("notice must be a list of exactly two lines")
            config.notice = (str(notice[0]), str(notice[1]))

        if 'workers' in data:
            workers = data.pop('workers')
            if workers is not None and (not isinstance(workers, int) or workers < 1):
                raise ConfigError(f"workers must be a positive integer, got {workers!r}")
            config.workers = workers

        for key in ('root_package', 'rest_marker', 'registry_key'):
            if key in data:
                value = data.pop(key)
                if not isinstance(value, str) or not value:
                    raise ConfigError(f"{key} must be a non-empty string")
                setattr(config, key, value)

        if data:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(data))}")
        return config

    @classmethod
    def load(cls, path: Optional[Path] = None, root: Optional[Path] = None) -> 'GeneratorConfig':
        """Load configuration from a YAML file

        Args:
            path: YAML file; when None, ``protranspile.yaml`` under root is
                used if present
            root: Project root (default: current directory)

        Returns:
            GeneratorConfig (defaults if no file is found)
        """
        root = Path(root) if root is not None else Path.cwd()
        explicit = path is not None
        if path is None:
            path = root / DEFAULT_CONFIG_NAME
        if not path.exists():
            if explicit:
                raise ConfigError(f"Config file not found: {path}")
            return cls(root=root)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return cls.from_dict(data, root=root)


def _build_section(section_cls, values: Dict[str, Any], name: str):
    if not isinstance(values, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    known = {f.name for f in fields(section_cls)}
    unknown = set(values) - known
    if unknown:
        raise ConfigError(f"Unknown keys in '{name}': {', '.join(sorted(unknown))}")
    return section_cls(**values)
