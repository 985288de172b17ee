"""Data model for protranspile

Defines the Target enum, per-target layout profiles, and the records that
flow between the registry, the generators and the orchestrator.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple


class Target(Enum):
    """Languages the generator reads from or writes to"""

    TYPESCRIPT = "ts"
    PYTHON = "py"
    PHP = "php"

    @classmethod
    def generated(cls) -> List['Target']:
        """Targets that receive generated class and test files"""
        return [cls.PYTHON, cls.PHP]

    @property
    def extension(self) -> str:
        return f".{self.value}"


@dataclass(frozen=True)
class TargetProfile:
    """Fixed layout rules for one generated target

    Attributes:
        target: Target this profile describes
        pragma: Lines that must open the file (encoding or opening tag)
        comment_prefix: Line comment delimiter used for the notice
        namespace: Namespace declaration line, if the target needs one
        fixed_imports: Imports every file of this target carries
        class_closer: Line closing the class body, if the syntax needs one
        empty_body: Statement standing in for an empty class body
        test_name_separator: Separator used when uncamelcasing test names
    """
    target: Target
    pragma: Tuple[str, ...]
    comment_prefix: str
    namespace: Optional[str] = None
    fixed_imports: Tuple[str, ...] = ()
    class_closer: Optional[str] = None
    empty_body: Optional[str] = None
    test_name_separator: str = "_"


def default_profiles(root_package: str) -> Dict[Target, TargetProfile]:
    """Build the Python and PHP profiles for a root package name"""
    return {
        Target.PYTHON: TargetProfile(
            target=Target.PYTHON,
            pragma=("# -*- coding: utf-8 -*-",),
            comment_prefix="#",
            empty_body="    pass",
        ),
        Target.PHP: TargetProfile(
            target=Target.PHP,
            pragma=("<?php",),
            comment_prefix="//",
            namespace=f"namespace {root_package}\\pro;",
            fixed_imports=("use Exception; // a common import",),
            class_closer="}",
        ),
    }


class BaseKind(Enum):
    """Shape of a streaming class's inheritance"""

    REST_DERIVED = "rest_derived"  # async variant of the REST class
    DIRECT = "direct"              # named streaming base class


@dataclass(frozen=True)
class ResolvedBase:
    """Parent reference resolved once per unit

    Attributes:
        kind: Which inheritance branch applies
        base_name: Parent name with the REST marker stripped (REST_DERIVED)
            or unchanged (DIRECT)
        declared_name: Parent name exactly as declared in the source
    """
    kind: BaseKind
    base_name: str
    declared_name: str

    @property
    def is_rest_derived(self) -> bool:
        return self.kind == BaseKind.REST_DERIVED


@dataclass(frozen=True)
class Unit:
    """One streaming class slated for generation"""
    identifier: str
    class_name: str
    parent_name: str
    source_path: Path
    output_paths: Dict[Target, Path] = field(default_factory=dict)


@dataclass
class GeneratedFile:
    """A target-specific artifact ready to be written

    Header lines always precede the body.
    """
    target: Target
    header_lines: List[str]
    body: str
    output_path: Path

    @property
    def has_notice(self) -> bool:
        return any("DO NOT EDIT THIS FILE" in line for line in self.header_lines)

    def render(self) -> str:
        content = "\n".join(self.header_lines) + "\n" + self.body
        if not content.endswith("\n"):
            content += "\n"
        return content


@dataclass(frozen=True)
class ImportSpec:
    """A helper symbol family detected by textual pattern

    Attributes:
        family: Family name ("cache", "order_book_side")
        pattern: Compiled regex matching a usage of the family
        symbol_group: Regex group holding the symbol name
        templates: Per-target import template with a ``{symbols}`` slot
    """
    family: str
    pattern: re.Pattern
    symbol_group: int
    templates: Dict[Target, str]

    def find_symbols(self, body: str) -> List[str]:
        """Deduplicated, sorted symbol names referenced in body"""
        found = {match.group(self.symbol_group).strip() for match in self.pattern.finditer(body)}
        return sorted(found)


CACHE_PATTERN = re.compile(r"\bArrayCache(?:[A-Z][A-Za-z]+)?\b")
ORDER_BOOK_SIDE_PATTERN = re.compile(r"\s(Asks|Bids)\(.*\)")


def default_import_specs(root_package: str) -> List[ImportSpec]:
    """The cache-container and order-book-side families, in emission order"""
    return [
        ImportSpec(
            family="cache",
            pattern=CACHE_PATTERN,
            symbol_group=0,
            templates={
                Target.PYTHON: f"from {root_package}.async_support.base.ws.cache import {{symbols}}",
                Target.PHP: "use " + root_package + "\\pro\\{{{symbols}}};",
            },
        ),
        ImportSpec(
            family="order_book_side",
            pattern=ORDER_BOOK_SIDE_PATTERN,
            symbol_group=1,
            templates={
                Target.PYTHON: f"from {root_package}.async_support.base.ws.order_book_side import {{symbols}}",
                Target.PHP: "use " + root_package + "\\pro\\{{{symbols}}};",
            },
        ),
    ]


@dataclass(frozen=True)
class TestCase:
    """Canonical test definition projected into every generated target"""

    __test__ = False

    name: str
    base: bool
    source_path: Path
    output_paths: Dict[Target, Path]
    header_lines: Dict[Target, List[str]] = field(default_factory=dict)

    def injected_lines(self, target: Target) -> List[str]:
        return list(self.header_lines.get(target, []))


@dataclass(frozen=True)
class RunOptions:
    """Invocation-wide switches, read-only for the duration of a run"""
    units: Tuple[str, ...] = ()
    force: bool = False
    child: bool = False
    multiprocess: bool = False
    test_only: bool = False
    verbose: bool = False
    workers: Optional[int] = None

    @property
    def is_partial(self) -> bool:
        """True when the run is restricted to a requested subset"""
        return bool(self.units)


@dataclass
class TransformResult:
    """What the transform engine returns for one file and target"""
    body: str
    class_names: List[str] = field(default_factory=list)


@dataclass
class UnitOutcome:
    """Result of generating one unit"""
    identifier: str
    class_name: Optional[str] = None
    written: List[Path] = field(default_factory=list)
    skipped: bool = False
    error: Optional[str] = None

    @property
    def generated(self) -> bool:
        return bool(self.written) and self.error is None


@dataclass
class TestReport:
    """Outcome of one test-pipeline batch"""

    __test__ = False

    generated: List[Path] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    def merge(self, other: 'TestReport') -> None:
        self.generated.extend(other.generated)
        self.missing.extend(other.missing)
        self.failed.update(other.failed)

    @property
    def ok(self) -> bool:
        return not self.failed


class RunState(Enum):
    """Orchestrator states, in the order a full run visits them"""

    INIT = "init"
    PREPARING_FOLDERS = "preparing_folders"
    GENERATING_UNITS = "generating_units"
    GENERATING_TESTS = "generating_tests"
    REPORTING = "reporting"
    CHILD_TERMINATED = "child_terminated"
    DONE = "done"


@dataclass
class RunResult:
    """Everything one orchestrator invocation produced"""
    states: List[RunState] = field(default_factory=list)
    outcomes: List[UnitOutcome] = field(default_factory=list)
    tests: TestReport = field(default_factory=TestReport)
    nothing_to_do: bool = False
    exported_classes: List[str] = field(default_factory=list)
    worker_exit_codes: List[int] = field(default_factory=list)

    @property
    def generated_units(self) -> List[UnitOutcome]:
        return [o for o in self.outcomes if o.generated]

    @property
    def failed_units(self) -> List[UnitOutcome]:
        return [o for o in self.outcomes if o.error is not None]

    @property
    def files_generated(self) -> int:
        return sum(len(o.written) for o in self.generated_units)

    @property
    def exit_code(self) -> int:
        failed_workers = any(code != 0 for code in self.worker_exit_codes)
        return 1 if self.failed_units or self.tests.failed or failed_workers else 0
