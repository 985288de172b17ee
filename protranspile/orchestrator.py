"""Run orchestration for protranspile

A run walks these states:

    INIT -> PREPARING_FOLDERS -> GENERATING_UNITS -> GENERATING_TESTS -> REPORTING -> DONE

- test-only:  INIT -> GENERATING_TESTS -> DONE (no report)
- child:      ... -> GENERATING_TESTS -> CHILD_TERMINATED -> DONE (no tests, no report)

Multiprocess mode does not use the state machine. It splits the unit list
across child processes, waits for them, and then performs the steps that
touch shared files (type surface, tests, report) once in the parent.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from protranspile.core.build_logger import BuildLogger
from protranspile.core.config import GeneratorConfig
from protranspile.core.errors import ProTranspileError
from protranspile.core.fs import create_folder_recursively
from protranspile.core.models import RunOptions, RunResult, RunState, Target
from protranspile.core.registry import UnitRegistry
from protranspile.engine.transform_engine import TransformEngine
from protranspile.generators.class_file_generator import ClassFileGenerator
from protranspile.generators.derived_tests import DerivedTestGenerator
from protranspile.generators.type_surface_exporter import TypeSurfaceExporter


def partition(unit_ids: Sequence[str], workers: int) -> List[List[str]]:
    """Split unit_ids round-robin into at most `workers` non-empty chunks"""
    count = max(1, min(workers, len(unit_ids)))
    chunks: List[List[str]] = [[] for _ in range(count)]
    for index, unit_id in enumerate(unit_ids):
        chunks[index % count].append(unit_id)
    return [chunk for chunk in chunks if chunk]


class Orchestrator:
    """Sequences folder preparation, unit generation, tests and reporting"""

    def __init__(self, config: GeneratorConfig, engine: TransformEngine,
                 logger: Optional[BuildLogger] = None,
                 registry: Optional[UnitRegistry] = None) -> None:
        self.config = config
        self.engine = engine
        self.logger = logger if logger is not None else BuildLogger()
        self.registry = registry if registry is not None else UnitRegistry(config)
        self.class_generator = ClassFileGenerator(config, engine, registry=self.registry, logger=self.logger)
        self.test_generator = DerivedTestGenerator(config, engine, logger=self.logger)
        self.exporter = TypeSurfaceExporter(logger=self.logger)

    @staticmethod
    def _enter(result: RunResult, state: RunState) -> None:
        result.states.append(state)

    def prepare_folders(self) -> None:
        """Ensure every generated target's class and test folders exist"""
        for target in Target.generated():
            create_folder_recursively(self.config.class_folder(target))
            create_folder_recursively(self.config.test_folder(target))

    def export_type_surface(self, class_names: List[str]) -> List[str]:
        path = self.config.type_surface_path
        if path is None:
            return []
        return self.exporter.export(path, class_names)

    def _select_units(self, options: RunOptions) -> List[str]:
        unknown = self.registry.unknown(options.units)
        for unit_id in unknown:
            self.logger.warning(f"'{unit_id}' is not a registered streaming exchange")
        return self.registry.select(options.units)

    def run(self, options: RunOptions) -> RunResult:
        """Execute one run

        Raises:
            ProTranspileError: For run-level failures (folder creation,
                registry, type surface desynchronization)
        """
        result = RunResult()
        self._enter(result, RunState.INIT)

        if options.test_only:
            self._enter(result, RunState.GENERATING_TESTS)
            result.tests = self.test_generator.generate_all()
            self._enter(result, RunState.DONE)
            return result

        self._enter(result, RunState.PREPARING_FOLDERS)
        self.prepare_folders()

        self._enter(result, RunState.GENERATING_UNITS)
        for unit_id in self._select_units(options):
            result.outcomes.append(self.class_generator.generate(unit_id, force=options.force))

        # Partial and child runs do not know the full class list
        if not options.child and not options.is_partial:
            names = [o.class_name for o in result.outcomes if o.class_name]
            result.exported_classes = self.export_type_surface(names)

        self._enter(result, RunState.GENERATING_TESTS)
        if options.child:
            self._enter(result, RunState.CHILD_TERMINATED)
            self._enter(result, RunState.DONE)
            return result
        result.tests = self.test_generator.generate_all()

        self._enter(result, RunState.REPORTING)
        self.report(result)
        self._enter(result, RunState.DONE)
        return result

    def report(self, result: RunResult) -> None:
        for failed in result.failed_units:
            self.logger.error(f"{failed.identifier} was not generated: {failed.error}")
        if not result.generated_units:
            result.nothing_to_do = True
            self.logger.warning("0 files transpiled.")
            return
        self.logger.info(f"{result.files_generated} files generated")
        self.logger.success("Transpiled successfully.")

    def child_command(self, unit_ids: Sequence[str], config_path: Optional[Path] = None,
                      verbose: bool = False) -> List[str]:
        """Command line of one worker process"""
        command = [sys.executable, "-m", "protranspile.cli.main", *unit_ids,
                   "--child", "--force", "--root", str(self.config.root)]
        if config_path is not None:
            command.extend(["--config", str(config_path)])
        if verbose:
            command.append("--verbose")
        return command

    def run_multiprocess(self, options: RunOptions, config_path: Optional[Path] = None,
                         spawn: Optional[Callable[[List[str]], "subprocess.Popen"]] = None) -> RunResult:
        """Fan the unit list out to child processes, then aggregate

        Args:
            options: Run options; `units` restricts the fan-out
            config_path: Config file forwarded to the workers
            spawn: Process factory (default: subprocess.Popen in the project root)

        Returns:
            RunResult with worker exit codes and the aggregated test report
        """
        result = RunResult()
        unit_ids = self._select_units(options)
        if not unit_ids:
            result.nothing_to_do = True
            self.logger.warning("0 files transpiled.")
            return result

        if spawn is None:
            def spawn(command: List[str]) -> subprocess.Popen:
                return subprocess.Popen(command, cwd=str(self.config.root))

        workers = options.workers or self.config.workers or os.cpu_count() or 1
        chunks = partition(unit_ids, workers)
        self.prepare_folders()
        self.logger.info(f"starting {len(chunks)} new processes...")
        processes = [spawn(self.child_command(chunk, config_path, options.verbose)) for chunk in chunks]
        result.worker_exit_codes = [process.wait() for process in processes]

        for chunk, code in zip(chunks, result.worker_exit_codes):
            if code != 0:
                self.logger.error(f"Worker for {', '.join(chunk)} exited with code {code}")

        if not options.is_partial:
            names = []
            for unit_id in unit_ids:
                try:
                    names.append(self.registry.resolve(unit_id).class_name)
                except ProTranspileError as e:
                    self.logger.warning(f"{unit_id} left out of the type surface: {e}")
            result.exported_classes = self.export_type_surface(names)

        result.tests = self.test_generator.generate_all()

        if result.exit_code == 0:
            self.logger.info(f"{len(unit_ids)} units generated by {len(chunks)} workers")
            self.logger.success("Transpiled successfully.")
        return result
