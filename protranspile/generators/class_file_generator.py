"""Class file generator

Generates the Python and PHP files of one streaming class:

1. Skip the unit if every output is newer than its source (unless forced)
2. Resolve the parent class once
3. Per target: transform the body, synthesize imports, assemble the header,
   wrap the body in the class declaration and write the file atomically
"""

from typing import List, Optional

from protranspile.core.build_logger import BuildLogger
from protranspile.core.config import GeneratorConfig
from protranspile.core.errors import ProTranspileError
from protranspile.core.fs import is_up_to_date, overwrite_file
from protranspile.core.models import (
    GeneratedFile, ResolvedBase, Target, Unit, UnitOutcome
)
from protranspile.core.registry import UnitRegistry
from protranspile.engine.transform_engine import TransformEngine
from protranspile.generators.base_class_resolver import BaseClassResolver
from protranspile.generators.header_assembler import HeaderAssembler
from protranspile.generators.import_synthesizer import ImportSynthesizer


class ClassFileGenerator:
    """Turns registry units into generated class files"""

    def __init__(self, config: GeneratorConfig, engine: TransformEngine,
                 registry: Optional[UnitRegistry] = None,
                 logger: Optional[BuildLogger] = None,
                 resolver: Optional[BaseClassResolver] = None,
                 synthesizer: Optional[ImportSynthesizer] = None,
                 assembler: Optional[HeaderAssembler] = None) -> None:
        self.config = config
        self.engine = engine
        self.registry = registry if registry is not None else UnitRegistry(config)
        self.logger = logger if logger is not None else BuildLogger(quiet=True)
        self.resolver = resolver if resolver is not None else BaseClassResolver(
            root_package=config.root_package,
            rest_marker=config.rest_marker,
            policy=config.parent_policy,
        )
        self.synthesizer = synthesizer if synthesizer is not None else ImportSynthesizer(
            root_package=config.root_package
        )
        self.assembler = assembler if assembler is not None else HeaderAssembler(
            notice=config.notice, root_package=config.root_package
        )

    def build_file(self, unit: Unit, target: Target, resolved: ResolvedBase) -> GeneratedFile:
        """Transform and assemble one target file of unit (not written)

        Raises:
            TransformError: If the engine fails
        """
        result = self.engine.transform(unit.source_path, target)
        if result.class_names and unit.class_name not in result.class_names:
            self.logger.warning(
                f"{unit.source_path} declares {', '.join(result.class_names)}, "
                f"expected {unit.class_name}",
                subject=unit.identifier,
            )
        body = result.body.strip("\n")

        imports = self.resolver.imports(target, resolved)
        imports.extend(self.synthesizer.synthesize(body, target))
        header = self.assembler.assemble(target, imports)

        lines: List[str] = ["", "", self.resolver.declaration(target, unit.class_name, resolved)]
        profile = self.assembler.profile(target)
        if body:
            lines.append(body)
        elif profile.empty_body:
            lines.append(profile.empty_body)
        if profile.class_closer:
            lines.append(profile.class_closer)

        return GeneratedFile(
            target=target,
            header_lines=header,
            body="\n".join(lines),
            output_path=unit.output_paths[target],
        )

    def generate_unit(self, unit: Unit, force: bool = False) -> UnitOutcome:
        """Generate every target file of a resolved unit

        Errors are recorded on the outcome; they never escape.
        """
        outcome = UnitOutcome(identifier=unit.identifier, class_name=unit.class_name)
        outputs = [unit.output_paths[t] for t in Target.generated()]
        if not force and is_up_to_date(unit.source_path, outputs):
            outcome.skipped = True
            self.logger.detail(f"Up to date: {unit.identifier}", subject=unit.identifier)
            return outcome

        try:
            resolved = self.resolver.resolve(unit.parent_name, unit.class_name)
            files = [self.build_file(unit, target, resolved) for target in Target.generated()]
            for generated in files:
                overwrite_file(generated.output_path, generated.render())
                outcome.written.append(generated.output_path)
                self.logger.detail(f"Generated: {generated.output_path}", subject=unit.identifier)
        except ProTranspileError as e:
            outcome.error = str(e)
            self.logger.error(str(e), subject=unit.identifier)
        return outcome

    def generate(self, unit_id: str, force: bool = False) -> UnitOutcome:
        """Resolve unit_id through the registry and generate it"""
        try:
            unit = self.registry.resolve(unit_id)
        except ProTranspileError as e:
            self.logger.error(str(e), subject=unit_id)
            return UnitOutcome(identifier=unit_id, error=str(e))
        return self.generate_unit(unit, force=force)
