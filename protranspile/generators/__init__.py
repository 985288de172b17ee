"""protranspile.generators package

Generators that turn transformed bodies into complete target files.
"""

from .base_class_resolver import BaseClassResolver
from .import_synthesizer import ImportSynthesizer
from .header_assembler import HeaderAssembler
from .type_surface_exporter import TypeSurfaceExporter
from .class_file_generator import ClassFileGenerator
from .derived_tests import DerivedTestGenerator

__all__ = [
    "BaseClassResolver",
    "ImportSynthesizer",
    "HeaderAssembler",
    "TypeSurfaceExporter",
    "ClassFileGenerator",
    "DerivedTestGenerator",
]
