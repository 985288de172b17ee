"""Transform engine seam

The engine that rewrites canonical TypeScript into each target language is an
external collaborator; this package defines the interface and a command-line
adapter for it.
"""

from protranspile.engine.transform_engine import TransformEngine, CommandEngine

__all__ = [
    "TransformEngine",
    "CommandEngine",
]
