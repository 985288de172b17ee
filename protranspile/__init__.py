"""protranspile - multi-target generator for streaming exchange classes

Regenerates Python and PHP class files, the ambient TypeScript type surface
and the derived test suite from the canonical TypeScript tree.
"""

__version__ = "0.3.0"
