"""Transform engine interface and command adapter

``TransformEngine.transform`` turns one canonical source file into the
header-independent body text of one target, and reports the class names the
file declares. Headers, imports and the class declaration line are added by
the generators, never by the engine.
"""

import json
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence

from protranspile.core.errors import ConfigError, TransformError
from protranspile.core.models import Target, TransformResult


class TransformEngine(ABC):
    """Black-box syntax transformer invoked once per file and target"""

    @abstractmethod
    def transform(self, source: Path, target: Target) -> TransformResult:
        """Transform a canonical source file

        Args:
            source: Canonical TypeScript file
            target: Generated target language

        Returns:
            TransformResult with the body text and declared class names

        Raises:
            TransformError: If the file cannot be transformed
        """


class CommandEngine(TransformEngine):
    """Runs an external command per file and parses its JSON output

    Each argument of the command template may contain ``{source}`` and
    ``{target}`` placeholders. The command must print a JSON object:

        {"body": "<generated body>", "classes": ["binance"]}

    There is no timeout; a hanging command blocks its caller.
    """

    def __init__(self, command: Sequence[str], cwd: Optional[Path] = None) -> None:
        if not command:
            raise ConfigError(
                "No transform engine configured (set engine.command in the config file)"
            )
        self.command = list(command)
        self.cwd = cwd

    def build_command(self, source: Path, target: Target) -> List[str]:
        return [
            arg.replace("{source}", str(source)).replace("{target}", target.value)
            for arg in self.command
        ]

    def transform(self, source: Path, target: Target) -> TransformResult:
        if not source.exists():
            raise TransformError(source, "source file does not exist")

        args = self.build_command(source, target)
        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                encoding='utf-8',
                cwd=self.cwd,
            )
        except OSError as e:
            raise TransformError(source, f"cannot run {args[0]}: {e}") from e
        except UnicodeDecodeError as e:
            raise TransformError(source, f"engine output is not valid UTF-8: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr.strip() or "no output"
            raise TransformError(source, f"engine exited with {result.returncode}: {stderr}")

        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise TransformError(source, f"engine output is not JSON: {e}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get('body'), str):
            raise TransformError(source, "engine output has no 'body' string")
        classes = payload.get('classes', [])
        if not isinstance(classes, list):
            raise TransformError(source, "'classes' must be a list")
        return TransformResult(body=payload['body'], class_names=[str(c) for c in classes])
