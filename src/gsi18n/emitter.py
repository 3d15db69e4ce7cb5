"""
File emitter for gs-i18n.

Serializes translation trees and writes one file per language.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from loguru import logger

from gsi18n.exceptions import FileWriteError, OutputDirError

MAX_INDENT = 10


class OutputFormat(Enum):
    """Output file formats: (extension, prefix, suffix)."""

    JSON = ("json", "", "")
    CJS = ("js", "module.exports = ", ";")
    ESM = ("js", "export default ", ";")

    def __init__(self, extension: str, prefix: str, suffix: str) -> None:
        self.extension = extension
        self.prefix = prefix
        self.suffix = suffix

    @classmethod
    def from_name(cls, name: str) -> OutputFormat:
        """Look up a format by its CLI name (``json``, ``cjs``, ``esm``)."""
        try:
            return cls[name.upper()]
        except KeyError:
            choices = ", ".join(f.name.lower() for f in cls)
            raise ValueError(
                f"Unknown format {name!r} (available values: {choices})"
            ) from None


@dataclass
class EmitResult:
    """Result of an emit run."""

    written: list[Path] = field(default_factory=list)
    failures: list[FileWriteError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures


def serialize_tree(
    tree: dict[str, Any], output_format: OutputFormat, indent: int = 0
) -> str:
    """Serialize a tree to the text of an output file.

    An ``indent`` of 0 produces compact JSON without any whitespace.
    """
    if indent:
        body = json.dumps(tree, indent=indent, ensure_ascii=False)
    else:
        body = json.dumps(tree, separators=(",", ":"), ensure_ascii=False)
    return f"{output_format.prefix}{body}{output_format.suffix}"


def parse_emitted(text: str, output_format: OutputFormat) -> dict[str, Any]:
    """Parse the text of an output file back into a tree."""
    body = text.strip()
    if output_format.prefix and body.startswith(output_format.prefix):
        body = body[len(output_format.prefix) :]
    if output_format.suffix and body.endswith(output_format.suffix):
        body = body[: -len(output_format.suffix)]
    result: dict[str, Any] = json.loads(body)
    return result


class FileEmitter:
    """Writes one translation file per language to an output directory."""

    def __init__(self, output_dir: str | Path) -> None:
        """Initialize the emitter.

        Args:
            output_dir: Directory to write files to
        """
        self.output_dir = Path(output_dir)

    def ensure_output_dir(self) -> None:
        """Create the output directory if it does not exist.

        Raises:
            OutputDirError: If the directory cannot be created
        """
        if self.output_dir.is_dir():
            return
        logger.info(f"Creating output directory: {self.output_dir}")
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirError(str(self.output_dir), str(e)) from e

    def path_for(self, language: str, output_format: OutputFormat) -> Path:
        return self.output_dir / f"{language}.{output_format.extension}"

    def emit(
        self,
        trees: dict[str, dict[str, Any]],
        output_format: OutputFormat = OutputFormat.JSON,
        indent: int = 0,
    ) -> EmitResult:
        """Write every tree to ``<output_dir>/<language>.<ext>``.

        A failed write is logged and recorded, and the remaining languages
        are still written.

        Args:
            trees: Mapping of language to translation tree
            output_format: Format of the generated files
            indent: Number of spaces of indentation (0 for compact output)

        Returns:
            EmitResult listing written paths and per-file failures

        Raises:
            OutputDirError: If the output directory cannot be created
        """
        self.ensure_output_dir()

        result = EmitResult()
        for language, tree in trees.items():
            path = self.path_for(language, output_format)
            content = serialize_tree(tree, output_format, indent)
            try:
                path.write_text(content, encoding="utf-8")
            except (OSError, ValueError) as e:
                error = FileWriteError(str(path), str(e))
                logger.error(str(error))
                result.failures.append(error)
                continue

            logger.info(f"{path} has been created")
            result.written.append(path)

        return result
