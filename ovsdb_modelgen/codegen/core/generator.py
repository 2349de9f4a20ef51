"""
Base generator interface for all code generation targets.

The Generator renders a (template, context) pair, hands the text to a
language formatter that validates and formats it, and only then persists
the result.
"""

import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Union

from .templates import ModelTemplate, TemplateContext
from ...logging_config import get_logger

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class FormatError(GeneratorError):
    """Raised when rendered code fails the validation pass."""

    def __init__(
        self, message: str, line: Optional[int] = None, column: Optional[int] = None
    ):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{line}:{column}: {message}"
        super().__init__(message)


class PersistError(GeneratorError):
    """Raised when generated code cannot be written."""

    pass


class SourceFormatter(ABC):
    """Validates and formats source code for one target language."""

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'go')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.go')."""
        pass

    @abstractmethod
    def format_source(self, source: str) -> str:
        """
        Validate and format source code.

        Args:
            source: Rendered code

        Returns:
            Formatted code

        Raises:
            FormatError: If the code is not syntactically valid
        """
        pass


class Generator:
    """Renders templates, validates the output and persists it."""

    def __init__(
        self,
        formatter: SourceFormatter,
        dry_run: bool = False,
        stream: Optional[TextIO] = None,
    ):
        """
        Initialize generator.

        Args:
            formatter: Language formatter used for the validation pass
            dry_run: Write code to ``stream`` instead of the destination
            stream: Output for dry runs (default: stdout)
        """
        self.formatter = formatter
        self.dry_run = dry_run
        self.stream = stream

    def format(self, template: ModelTemplate, context: TemplateContext) -> bytes:
        """
        Render a template and validate the result.

        Neither the template nor the context is modified.

        Returns:
            Formatted code as UTF-8 bytes

        Raises:
            RenderError: If the template cannot be rendered
            FormatError: If the rendered code is not valid
        """
        rendered = template.render(context)
        try:
            formatted = self.formatter.format_source(rendered)
        except FormatError as e:
            logger.error(
                "Generated %s code for %s is invalid: %s",
                self.formatter.language_name,
                template.name,
                e,
            )
            logger.debug("Rejected source:\n%s", rendered)
            raise

        return formatted.encode("utf-8")

    def generate(
        self,
        destination: Union[str, Path],
        template: ModelTemplate,
        context: TemplateContext,
    ) -> None:
        """
        Format a template and write it to a destination.

        Nothing is written unless formatting succeeds.

        Raises:
            RenderError: If the template cannot be rendered
            FormatError: If the rendered code is not valid
            PersistError: If writing fails
        """
        data = self.format(template, context)
        self.persist(destination, data)

    def persist(self, destination: Union[str, Path], data: bytes) -> None:
        """Write already formatted code to a destination."""
        if self.dry_run:
            stream = self.stream or sys.stdout
            stream.write(data.decode("utf-8"))
            return

        path = Path(destination)
        try:
            path.write_bytes(data)
        except OSError as e:
            logger.error("Error writing %s: %s", path, e)
            raise PersistError(f"Failed to write {path}: {e}") from e

        logger.info("Wrote %s (%d bytes)", path, len(data))


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: Optional[Dict[str, bytes]] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Generated code keyed by file name
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.files = files or {}
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @property
    def total_bytes(self) -> int:
        return sum(len(data) for data in self.files.values())

    def source(self, name: str) -> str:
        """
        Decoded source of one generated file.

        Raises:
            KeyError: If no file of that name was generated
        """
        return self.files[name].decode("utf-8")

    @classmethod
    def error(
        cls,
        message: str,
        exception: Exception = None,
        warnings: Optional[List[str]] = None,
    ) -> "GenerationResult":
        """Create a failed generation result, keeping warnings found so far."""
        result = cls(warnings=warnings)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result
