"""
Go model package generation.

Composes the table and database model templates into a whole package:
one file per table plus ``model.go``.
"""

from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

from ...core.config import ModelGenConfig
from ...core.generator import GenerationResult, Generator
from ...core.naming import NameNormalizer
from ...core.schema import DatabaseSchema
from ...core.templates import ModelTemplate, TemplateContext
from ....logging_config import get_logger
from .formatter import GoFormatter
from .templates import (
    DBMODEL_FILE,
    NameConflictError,
    build_dbmodel_template,
    build_table_template,
    file_name,
)

logger = get_logger(__name__)

# Called with (file name, template, context) before each file is rendered
ExtendCallback = Callable[[str, ModelTemplate, TemplateContext], None]


class DatabaseModelGenerator:
    """Generates the Go model package of a database schema."""

    def __init__(
        self,
        package_name: str,
        schema: DatabaseSchema,
        config: Optional[ModelGenConfig] = None,
        generator: Optional[Generator] = None,
        extend: Optional[ExtendCallback] = None,
    ):
        """
        Initialize database model generator.

        Args:
            package_name: Go package of the generated files
            schema: Database schema
            config: Generation settings (tag key, model import, acronyms)
            generator: Generator used to format and persist files
                (default: Go formatter, dry run as configured)
            extend: Callback that may define hooks or add context keys
                on every template before it is rendered
        """
        self.package_name = package_name
        self.schema = schema
        self.config = config or ModelGenConfig()
        self.generator = generator or Generator(
            GoFormatter(), dry_run=self.config.dry_run
        )
        self.extend = extend
        self.normalizer = NameNormalizer(self.config.acronyms)

    def templates(self) -> Iterator[Tuple[str, ModelTemplate, TemplateContext]]:
        """
        Build a fresh template and context for every file of the package.

        Yields:
            (file name, template, context), tables in name order, then
            ``model.go``

        Raises:
            NameConflictError: If two tables map to the same file
        """
        owners: Dict[str, str] = {DBMODEL_FILE: "<database model>"}

        for table_name in sorted(self.schema.tables):
            name = file_name(table_name)
            if name in owners:
                raise NameConflictError(name, (owners[name], table_name), "file names")
            owners[name] = table_name

            template, context = build_table_template(
                self.package_name,
                table_name,
                self.schema.tables[table_name],
                tag_key=self.config.tag_key,
                normalizer=self.normalizer,
            )
            yield self._extended(name, template, context)

        template, context = build_dbmodel_template(
            self.package_name,
            self.schema,
            normalizer=self.normalizer,
            model_import=self.config.model_import,
        )
        yield self._extended(DBMODEL_FILE, template, context)

    def render(self) -> Dict[str, bytes]:
        """
        Render and format every file.

        Returns:
            Formatted code keyed by file name

        Raises:
            GeneratorError: On the first table that fails
            TemplateError: If a hook fails to render
        """
        files = {}
        for name, template, context in self.templates():
            logger.debug("Rendering %s", name)
            files[name] = self.generator.format(template, context)
        return files

    def generate(self, output_dir: Union[str, Path]) -> Dict[str, bytes]:
        """
        Render every file, then write them all to a directory.

        Nothing is written unless every file renders and validates.

        Returns:
            Formatted code keyed by file name
        """
        files = self.render()

        output_path = Path(output_dir)
        if not self.generator.dry_run:
            output_path.mkdir(parents=True, exist_ok=True)

        for name, data in files.items():
            self.generator.persist(output_path / name, data)

        logger.info("Generated %d files for database %s", len(files), self.schema.name)
        return files

    def validate_schema(self) -> List[str]:
        """
        Check the schema for things worth a warning.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if not self.schema.tables:
            warnings.append(f"Database '{self.schema.name}' has no tables")

        for table_name, table in sorted(self.schema.tables.items()):
            if not table.columns:
                warnings.append(f"Table '{table_name}' has no columns")
            if not self.normalizer.normalize(table_name).isidentifier():
                warnings.append(f"Table '{table_name}' has no usable struct name")

        return warnings

    def _extended(
        self, name: str, template: ModelTemplate, context: TemplateContext
    ) -> Tuple[str, ModelTemplate, TemplateContext]:
        if self.extend is not None:
            self.extend(name, template, context)
        return name, template, context


def generate_package(
    schema: DatabaseSchema,
    config: Optional[ModelGenConfig] = None,
    extend: Optional[ExtendCallback] = None,
    generator: Optional[Generator] = None,
    write: bool = True,
) -> GenerationResult:
    """
    Generate a model package with error handling.

    Args:
        schema: Database schema
        config: Generation settings; ``package_name`` and ``output_dir``
            pick the destination
        extend: Callback customizing each template before rendering
        generator: Generator used to format and persist files
        write: Persist the files (False only renders them)

    Returns:
        GenerationResult with files, warnings and metadata
    """
    config = config or ModelGenConfig()
    warnings: List[str] = []

    try:
        model_generator = DatabaseModelGenerator(
            config.package_name, schema, config, generator=generator, extend=extend
        )
        warnings = model_generator.validate_schema()

        if write:
            files = model_generator.generate(config.output_dir)
        else:
            files = model_generator.render()

        metadata = {
            "language": model_generator.generator.formatter.language_name,
            "database": schema.name,
            "version": schema.version,
            "package_name": config.package_name,
            "output_dir": config.output_dir,
            "table_count": len(schema.tables),
            "dry_run": model_generator.generator.dry_run,
        }

        return GenerationResult(files, warnings, metadata)

    except Exception as e:
        logger.error("Generation failed for database %s: %s", schema.name, e)
        return GenerationResult.error(
            f"Code generation failed: {e}", exception=e, warnings=warnings
        )
