"""Validation pipeline for one run.

Discovery → per-document schema resolution → schema or syntax
validation → aggregation. A global schema is loaded and compiled before
any document is touched, so a broken global schema aborts the run
early. Everything that can go wrong with a single document ends up in
that document's ValidationResult.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from json_validator.config import Settings
from json_validator.core.discovery import discover
from json_validator.core.document import Document
from json_validator.core.results import Report, ValidationResult, aggregate
from json_validator.core.syntax import check_syntax
from json_validator.exceptions import SchemaLoadError
from json_validator.logger import get_logger
from json_validator.schemas.resolver import resolve_schema_for
from json_validator.schemas.validator import SchemaCache, validate

logger = get_logger(__name__)


def display_path(path: Path, cwd: Path | None = None) -> str:
    """Return ``path`` relative to ``cwd`` for log output."""
    return os.path.relpath(path, cwd or Path.cwd())


class ValidationPipeline:
    """Runs discovery and validation for one set of settings.

    Usage:
        pipeline = ValidationPipeline(settings)
        report = await pipeline.run()
    """

    def __init__(
        self,
        settings: Settings,
        cache: SchemaCache | None = None,
        cwd: Path | None = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            settings: Effective run settings
            cache: Schema cache for this run (a fresh one by default)
            cwd: Base directory for relative folder/schema paths

        """
        self.settings = settings
        self.cache = cache or SchemaCache()
        self.cwd = cwd or Path.cwd()
        self.global_schema = (
            Path(os.path.abspath(self.cwd / settings.schema))
            if settings.schema
            else None
        )

    async def run(self) -> Report:
        """Validate every discovered document.

        Returns:
            Aggregated report in discovery order

        Raises:
            SchemaLoadError: If the global schema cannot be loaded or
                compiled; no document is validated in that case

        """
        logger.info("Scanning for JSON files in: %s", self.settings.folder)
        files = await asyncio.to_thread(
            discover,
            self.settings.folder,
            self.settings.ignore_patterns,
            self.cwd,
        )
        if not files:
            logger.warning("No JSON files found in %s", self.settings.folder)
            return aggregate([])

        logger.info("Found %d JSON file(s)", len(files))

        if self.global_schema is not None:
            logger.info("Using global schema: %s", self.settings.schema)
            await self.cache.get(self.global_schema)

        semaphore = asyncio.Semaphore(self.settings.concurrency)

        async def validate_one(path: Path) -> ValidationResult:
            async with semaphore:
                return await self.validate_file(path)

        results = await asyncio.gather(*(validate_one(p) for p in files))
        return aggregate(results)

    async def validate_file(self, path: Path) -> ValidationResult:
        """Validate a single document.

        Args:
            path: Absolute document path

        Returns:
            Result for the document; never raises for per-document
            problems

        """
        document = await asyncio.to_thread(Document.load, path)
        if not document.readable:
            return check_syntax(document)

        schema_path = resolve_schema_for(document, self.global_schema)
        if schema_path is None:
            return check_syntax(document)

        if self.global_schema is None:
            if not schema_path.is_file():
                logger.debug(
                    "Schema %s declared by %s does not exist, "
                    "checking syntax only",
                    schema_path,
                    path,
                )
                return check_syntax(document)

            try:
                compiled = await self.cache.get(schema_path)
            except SchemaLoadError as e:
                logger.warning(
                    "%s: %s; checking syntax only",
                    display_path(path, self.cwd),
                    e,
                )
                return check_syntax(document)

            logger.info(
                "Using schema from $schema property for %s: %s",
                display_path(path, self.cwd),
                display_path(schema_path, self.cwd),
            )
        else:
            compiled = await self.cache.get(schema_path)

        return validate(compiled, document)
