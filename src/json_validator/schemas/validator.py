"""JSON Schema compilation and document validation.

Schemas are compiled into jsonschema validator instances with format
checking enabled. The dialect is taken from the schema's own ``$schema``
keyword, defaulting to draft-07.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError, ValidationError
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for
from jsonschema_specifications import REGISTRY as SCHEMA_REGISTRY
from referencing import Resource, Specification
from referencing.exceptions import Unresolvable
from referencing.jsonschema import DRAFT7

from json_validator.constants import VIOLATION_SEPARATOR
from json_validator.core.document import Document, as_document
from json_validator.core.results import ValidationResult
from json_validator.exceptions import DocumentError, SchemaLoadError
from json_validator.logger import get_logger
from json_validator.schemas.loader import load_schema

if TYPE_CHECKING:
    from referencing._core import Resolver

logger = get_logger(__name__)

SchemaLoader = Callable[[Path], Any]
SchemaCompiler = Callable[[Any], Validator]


# Keywords whose values are instance data, not subschemas
_DATA_KEYWORDS = frozenset({"const", "default", "enum", "examples"})


def _unresolvable_references(
    schema: Any, resolver: Resolver, specification: Specification
) -> Iterator[str]:
    if isinstance(schema, list):
        for item in schema:
            yield from _unresolvable_references(item, resolver, specification)
        return
    if not isinstance(schema, dict):
        return

    # Follow $id changes of the base URI; "id" is the draft-04 spelling
    if isinstance(schema.get("$id"), str) or isinstance(schema.get("id"), str):
        resource = specification.create_resource(schema)
        resolver = resolver.in_subresource(resource)
    ref = schema.get("$ref")
    if isinstance(ref, str):
        try:
            resolver.lookup(ref)
        except Unresolvable:
            yield ref

    for key, value in schema.items():
        if key not in _DATA_KEYWORDS:
            yield from _unresolvable_references(value, resolver, specification)


def compile_schema(schema: dict[str, Any] | bool) -> Validator:
    """Compile a parsed schema into a reusable validator.

    References are resolved against the schema itself and the bundled
    meta-schemas only; nothing is fetched over the network. Every
    ``$ref`` is looked up here so that a dangling one fails compilation
    instead of a later validation.

    Args:
        schema: Parsed schema document

    Returns:
        Validator instance with format checking enabled

    Raises:
        SchemaLoadError: If the schema is not valid for its dialect or
            holds a ``$ref`` that cannot be resolved

    """
    validator_cls = validator_for(schema, default=Draft7Validator)
    try:
        validator_cls.check_schema(schema)
    except SchemaError as e:
        msg = f"Invalid schema at {e.json_path}: {e.message}"
        raise SchemaLoadError(msg) from e

    resource = Resource.from_contents(schema, default_specification=DRAFT7)
    resolver = SCHEMA_REGISTRY.resolver_with_root(resource)
    unresolvable = list(
        _unresolvable_references(schema, resolver, resource._specification)
    )
    if unresolvable:
        msg = f"Unresolvable $ref: {', '.join(unresolvable)}"
        raise SchemaLoadError(msg)

    return validator_cls(
        schema,
        registry=SCHEMA_REGISTRY,
        format_checker=validator_cls.FORMAT_CHECKER,
    )


def format_violation(error: ValidationError) -> str:
    """Render one violation as ``<instance-location> <message>``.

    Args:
        error: Validation error from jsonschema

    Returns:
        Formatted violation, e.g. ``$.price -5 is less than the minimum of 0``

    """
    return f"{error.json_path} {error.message}"


def validate(
    compiled: Validator, source: Document | Path | str
) -> ValidationResult:
    """Validate a document against a compiled schema.

    The document is parsed first; read and syntax failures are reported
    the same way check_syntax reports them. Every violation is collected,
    not just the first.

    Args:
        compiled: Validator from compile_schema()
        source: A loaded Document or a path to read

    Returns:
        ValidationResult for the document

    """
    document = as_document(source)
    try:
        data = document.parse()
    except DocumentError as e:
        return ValidationResult.failure(document.path, str(e))

    try:
        violations = [
            format_violation(error) for error in compiled.iter_errors(data)
        ]
    except Unresolvable as e:
        # References compile_schema could not see, e.g. behind $dynamicRef
        msg = f"Schema reference could not be resolved: {e}"
        return ValidationResult.failure(document.path, msg)
    if violations:
        logger.debug(
            "%s has %d schema violation(s)", document.path, len(violations)
        )
        return ValidationResult.failure(
            document.path, VIOLATION_SEPARATOR.join(violations)
        )
    return ValidationResult.success(document.path)


class SchemaCache:
    """Compiled validators keyed by absolute schema path, owned by one run.

    Each distinct path is loaded and compiled at most once, also when
    many coroutines ask for it at the same time. Failures are remembered
    and re-raised without retrying.
    """

    def __init__(
        self,
        loader: SchemaLoader = load_schema,
        compiler: SchemaCompiler = compile_schema,
    ) -> None:
        """Initialize an empty cache.

        Args:
            loader: Reads and parses a schema file
            compiler: Turns a parsed schema into a validator

        """
        self._loader = loader
        self._compiler = compiler
        self._validators: dict[Path, Validator] = {}
        self._failures: dict[Path, SchemaLoadError] = {}
        self._locks: dict[Path, asyncio.Lock] = {}
        self.compilations = 0

    def __len__(self) -> int:
        return len(self._validators)

    def _lookup(self, key: Path) -> Validator | None:
        if key in self._failures:
            raise self._failures[key]
        return self._validators.get(key)

    async def get(self, schema_path: Path | str) -> Validator:
        """Return the compiled validator for ``schema_path``.

        Args:
            schema_path: Schema file path

        Returns:
            Compiled validator

        Raises:
            SchemaLoadError: If the schema cannot be loaded or compiled

        """
        key = Path(os.path.abspath(schema_path))
        validator = self._lookup(key)
        if validator is not None:
            return validator

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            # Another coroutine may have finished while we waited
            validator = self._lookup(key)
            if validator is None:
                validator = await self._build(key)
        return validator

    async def _build(self, key: Path) -> Validator:
        try:
            schema = await asyncio.to_thread(self._loader, key)
            self.compilations += 1
            validator = self._compiler(schema)
        except SchemaLoadError as e:
            failure = e
            if failure.target is None:
                # Compile errors carry no file; name it
                failure = SchemaLoadError(e.message, target=str(key))
            self._failures[key] = failure
            if failure is e:
                raise
            raise failure from e

        logger.debug("Compiled schema %s", key)
        self._validators[key] = validator
        return validator
