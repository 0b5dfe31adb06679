"""JSON Schema support for json-validator.

This package provides:
- Loading schema documents from disk (load_schema)
- Deciding which schema applies to a document (resolve_schema_for)
- Compiling schemas and validating documents (compile_schema, validate)
- A per-run compile-once cache (SchemaCache)

Usage:
    from json_validator.schemas import SchemaCache, validate

    cache = SchemaCache()
    compiled = await cache.get("schemas/user.schema.json")
    result = validate(compiled, "data/user.json")
"""

from json_validator.schemas.loader import load_schema
from json_validator.schemas.resolver import (
    extract_schema_reference,
    resolve_schema_for,
)
from json_validator.schemas.validator import (
    SchemaCache,
    compile_schema,
    format_violation,
    validate,
)

__all__ = [
    "SchemaCache",
    "compile_schema",
    "extract_schema_reference",
    "format_violation",
    "load_schema",
    "resolve_schema_for",
    "validate",
]
