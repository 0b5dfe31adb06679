"""Loading of JSON Schema documents from disk."""

from pathlib import Path
from typing import Any

import orjson

from json_validator.exceptions import SchemaLoadError
from json_validator.logger import get_logger

logger = get_logger(__name__)


def load_schema(schema_path: Path | str) -> dict[str, Any] | bool:
    """Load JSON schema from file.

    Args:
        schema_path: Path to schema file

    Returns:
        Parsed schema (an object, or a boolean schema)

    Raises:
        SchemaLoadError: If the file cannot be read, is not valid JSON,
            or its root is neither an object nor a boolean

    """
    schema_path = Path(schema_path)
    try:
        with schema_path.open("rb") as f:
            schema = orjson.loads(f.read())
    except OSError as e:
        raise SchemaLoadError(str(e), target=str(schema_path)) from e
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON in schema file: {e}"
        raise SchemaLoadError(msg, target=str(schema_path)) from e

    if not isinstance(schema, (dict, bool)):
        msg = (
            "Schema root must be an object or a boolean, "
            f"got {type(schema).__name__}"
        )
        raise SchemaLoadError(msg, target=str(schema_path))

    logger.debug("Loaded schema %s", schema_path)
    return schema
