"""Top-level package for json-validator.

Validates JSON documents in a directory tree, optionally against JSON
Schema definitions supplied globally or declared per document.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("json-validator")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"
