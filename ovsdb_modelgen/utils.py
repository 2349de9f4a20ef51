"""Utility functions for loading OVSDB schemas.

This module provides functions for loading schema JSON from files and URLs
with proper error handling and validation.
"""

import json
from pathlib import Path
from typing import Any, Optional, Tuple, Union
from urllib.parse import urlparse

import requests

from .codegen.core.schema import DatabaseSchema, SchemaError
from .logging_config import get_logger

logger = get_logger(__name__)

# File suffixes that OVSDB schemas are published under
SCHEMA_SUFFIXES = (".ovsschema", ".json")


class SchemaLoaderError(Exception):
    """Custom exception for schema loading errors."""

    pass


def load_json_from_file(file_path: Union[str, Path]) -> Tuple[str, Any]:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        FileNotFoundError: If file doesn't exist.
        SchemaLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load JSON from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() not in SCHEMA_SUFFIXES:
        logger.warning("Unexpected schema file extension: %s", file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info("Successfully loaded JSON from %s", file_path)
        return str(file_path), data
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e)
        raise SchemaLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise SchemaLoaderError(f"Error reading file {file_path}: {e}") from e


def load_json_from_url(url: str, timeout: int = 30) -> Tuple[str, Any]:
    """Load JSON data from a URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        SchemaLoaderError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug("Attempting to load JSON from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error("Invalid URL format: %s", url)
        raise SchemaLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        # A schema suffix on the URL path stands in for a JSON content type
        content_type = response.headers.get("content-type", "").lower()
        if "json" not in content_type and not parsed_url.path.lower().endswith(
            SCHEMA_SUFFIXES
        ):
            logger.warning(
                "URL %s is neither a schema file nor JSON content: %s",
                url,
                content_type or "<none>",
            )

        data = response.json()
        logger.info("Successfully loaded JSON from %s", url)
        return url, data

    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise SchemaLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise SchemaLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error("HTTP error %s for URL: %s", e.response.status_code, url)
        raise SchemaLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.JSONDecodeError as e:
        logger.error("Invalid JSON response from URL %s: %s", url, e)
        raise SchemaLoaderError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise SchemaLoaderError(f"Request error for URL {url}: {e}") from e


def load_json(
    file_path: Optional[Union[str, Path]] = None,
    url: Optional[str] = None,
    timeout: int = 30,
) -> Tuple[str, Any]:
    """Load JSON data from either a file or URL.

    Args:
        file_path: Path to local JSON file (mutually exclusive with url).
        url: URL to fetch JSON from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        SchemaLoaderError: If neither or both parameters are provided, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        logger.error("Neither file_path nor url provided")
        raise SchemaLoaderError("Either file_path or url must be provided")

    if file_path and url:
        logger.error("Both file_path and url provided")
        raise SchemaLoaderError("Cannot specify both file_path and url")

    if file_path:
        return load_json_from_file(file_path)
    else:
        return load_json_from_url(url, timeout)


def load_schema(
    file_path: Optional[Union[str, Path]] = None,
    url: Optional[str] = None,
    timeout: int = 30,
) -> Tuple[str, DatabaseSchema]:
    """Load an OVSDB database schema from either a file or URL.

    Returns:
        Tuple of (source description, schema).

    Raises:
        SchemaLoaderError: If loading fails or the document is not a schema.
        FileNotFoundError: If file doesn't exist.
    """
    source, data = load_json(file_path, url, timeout)

    try:
        schema = DatabaseSchema.from_dict(data)
    except SchemaError as e:
        logger.error("Invalid schema in %s: %s", source, e)
        raise SchemaLoaderError(f"Invalid schema in {source}: {e}") from e

    logger.info(
        "Loaded schema %s %s with %d tables",
        schema.name,
        schema.version,
        len(schema.tables),
    )
    return source, schema
