"""Utility functions for loading model descriptions.

This module loads the JSON descriptions of the files to generate, from
local files or URLs, with proper error handling and validation.
"""

import json
from pathlib import Path
from typing import Any, List
from urllib.parse import urlparse

import requests

from .codegen.core.model import CSharpFile, ModelError, build_file_model
from .logging_config import get_logger

logger = get_logger(__name__)


class ModelLoadError(Exception):
    """Custom exception for model loading errors."""

    pass


def load_model_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Load a model description from a local JSON file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        FileNotFoundError: If file doesn't exist.
        ModelLoadError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load model from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"Loaded model from {file_path}")
        return str(file_path), data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise ModelLoadError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise ModelLoadError(f"Error reading file {file_path}: {e}") from e


def load_model_from_url(url: str, timeout: int = 30) -> tuple[str, Any]:
    """Load a model description from a URL.

    Args:
        url: URL to fetch the JSON description from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        ModelLoadError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug(f"Attempting to load model from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise ModelLoadError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
        logger.info(f"Loaded model from {url}")
        return url, data

    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise ModelLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise ModelLoadError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise ModelLoadError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}")
        raise ModelLoadError(f"Request error for URL {url}: {e}") from e
    except ValueError as e:
        # requests raises a ValueError subclass for undecodable bodies
        logger.error(f"Invalid JSON response from URL {url}: {e}")
        raise ModelLoadError(f"Invalid JSON response from URL {url}: {e}") from e


def load_model(source: str | Path, timeout: int = 30) -> tuple[str, Any]:
    """Load a model description from a file path or an http(s) URL."""
    if not source:
        logger.error("No model source provided")
        raise ModelLoadError("A model file or URL must be provided")

    if isinstance(source, str) and urlparse(source).scheme in ("http", "https"):
        return load_model_from_url(source, timeout)
    return load_model_from_file(source)


def parse_file_models(data: Any) -> List[CSharpFile]:
    """Convert loaded JSON into file models.

    Accepts a single file description, a list of them, or an object with a
    "files" list.

    Raises:
        ModelLoadError: If the data does not describe valid files.
    """
    if isinstance(data, dict) and "files" in data:
        data = data["files"]
    items = data if isinstance(data, list) else [data]

    files = []
    for index, item in enumerate(items):
        try:
            files.append(build_file_model(item))
        except (ModelError, TypeError, ValueError) as e:
            logger.error(f"Invalid file description #{index + 1}: {e}")
            raise ModelLoadError(f"Invalid file description #{index + 1}: {e}") from e

    logger.debug(f"Parsed {len(files)} file model(s)")
    return files
