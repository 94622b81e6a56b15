"""
Tag filter configuration loading.

Reads a YAML file of the form:

    tags:
      - "@smoke,@fast"
      - "~@slow:2"
    strict_limits: true
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from .errors import TagExpressionError
from .logic import TagExpressionEvaluator
from .models import TagFilterConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "tagspec.yaml"


def config_from_yaml(yaml_content: str, source: str = "<string>") -> TagFilterConfig:
    """
    Parse a tag filter configuration from YAML content.

    Args:
        yaml_content: The YAML text.
        source: Name used in error messages.

    Returns:
        The parsed configuration. Empty content yields the default config.

    Raises:
        TagExpressionError: If the YAML or its structure is invalid.
    """
    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise TagExpressionError(f"{source}: YAML parse error: {e}") from e

    if data is None:
        return TagFilterConfig()
    if not isinstance(data, dict):
        raise TagExpressionError(f"{source}: expected a mapping, got {type(data).__name__}")

    try:
        return TagFilterConfig.model_validate(data)
    except ValidationError as e:
        raise TagExpressionError(f"{source}: invalid configuration: {e}") from e


def load_config(path: Union[str, Path]) -> TagFilterConfig:
    """
    Load a tag filter configuration from a file.

    Raises:
        TagExpressionError: If the file is missing or invalid.
    """
    path = Path(path)
    if not path.exists():
        raise TagExpressionError(f"File not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        config = config_from_yaml(f.read(), source=str(path))

    logger.debug("Loaded %d tag expression(s) from %s", len(config.tags), path)
    return config


def find_config(directory: Union[str, Path]) -> Optional[Path]:
    """Find the default config file in a directory or any of its parents."""
    directory = Path(directory).resolve()
    for candidate_dir in [directory, *directory.parents]:
        candidate = candidate_dir / DEFAULT_CONFIG_NAME
        if candidate.is_file():
            return candidate
    return None


def evaluator_from_file(path: Union[str, Path]) -> TagExpressionEvaluator:
    """Load a config file and build its evaluator."""
    return load_config(path).build_evaluator()
