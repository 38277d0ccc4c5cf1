"""Deserialize config content into the caller's type."""
from typing import Any, Optional, Type, TypeVar

import yaml
from pydantic import TypeAdapter, ValidationError

from .errors import ConfigParseError

T = TypeVar("T")

YAML_TYPES = ("yaml", "yml")


def parse_config(content: str, target_type: Type[T], config_type: Optional[str] = None) -> T:
    """
    Parse config content into target_type.

    Content is JSON unless config_type says it is YAML. target_type can be
    anything pydantic can validate: models, dataclasses, TypedDicts, dict.

    Raises:
        ConfigParseError: With the raw content and the parser diagnostic
    """
    adapter = TypeAdapter(target_type)
    try:
        if config_type and config_type.lower() in YAML_TYPES:
            data: Any = yaml.safe_load(content)
            return adapter.validate_python(data)
        return adapter.validate_json(content)
    except (ValidationError, yaml.YAMLError) as e:
        raise ConfigParseError(f"Failed to parse config from nacos: {content}: {e}") from e
