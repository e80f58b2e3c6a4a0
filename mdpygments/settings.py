import os
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from mdpygments.config import (
    DEFAULT_STYLE,
    Option,
    embed_css,
    formatter_options,
    style,
    without_autodetect,
)

logger = logging.getLogger("mdpygments.settings")

ENV_PREFIX = "MDPYGMENTS_"
DEFAULT_CONFIG_PATH = Path("mdpygments.yaml")


class RendererSettings(BaseModel):
    """
    User-facing renderer settings, loaded from YAML and the environment.

    Example mdpygments.yaml:

        style: friendly
        autodetect: false
        embed_css: true
        formatter_options:
          classprefix: "hl-"
    """
    style: str = Field(default=DEFAULT_STYLE, description="Pygments style name")
    autodetect: bool = Field(default=True, description="Guess languages of blocks without an info string")
    embed_css: bool = Field(default=False, description="Embed a <style> block at the start of each document")
    formatter_options: Dict[str, Any] = Field(default_factory=dict, description="Extra HtmlFormatter options")

    def to_options(self) -> List[Option]:
        options = [style(self.style)]
        if not self.autodetect:
            options.append(without_autodetect())
        if self.embed_css:
            options.append(embed_css())
        if self.formatter_options:
            options.append(formatter_options(**self.formatter_options))
        return options


def read_yaml(path: Path) -> Dict[str, Any]:
    """Settings mapping from a YAML file; empty when missing or malformed."""
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse settings file {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Settings file {path} does not hold a mapping, ignoring it.")
        return {}
    return data


def read_env(environ: Mapping[str, str]) -> Dict[str, str]:
    values = {}
    for field_name in ("style", "autodetect", "embed_css"):
        value = environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        if value is not None:
            values[field_name] = value
    return values


def valid_values(data: Dict[str, Any], source: str) -> Dict[str, Any]:
    """Drop the keys of ``data`` that fail validation, logging each one."""
    try:
        RendererSettings(**data)
    except ValidationError as e:
        invalid = {err["loc"][0] for err in e.errors() if err["loc"]}
        logger.warning(f"Ignoring invalid settings {sorted(invalid)} from {source}: {e}")
        return {k: v for k, v in data.items() if k not in invalid}
    return data


def load_settings(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> RendererSettings:
    """
    Load settings: YAML file first, then ``MDPYGMENTS_*`` environment overrides.

    Args:
        path: YAML file; defaults to $MDPYGMENTS_CONFIG or ./mdpygments.yaml
        environ: Environment mapping; defaults to os.environ

    Returns:
        RendererSettings; invalid values are dropped per source, so a bad
        environment value keeps the YAML (or default) value for that field
    """
    if environ is None:
        environ = os.environ
    if path is None:
        path = Path(environ.get(f"{ENV_PREFIX}CONFIG", DEFAULT_CONFIG_PATH))

    data = valid_values(read_yaml(Path(path)), str(path))
    data.update(valid_values(read_env(environ), "environment"))
    return RendererSettings(**data)
