"""Configuration loader for the VBA documentation extractor.

Loads settings from configs/config.yaml and provides typed access
to all configuration sections via dataclasses.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "config.yaml"
_DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ParserConfig:
    """Configuration for locating and reading VBA source files."""

    extensions: list[str] = field(default_factory=lambda: [".bas", ".cls", ".frm"])
    exclude_patterns: list[str] = field(default_factory=list)
    encoding: str = "utf-8"


@dataclass
class OutputConfig:
    """Configuration for documentation output."""

    default_format: str = "json"
    output_dir: str = "docs/generated"
    indent: int = 2


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = _DEFAULT_LOG_FORMAT
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_parser_config(data: dict) -> ParserConfig:
    """Build a ParserConfig from a dictionary.

    Args:
        data: Dictionary with parser settings.

    Returns:
        A configured ParserConfig instance.
    """
    defaults = ParserConfig()
    return ParserConfig(
        extensions=data.get("extensions", defaults.extensions),
        exclude_patterns=data.get("exclude_patterns", []),
        encoding=data.get("encoding", defaults.encoding),
    )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            default path at configs/config.yaml.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return AppConfig()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    logger.info("Loaded configuration from %s", path)

    output_data = raw.get("output", {})
    output_config = OutputConfig(
        default_format=output_data.get("default_format", "json"),
        output_dir=output_data.get("output_dir", "docs/generated"),
        indent=output_data.get("indent", 2),
    )

    logging_data = raw.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        format=logging_data.get("format", _DEFAULT_LOG_FORMAT),
        file=logging_data.get("file"),
    )

    return AppConfig(
        parser=_build_parser_config(raw.get("parser", {})),
        output=output_config,
        logging=logging_config,
    )
