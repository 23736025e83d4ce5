"""Configuration loader with YAML support and environment variable substitution."""

import copy
import os
import re
from typing import Any, Dict, Optional

import yaml


DEFAULT_CONFIG: Dict[str, Any] = {
    'handbook': {
        'team': '',
        'name': 'handbook',
        'subdomain': 'make'
    },
    'export': {
        'output_directory': 'en/',
        'regenerate': False,
        'report_path': None
    },
    'advanced': {
        'request_timeout': 30,
        'per_page': 100,
        'verify_ssl': True
    },
    'logging': {
        'level': None,
        'file': None
    }
}

# WordPress caps per_page at 100
MAX_PER_PAGE = 100


class ConfigLoader:
    """Handles loading, defaulting and validation of configuration."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*)\}')

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from YAML file with environment variable substitution.

        Without a path, the built-in defaults are returned.

        Args:
            config_path: Optional path to YAML configuration file

        Returns:
            Configuration dictionary with defaults applied

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML parsing fails
        """
        if not config_path:
            return cls.apply_defaults({})

        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a dictionary")

        config_data = cls._substitute_env_vars_recursive(config_data)

        return cls.apply_defaults(config_data)

    @classmethod
    def apply_defaults(cls, config: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of config with missing sections and keys filled from defaults."""
        merged = copy.deepcopy(DEFAULT_CONFIG)
        for section, values in config.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(copy.deepcopy(values))
            else:
                merged[section] = copy.deepcopy(values)
        return merged

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> None:
        """
        Validate configuration values.

        Args:
            config: Configuration dictionary to validate

        Raises:
            ValueError: If validation fails
        """
        for field in ('handbook.team', 'handbook.name', 'handbook.subdomain', 'export.output_directory'):
            value = get_nested(config, field)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{field} must be a string")
            if isinstance(value, str) and '${' in value:
                cls._raise_unsubstituted(field, value)

        if not get_nested(config, 'handbook.name'):
            raise ValueError("Missing required configuration: handbook.name")

        output_dir = get_nested(config, 'export.output_directory')
        if not output_dir:
            raise ValueError("Missing required configuration: export.output_directory")
        if os.path.exists(output_dir) and not os.path.isdir(output_dir):
            raise ValueError(f"export.output_directory '{output_dir}' is not a directory")

        if not isinstance(get_nested(config, 'export.regenerate', False), bool):
            raise ValueError("export.regenerate must be a boolean")

        timeout = get_nested(config, 'advanced.request_timeout', 30)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ValueError("advanced.request_timeout must be a positive number")

        per_page = get_nested(config, 'advanced.per_page', MAX_PER_PAGE)
        if isinstance(per_page, bool) or not isinstance(per_page, int) or not 1 <= per_page <= MAX_PER_PAGE:
            raise ValueError(f"advanced.per_page must be an integer between 1 and {MAX_PER_PAGE}")

        if not isinstance(get_nested(config, 'advanced.verify_ssl', True), bool):
            raise ValueError("advanced.verify_ssl must be a boolean")

        level = get_nested(config, 'logging.level')
        if level and str(level).upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid logging.level '{level}'")

    @classmethod
    def merge_with_args(cls, config: Dict[str, Any], args) -> Dict[str, Any]:
        """
        Merge configuration with CLI arguments.
        CLI arguments take precedence over config file values.

        Args:
            config: Base configuration dictionary
            args: CLI arguments with attributes matching config keys

        Returns:
            Merged configuration dictionary
        """
        merged = cls.apply_defaults(config)

        if getattr(args, 'team', None):
            merged['handbook']['team'] = args.team

        if getattr(args, 'handbook', None):
            merged['handbook']['name'] = args.handbook

        if getattr(args, 'sub_domain', None):
            merged['handbook']['subdomain'] = args.sub_domain

        if getattr(args, 'output_dir', None):
            merged['export']['output_directory'] = args.output_dir

        if getattr(args, 'regenerate', False):
            merged['export']['regenerate'] = True

        if getattr(args, 'report', None):
            merged['export']['report_path'] = args.report

        if getattr(args, 'log_file', None):
            merged['logging']['file'] = args.log_file

        return merged

    @classmethod
    def _substitute_env_vars_recursive(cls, data: Any) -> Any:
        """Recursively substitute environment variables in data structure."""
        if isinstance(data, dict):
            return {key: cls._substitute_env_vars_recursive(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [cls._substitute_env_vars_recursive(item) for item in data]
        elif isinstance(data, str):
            return cls._substitute_env_vars(data)
        else:
            return data

    @classmethod
    def _substitute_env_vars(cls, value: str) -> str:
        """Substitute environment variables in a string value."""
        def replace_match(match):
            env_value = os.getenv(match.group(1))
            return env_value if env_value is not None else match.group(0)

        return cls.ENV_VAR_PATTERN.sub(replace_match, value)

    @classmethod
    def _raise_unsubstituted(cls, field: str, value: str) -> None:
        match = cls.ENV_VAR_PATTERN.search(value)
        var_name = match.group(1) if match else value
        raise ValueError(
            f"Configuration field '{field}' contains unsubstituted environment variable: {value}. "
            f"Please set the {var_name} environment variable or provide a value in config file."
        )


def get_nested(config: dict, path: str, default: Any = None) -> Any:
    """Safely retrieve nested configuration values using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "handbook.team")
        default: Default value if path doesn't exist

    Returns:
        Value at the nested path or default
    """
    keys = path.split('.')
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


def normalize_output_directory(output_dir: Optional[str]) -> str:
    """Return the output directory with exactly one trailing slash ('en/' when unset)."""
    if not output_dir:
        return DEFAULT_CONFIG['export']['output_directory']
    return output_dir.rstrip('/') + '/'


__all__ = ['ConfigLoader', 'DEFAULT_CONFIG', 'MAX_PER_PAGE', 'get_nested', 'normalize_output_directory']
