# config.py
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from .constants import DEFAULT_CONFIG, NAMING_CONVENTIONS, logger
from .errors import ConfigurationError
from .filters import default_filters
from .models import PageObjectConfig, ValidationResult

KNOWN_PRIORITIES = ('role', 'testid', 'label', 'text', 'id', 'css')

ConfigInput = Union[Mapping[str, Any], PageObjectConfig, None]


def _as_mapping(user_config: ConfigInput) -> Dict[str, Any]:
    if user_config is None:
        return {}
    if isinstance(user_config, PageObjectConfig):
        return dict(vars(user_config))
    return dict(user_config)


def validate_config(user_config: ConfigInput) -> List[ValidationResult]:
    config = _as_mapping(user_config)
    results = []

    unknown = sorted(set(config) - set(DEFAULT_CONFIG))
    if unknown:
        results.append(ValidationResult(
            'error',
            f"unknown configuration keys: {', '.join(unknown)}",
            f"Use only: {', '.join(DEFAULT_CONFIG)}",
        ))

    max_text_length = config.get('max_text_length')
    if max_text_length is not None and (not isinstance(max_text_length, int) or max_text_length < 1):
        results.append(ValidationResult(
            'error',
            'max_text_length must be at least 1',
            'Set max_text_length to a value >= 1',
        ))

    priorities = config.get('selector_priorities')
    if priorities is not None:
        if len(priorities) == 0:
            results.append(ValidationResult(
                'error',
                'selector_priorities cannot be empty',
                'Provide at least one selector priority or use defaults',
            ))
        for priority in priorities:
            if priority not in KNOWN_PRIORITIES:
                results.append(ValidationResult('warning', f"unknown selector priority {priority!r}"))

    convention = config.get('naming_convention')
    if convention is not None and convention not in NAMING_CONVENTIONS:
        results.append(ValidationResult(
            'error',
            f"naming_convention must be one of {', '.join(NAMING_CONVENTIONS)}",
        ))

    return results


def merge_config(user_config: ConfigInput = None) -> PageObjectConfig:
    """Validate the caller's settings and lay them over DEFAULT_CONFIG.

    Raises ConfigurationError listing every error found. The built-in
    filter stages are appended after any caller-supplied ones.
    """
    supplied = _as_mapping(user_config)

    results = validate_config(supplied)
    for result in results:
        if result.level == 'warning':
            logger.warning(result.message)
    errors = [r.message for r in results if r.level == 'error']
    if errors:
        raise ConfigurationError(errors)

    merged = {key: supplied[key] if supplied.get(key) is not None else value
              for key, value in DEFAULT_CONFIG.items()}

    merged['selector_priorities'] = list(merged['selector_priorities'])
    merged['include_selectors'] = list(merged['include_selectors'])
    merged['exclude_selectors'] = list(merged['exclude_selectors'])
    merged['custom_element_types'] = dict(merged['custom_element_types'])
    merged['element_type_mappings'] = {k.lower(): v for k, v in merged['element_type_mappings'].items()}
    merged['element_filters'] = [
        *merged['element_filters'],
        *default_filters(
            include_hidden=merged['include_hidden_elements'],
            runtime_visibility=merged['enable_runtime_visibility_check'],
        ),
    ]
    return PageObjectConfig(**merged)


def config_value(user_config: ConfigInput, key: str) -> Any:
    """One setting as merge_config would resolve it, without re-merging."""
    value = _as_mapping(user_config).get(key)
    return DEFAULT_CONFIG[key] if value is None else value


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a configuration mapping from a YAML file."""
    with open(path, encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError([f"{path} must contain a mapping, got {type(data).__name__}"])
    return data


def serializable_config(user_config: ConfigInput) -> Dict[str, Any]:
    """The caller's configuration without filter objects, for YAML output."""
    config = _as_mapping(user_config)
    filters = config.pop('element_filters', None) or []
    if filters:
        config['element_filters'] = [stage.name for stage in filters]
    return config
