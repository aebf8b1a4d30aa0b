"""Generate Playwright page object classes from live web pages."""

from .classifier import classify
from .codegen import generate_page_object, generate_page_object_metadata, render_page_object
from .config import load_config_file, merge_config, validate_config
from .constants import DEFAULT_CONFIG, DEFAULT_ELEMENT_TYPES
from .errors import (
    ConfigurationError,
    ElementExtractionError,
    PageObjectError,
    PhaseError,
    PhaseTimeoutError,
    VisibilityCheckError,
)
from .extractor import extract_accessible_elements
from .filters import DuplicateElementFilter, HiddenElementFilter, MeaningfulContentFilter, VisibilityFilter
from .models import (
    AccessibleElement,
    ElementFilter,
    ElementSelector,
    ElementType,
    FilterKind,
    GenerationResult,
    PageObjectConfig,
    ValidationResult,
)
from .selectors import build_selector_string, synthesize_selector
from .utils import escape_string, sanitize_key, to_camel_case, uniquify_property_names

__all__ = [
    'AccessibleElement',
    'ConfigurationError',
    'DEFAULT_CONFIG',
    'DEFAULT_ELEMENT_TYPES',
    'DuplicateElementFilter',
    'ElementExtractionError',
    'ElementFilter',
    'ElementSelector',
    'ElementType',
    'FilterKind',
    'GenerationResult',
    'HiddenElementFilter',
    'MeaningfulContentFilter',
    'PageObjectConfig',
    'PageObjectError',
    'PhaseError',
    'PhaseTimeoutError',
    'ValidationResult',
    'VisibilityCheckError',
    'VisibilityFilter',
    'build_selector_string',
    'classify',
    'escape_string',
    'extract_accessible_elements',
    'generate_page_object',
    'generate_page_object_metadata',
    'load_config_file',
    'merge_config',
    'render_page_object',
    'sanitize_key',
    'synthesize_selector',
    'to_camel_case',
    'uniquify_property_names',
    'validate_config',
]
