# models.py
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from .constants import DEFAULT_CONFIG


class ElementType(Enum):
    BUTTON = 'button'
    LINK = 'link'
    INPUT = 'input'
    CHECKBOX = 'checkbox'
    RADIO = 'radio'
    FILE = 'file'
    RANGE = 'range'
    COLOR = 'color'
    DATE = 'date'
    TIME = 'time'
    DATETIME_LOCAL = 'datetime-local'
    MONTH = 'month'
    WEEK = 'week'
    PASSWORD = 'password'
    EMAIL = 'email'
    TEL = 'tel'
    URL = 'url'
    SELECT = 'select'
    TEXTAREA = 'textarea'
    IMAGE = 'image'
    HEADING = 'heading'
    LABEL = 'label'
    ALERT = 'alert'
    DIALOG = 'dialog'
    TAB = 'tab'
    NAVIGATION = 'navigation'
    MAIN = 'main'
    ASIDE = 'aside'
    HEADER = 'header'
    FOOTER = 'footer'
    SECTION = 'section'
    TEXT = 'text'
    GENERIC = 'generic'


class FilterKind(Enum):
    DUPLICATE = 'duplicate'
    HIDDEN = 'hidden'
    MEANINGFUL_CONTENT = 'meaningful_content'
    VISIBILITY = 'visibility'
    CUSTOM = 'custom'


class ExtractionPhase(Enum):
    IDLE = 'Idle'
    VALIDATING = 'Validating'
    QUERYING_DOM = 'QueryingDOM'
    EXTRACTING_BATCHES = 'ExtractingBatches'
    FILTERING = 'Filtering'
    UNIQUIFYING = 'Uniquifying'
    DONE = 'Done'
    FAILED = 'Failed'


@dataclass(frozen=True)
class ElementSelector:
    expression: str
    key: str


@dataclass(frozen=True)
class AccessibleElement:
    type: str
    selector: ElementSelector
    tag_name: str = ''
    text_content: str = ''
    id: str = ''
    class_name: str = ''
    role: str = ''
    name_attr: str = ''
    placeholder: str = ''
    aria_label: str = ''
    aria_labelledby: str = ''
    attributes: Dict[str, str] = field(default_factory=dict)
    name: str = ''
    property_name: str = ''

    @property
    def key(self) -> str:
        return self.selector.key

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@runtime_checkable
class ElementFilter(Protocol):
    """One stage of the filter chain.

    Stages may also define ``async def filter_async(elements, page)``; the
    chain awaits it after every synchronous stage has run.
    """
    name: str
    description: str
    enabled: bool
    kind: FilterKind

    def filter(self, elements: List[AccessibleElement]) -> List[AccessibleElement]:
        ...


@dataclass
class PageObjectConfig:
    container_selector: str = 'body'
    interactive_only: bool = True
    selector_priorities: List[str] = field(default_factory=lambda: list(DEFAULT_CONFIG['selector_priorities']))
    max_text_length: int = 100
    naming_convention: str = 'camelCase'
    include_hidden_elements: bool = False
    enable_runtime_visibility_check: bool = False
    custom_element_types: Dict[str, List[str]] = field(default_factory=dict)
    element_type_mappings: Dict[str, str] = field(default_factory=dict)
    include_selectors: List[str] = field(default_factory=list)
    exclude_selectors: List[str] = field(default_factory=list)
    element_filters: List[Any] = field(default_factory=list)
    include_helpers: bool = True


@dataclass
class ValidationResult:
    level: str  # error, warning, info
    message: str
    suggestion: Optional[str] = None


@dataclass
class GenerationResult:
    page_object_code: str
    elements: List[AccessibleElement]
    element_types: Dict[str, int]
