# filters.py
import re
from typing import Any, List

from .constants import (
    MAX_DIV_TEXT_LENGTH,
    MAX_MEANINGFUL_TEXT_LENGTH,
    MAX_NON_INTERACTIVE_TEXT_LENGTH,
    MAX_PLAIN_TEXT_LENGTH,
    MAX_SPECIAL_CHAR_RATIO,
    STRUCTURAL_TAGS,
    logger,
)
from .errors import VisibilityCheckError
from .models import AccessibleElement, FilterKind
from .selectors import resolve_locator
from .utils import group_by

HIDDEN_STYLES = ('display: none', 'visibility: hidden', 'opacity: 0')
HIDDEN_CLASSES = ('hidden', 'invisible', 'sr-only', 'visually-hidden')
ZERO_SIZE_STYLES = ('width: 0', 'height: 0')
CODE_TOKENS = ('function(', 'var ', 'document.', 'window.')
INTERACTIVE_TYPES = ('button', 'link', 'input', 'select', 'textarea', 'tab')
INTERACTIVE_ATTRIBUTES = ('onclick', 'onfocus', 'onblur', 'onmouseover', 'onmouseenter', 'tabindex')
INTERACTIVE_ROLES = ('button', 'link', 'tab', 'menuitem')

_SPECIAL_CHAR = re.compile(r'[^a-zA-Z0-9\s]')
_CAMEL_PAIR = re.compile(r'[A-Z][a-z]')


class DuplicateElementFilter:
    name = 'DuplicateElementFilter'
    description = 'Removes duplicate elements with the same selector'
    kind = FilterKind.DUPLICATE

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def filter(self, elements: List[AccessibleElement]) -> List[AccessibleElement]:
        grouped = group_by(elements, lambda el: el.selector.expression)
        return [group[0] for group in grouped.values()]


class HiddenElementFilter:
    name = 'HiddenElementFilter'
    description = 'Removes hidden elements unless explicitly included'
    kind = FilterKind.HIDDEN

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def filter(self, elements: List[AccessibleElement]) -> List[AccessibleElement]:
        return [element for element in elements if not self.is_hidden(element)]

    @staticmethod
    def is_hidden(element: AccessibleElement) -> bool:
        attributes = element.attributes
        style = attributes.get('style') or ''

        if 'hidden' in attributes or attributes.get('aria-hidden') == 'true':
            return True
        if any(marker in style for marker in HIDDEN_STYLES):
            return True
        if any(marker in (element.class_name or '') for marker in HIDDEN_CLASSES):
            return True
        if attributes.get('width') == '0' or attributes.get('height') == '0':
            return True
        if any(marker in style for marker in ZERO_SIZE_STYLES):
            return True
        return element.tag_name in STRUCTURAL_TAGS


class MeaningfulContentFilter:
    name = 'MeaningfulContentFilter'
    description = 'Removes elements with no meaningful content'
    kind = FilterKind.MEANINGFUL_CONTENT

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def filter(self, elements: List[AccessibleElement]) -> List[AccessibleElement]:
        return [element for element in elements if self.is_meaningful(element)]

    def is_meaningful(self, element: AccessibleElement) -> bool:
        text = element.text_content

        if not (text or element.aria_label or element.placeholder or element.id or element.name_attr
                or has_target(element)):
            return False

        if element.tag_name == 'div' and element.type == 'text' and len(text) > MAX_DIV_TEXT_LENGTH:
            return False

        if text and not is_meaningful_text(text):
            return False

        # bare positional fallback with nothing to anchor it
        if '.nth(' in element.selector.expression and not (element.id or element.aria_label or text):
            return False

        if text and len(text) > MAX_NON_INTERACTIVE_TEXT_LENGTH and not is_interactive(element):
            return False

        if element.type == 'text' and not has_interactive_attributes(element) and len(text) > MAX_PLAIN_TEXT_LENGTH:
            return False

        return True


class VisibilityFilter:
    """Runtime check: keeps only elements whose locator is visible right now.

    An element whose locator cannot be resolved or checked is kept.
    """
    name = 'VisibilityFilter'
    description = 'Removes elements that are not visible on the page (runtime check)'
    kind = FilterKind.VISIBILITY

    def __init__(self, enabled: bool = False):
        self.enabled = enabled

    def filter(self, elements: List[AccessibleElement]) -> List[AccessibleElement]:
        return elements

    async def filter_async(self, elements: List[AccessibleElement], page: Any) -> List[AccessibleElement]:
        if not self.enabled:
            return elements

        visible = []
        for element in elements:
            try:
                if await self._is_visible(element, page):
                    visible.append(element)
            except VisibilityCheckError as e:
                logger.debug(f"Keeping {element.property_name}: {e}")
                visible.append(element)
        return visible

    @staticmethod
    async def _is_visible(element: AccessibleElement, page: Any) -> bool:
        try:
            locator = resolve_locator(page, element.selector.expression)
            return await locator.is_visible()
        except VisibilityCheckError:
            raise
        except Exception as e:
            raise VisibilityCheckError(f"{element.selector.expression}: {e}") from e


def is_meaningful_text(text: str) -> bool:
    trimmed = text.strip()

    if len(trimmed) < 2:
        return False
    if '{' in trimmed and '}' in trimmed:
        return False
    if ';' in trimmed and ':' in trimmed:
        return False
    if trimmed.startswith(('.', '#')):
        return False
    if any(token in trimmed for token in CODE_TOKENS):
        return False
    if len(trimmed) > MAX_MEANINGFUL_TEXT_LENGTH:
        return False
    if len(trimmed) > MAX_PLAIN_TEXT_LENGTH and ' ' not in trimmed and _CAMEL_PAIR.search(trimmed):
        return False

    special_ratio = len(_SPECIAL_CHAR.findall(trimmed)) / len(trimmed)
    return special_ratio <= MAX_SPECIAL_CHAR_RATIO


def has_target(element: AccessibleElement) -> bool:
    """Icon links carry no text but still point somewhere worth naming."""
    href = element.attributes.get('href') or ''
    return element.tag_name == 'a' and href not in ('', '#')


def has_interactive_attributes(element: AccessibleElement) -> bool:
    attributes = element.attributes
    if any(attributes.get(attr) for attr in INTERACTIVE_ATTRIBUTES):
        return True
    return attributes.get('role') in INTERACTIVE_ROLES


def is_interactive(element: AccessibleElement) -> bool:
    return element.type in INTERACTIVE_TYPES or has_interactive_attributes(element)


def default_filters(include_hidden: bool = False, runtime_visibility: bool = False) -> list:
    """Built-in stages in chain order."""
    return [
        DuplicateElementFilter(),
        HiddenElementFilter(enabled=not include_hidden),
        MeaningfulContentFilter(),
        VisibilityFilter(enabled=runtime_visibility),
    ]


async def apply_filters(elements: List[AccessibleElement], filters: list, page: Any) -> List[AccessibleElement]:
    """Run every enabled sync stage, then every enabled async stage, in order."""
    for stage in filters:
        if stage.enabled:
            before = len(elements)
            elements = stage.filter(elements)
            logger.debug(f"{stage.name}: {before} -> {len(elements)}")

    for stage in filters:
        filter_async = getattr(stage, 'filter_async', None)
        if stage.enabled and filter_async is not None:
            before = len(elements)
            elements = await filter_async(elements, page)
            logger.debug(f"{stage.name} (async): {before} -> {len(elements)}")

    return elements
