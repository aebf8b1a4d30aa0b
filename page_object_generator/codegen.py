# codegen.py
import logging
from typing import List

from playwright.async_api import Page

from .config import ConfigInput, config_value
from .constants import NAVIGATION_TIMEOUT_MS
from .extractor import extract_accessible_elements
from .models import AccessibleElement, GenerationResult
from .utils import escape_string, group_by

logger = logging.getLogger(__name__)

INDENT = '    '


def attribute_name(property_name: str) -> str:
    """Python attribute for a property name; kebab-case names use underscores."""
    return property_name if property_name.isidentifier() else property_name.replace('-', '_')


def _helper_methods(page_url: str) -> List[str]:
    return [
        f"{INDENT}async def goto(self, url: Optional[str] = None, timeout: float = {NAVIGATION_TIMEOUT_MS}):",
        f'{INDENT * 2}"""Navigate to the page URL (or ``url``) and wait for the network to settle."""',
        f"{INDENT * 2}await self.page.goto(url or '{escape_string(page_url)}')",
        f"{INDENT * 2}await self.page.wait_for_load_state('networkidle', timeout=timeout)",
    ]


def render_page_object(elements: List[AccessibleElement], class_name: str, page_url: str,
                       include_helpers: bool = True) -> str:
    """Render a Python page object class from an extracted element collection.

    Fields are grouped by element type in the order the types first appear;
    each element contributes one field declaration and one assignment in
    ``__init__``.
    """
    lines = []
    if include_helpers:
        lines += ['from typing import Optional', '']
    lines += [
        'from playwright.async_api import Locator, Page',
        '',
        '',
        f'class {class_name}:',
        f'{INDENT}"""Auto-generated page object for {class_name}."""',
        '',
    ]

    for element_type, typed in group_by(elements, lambda el: el.type).items():
        lines.append(f"{INDENT}# {element_type[:1].upper()}{element_type[1:]} elements")
        for el in typed:
            lines.append(f"{INDENT}{attribute_name(el.property_name)}: Locator  "
                         f"# Locator for {el.name or 'unnamed'} {el.type}")
        lines.append('')

    lines += [
        f'{INDENT}def __init__(self, page: Page):',
        f'{INDENT * 2}self.page = page',
    ]
    for el in elements:
        lines.append(f"{INDENT * 2}self.{attribute_name(el.property_name)} = page.{el.selector.expression}")

    if include_helpers:
        lines.append('')
        lines += _helper_methods(page_url)

    return '\n'.join(lines) + '\n'


def count_element_types(elements: List[AccessibleElement]):
    return {element_type: len(group) for element_type, group in group_by(elements, lambda el: el.type).items()}


async def generate_page_object(page: Page, class_name: str, config: ConfigInput = None) -> str:
    return (await generate_page_object_metadata(page, class_name, config)).page_object_code


async def generate_page_object_metadata(page: Page, class_name: str, config: ConfigInput = None) -> GenerationResult:
    elements = await extract_accessible_elements(page, config)
    include_helpers = config_value(config, 'include_helpers')
    code = render_page_object(elements, class_name, page.url, include_helpers)
    element_types = count_element_types(elements)

    logger.info(f"Generated page object for: {class_name}")
    logger.info(f"Extracted {len(elements)} accessible elements")
    logger.info(f"Page object code length: {len(code)} characters")
    for element_type, count in element_types.items():
        logger.info(f"  {element_type:<15} {count}")

    return GenerationResult(page_object_code=code, elements=elements, element_types=element_types)
