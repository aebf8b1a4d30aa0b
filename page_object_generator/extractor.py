# extractor.py
import asyncio
import logging
from typing import Any, List, Optional

from playwright.async_api import Locator, Page

from .classifier import apply_type_mapping, classify
from .config import ConfigInput, merge_config
from .constants import (
    ATTRIBUTES_SCRIPT,
    BATCH_SIZE,
    ELEMENT_SELECTION_TIMEOUT_MS,
    ELEMENT_TIMEOUT_MS,
    EXTRACTION_TIMEOUT_MS,
    PAGE_LOAD_TIMEOUT_MS,
    TAG_NAME_SCRIPT,
)
from .errors import ElementExtractionError, PageObjectError, PhaseError
from .filters import apply_filters
from .models import AccessibleElement, ExtractionPhase, PageObjectConfig
from .naming import generate_property_name
from .selectors import build_selector_string, synthesize_selector
from .utils import execute_with_timeout, gather_in_batches, uniquify_property_names

logger = logging.getLogger(__name__)


async def extract_accessible_elements(page: Page, config: ConfigInput = None,
                                      timeout_ms: int = EXTRACTION_TIMEOUT_MS) -> List[AccessibleElement]:
    """Extract, filter and name the accessible elements of ``page``.

    The configuration is validated before the page is touched. Failures of
    single elements only shrink the result; a failed DOM query or the
    overall ``timeout_ms`` aborts the call with a PhaseError.
    """
    logger.debug(f"Phase: {ExtractionPhase.VALIDATING.value}")
    try:
        merged = merge_config(config)
    except PageObjectError:
        logger.debug(f"Phase: {ExtractionPhase.FAILED.value}")
        raise

    try:
        elements = await execute_with_timeout(lambda: _extract(page, merged), timeout_ms, 'Element extraction')
    except PhaseError as e:
        logger.debug(f"Phase: {ExtractionPhase.FAILED.value} ({e})")
        raise

    logger.debug(f"Phase: {ExtractionPhase.DONE.value}")
    return elements


async def _extract(page: Page, config: PageObjectConfig) -> List[AccessibleElement]:
    query = build_selector_string(config)

    try:
        await execute_with_timeout(lambda: page.wait_for_load_state('domcontentloaded'),
                                   PAGE_LOAD_TIMEOUT_MS, 'Page load')
    except PhaseError as e:
        logger.warning(f"{e}, continuing with element extraction")

    logger.debug(f"Phase: {ExtractionPhase.QUERYING_DOM.value} {query}")
    handles = await execute_with_timeout(lambda: page.locator(query).all(),
                                         ELEMENT_SELECTION_TIMEOUT_MS, 'Element selection')

    logger.debug(f"Phase: {ExtractionPhase.EXTRACTING_BATCHES.value} ({len(handles)} nodes)")
    elements = await gather_in_batches(
        handles,
        lambda handle, index: _extract_one(handle, index, config),
        BATCH_SIZE,
    )

    logger.debug(f"Phase: {ExtractionPhase.FILTERING.value} ({len(elements)} elements)")
    elements = await apply_filters(elements, config.element_filters, page)

    logger.debug(f"Phase: {ExtractionPhase.UNIQUIFYING.value} ({len(elements)} elements)")
    elements = uniquify_property_names(elements)

    logger.info(f"Extracted {len(elements)} accessible elements from {len(handles)} nodes")
    return elements


async def _extract_one(handle: Locator, index: int, config: PageObjectConfig) -> Optional[AccessibleElement]:
    try:
        return await asyncio.wait_for(extract_element_info(handle, index, config), timeout=ELEMENT_TIMEOUT_MS / 1000)
    except asyncio.TimeoutError as e:
        raise ElementExtractionError(index, f"timeout after {ELEMENT_TIMEOUT_MS}ms") from e
    except Exception as e:
        raise ElementExtractionError(index, str(e) or type(e).__name__) from e


async def _attribute(element: Any, name: str) -> str:
    return await element.get_attribute(name) or ''


async def extract_element_info(element: Locator, index: int, config: PageObjectConfig) -> AccessibleElement:
    tag_name = ((await element.evaluate(TAG_NAME_SCRIPT)) or '').lower() or 'unknown'
    role = await _attribute(element, 'role')
    text_content = ((await element.text_content()) or '').strip()
    element_id = await _attribute(element, 'id')
    class_name = await _attribute(element, 'class')
    name_attr = await _attribute(element, 'name')
    placeholder = await _attribute(element, 'placeholder')
    aria_label = await _attribute(element, 'aria-label')
    aria_labelledby = await _attribute(element, 'aria-labelledby')
    attributes = dict(await element.evaluate(ATTRIBUTES_SCRIPT) or {})

    element_type = classify(tag_name, role, attributes.get('type', ''))
    element_type = apply_type_mapping(element_type, tag_name, role, config.element_type_mappings)

    selector = synthesize_selector(tag_name, role, text_content, aria_label, placeholder,
                                   attributes, index, config.max_text_length)
    property_name = generate_property_name(element_type, tag_name, text_content, aria_label, placeholder,
                                           name_attr, element_id, attributes, index, config.naming_convention)

    return AccessibleElement(
        type=element_type,
        selector=selector,
        tag_name=tag_name,
        text_content=text_content,
        id=element_id,
        class_name=class_name,
        role=role,
        name_attr=name_attr,
        placeholder=placeholder,
        aria_label=aria_label,
        aria_labelledby=aria_labelledby,
        attributes=attributes,
        name=property_name,
        property_name=property_name,
    )
