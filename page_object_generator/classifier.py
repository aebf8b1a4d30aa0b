# classifier.py
from typing import Mapping, Optional

from .constants import (
    ALERT_ROLES,
    BLOCK_CONTENT_TAGS,
    BUTTON_INPUT_TYPES,
    DIALOG_ROLES,
    HEADING_TAGS,
    SPECIAL_INPUT_TYPES,
)
from .models import ElementType


def classify(tag_name: str, role: str, type_attribute: str) -> str:
    """Map a node's tag/role/type triad to an element type tag.

    Never raises: unknown tags fall back to the tag name itself, or
    ``generic`` when there is no tag name at all.
    """
    tag = (tag_name or '').lower()
    role = (role or '').lower()
    input_type = (type_attribute or '').lower()

    if tag == 'button' or role == 'button' or (tag == 'input' and input_type in BUTTON_INPUT_TYPES):
        return ElementType.BUTTON.value

    if tag == 'a' or role == 'link':
        return ElementType.LINK.value

    if tag == 'input':
        if input_type in SPECIAL_INPUT_TYPES:
            return input_type
        return ElementType.INPUT.value

    if tag == 'select' or role == 'combobox':
        return ElementType.SELECT.value

    if tag == 'textarea':
        return ElementType.TEXTAREA.value

    if tag == 'img' or role == 'img':
        return ElementType.IMAGE.value

    if tag in HEADING_TAGS:
        return ElementType.HEADING.value

    # role 'link' never reaches this point, the link rule above claims it
    if tag == 'label' or role == 'link':
        return ElementType.LABEL.value

    if tag in ('div', 'span'):
        if role in ALERT_ROLES:
            return ElementType.ALERT.value
        if role in DIALOG_ROLES:
            return ElementType.DIALOG.value
        if role == 'tab':
            return ElementType.TAB.value

    if tag in BLOCK_CONTENT_TAGS:
        return ElementType.TEXT.value

    return tag or ElementType.GENERIC.value


def apply_type_mapping(element_type: str, tag_name: str, role: str, mappings: Optional[Mapping[str, str]]) -> str:
    """Override a classified type from ``element_type_mappings``.

    Keys are tag names (``"my-widget"``) or roles prefixed with ``role:``;
    a role mapping wins over a tag mapping.
    """
    if not mappings:
        return element_type
    role = (role or '').lower()
    if role and f"role:{role}" in mappings:
        return mappings[f"role:{role}"]
    return mappings.get((tag_name or '').lower(), element_type)
