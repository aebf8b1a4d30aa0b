# naming.py
import keyword
from typing import Mapping

from .constants import FORM_FIELD_TAGS, MAX_FALLBACK_VALUE_LENGTH, MAX_NAME_SOURCE_LENGTH, RESERVED_PROPERTY_NAMES
from .selectors import href_name
from .utils import convert_case, sanitize_key


def _short(value: str, limit: int) -> bool:
    return bool(value) and 0 < len(value) < limit


def fallback_name(element_type: str, tag_name: str, attributes: Mapping[str, str], index: int) -> str:
    if tag_name == 'a':
        href = attributes.get('href')
        if href:
            return href_name(href)

    elif tag_name == 'img':
        alt = attributes.get('alt')
        src = attributes.get('src')
        if alt:
            return alt
        if src:
            stem = src.split('/')[-1].split('.')[0]
            return f"{tag_name}_{stem}" if stem else f"{element_type}_{index}"

    elif tag_name in FORM_FIELD_TAGS:
        input_type = attributes.get('type')
        value = attributes.get('value') or ''
        if input_type and input_type != 'text':
            return f"{input_type}Input"
        if _short(value, MAX_FALLBACK_VALUE_LENGTH):
            return f"{tag_name}_{sanitize_key(value)}"

    elif tag_name == 'button':
        button_type = attributes.get('type')
        value = attributes.get('value') or ''
        if _short(value, MAX_FALLBACK_VALUE_LENGTH):
            return value
        if button_type and button_type != 'button':
            return f"{button_type}Button"

    return f"{element_type}_{index}"


def raw_property_name(element_type: str, tag_name: str, text_content: str, aria_label: str, placeholder: str,
                      name_attr: str, element_id: str, attributes: Mapping[str, str], index: int) -> str:
    """First usable naming source: aria-label, name, placeholder, text, id, fallback."""
    if _short(aria_label, MAX_NAME_SOURCE_LENGTH):
        return aria_label
    if name_attr:
        return name_attr
    if placeholder:
        return placeholder
    if _short(text_content, MAX_NAME_SOURCE_LENGTH):
        return text_content
    if element_id:
        return element_id
    return fallback_name(element_type, tag_name, attributes, index)


def generate_property_name(element_type: str, tag_name: str, text_content: str, aria_label: str, placeholder: str,
                           name_attr: str, element_id: str, attributes: Mapping[str, str], index: int,
                           naming_convention: str = 'camelCase') -> str:
    raw = raw_property_name(element_type, tag_name, text_content, aria_label, placeholder,
                            name_attr, element_id, attributes, index)
    return avoid_reserved(convert_case(raw, naming_convention) or f"element{index}")


def avoid_reserved(name: str) -> str:
    """Suffix names that would be a Python keyword or shadow a generated member."""
    attribute = name.replace('-', '_')
    if keyword.iskeyword(attribute) or attribute in RESERVED_PROPERTY_NAMES:
        return f"{name}_"
    return name
