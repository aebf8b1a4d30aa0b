# selectors.py
import ast
from typing import Any, Mapping
from urllib.parse import urlparse

from .constants import (
    BROAD_SELECTORS,
    BUTTON_INPUT_TYPES,
    FORM_FIELD_TAGS,
    INTERACTIVE_SELECTORS,
    SOCIAL_DOMAINS,
    STRUCTURAL_TAGS,
)
from .errors import VisibilityCheckError
from .models import ElementSelector, PageObjectConfig
from .utils import escape_string, sanitize_key

# Page/Locator methods a generated expression may call
LOCATOR_METHODS = frozenset({
    'get_by_role',
    'get_by_label',
    'get_by_placeholder',
    'get_by_alt_text',
    'get_by_text',
    'get_by_test_id',
    'locator',
    'nth',
})


def build_selector_string(config: PageObjectConfig) -> str:
    """Combine the discovery selectors into one query scoped to the container."""
    container = config.container_selector

    if config.include_selectors:
        parts = list(config.include_selectors)
    else:
        parts = list(INTERACTIVE_SELECTORS if config.interactive_only else BROAD_SELECTORS)
        for selectors in config.custom_element_types.values():
            parts.extend(s for s in selectors if s not in parts)

    if config.exclude_selectors:
        excluded = ', '.join([*STRUCTURAL_TAGS, *config.exclude_selectors])
        parts = [f"{part}:not({excluded})" for part in parts]

    return ', '.join(f"{container} {part}" for part in parts)


def href_name(href: str) -> str:
    for domain, name in SOCIAL_DOMAINS:
        if domain in href:
            return name

    if href.startswith('mailto:'):
        return 'emailLink'
    if href.startswith('tel:'):
        return 'phoneLink'

    try:
        hostname = urlparse(href if href.startswith('http') else f"https://{href}").hostname
        if not hostname:
            raise ValueError(f"no hostname in {href!r}")
    except ValueError:
        bare = href
        for prefix in ('https://', 'http://'):
            if bare.startswith(prefix):
                bare = bare[len(prefix):]
                break
        # "/cart" parses as https:///cart, whose host is the first path segment
        bare = bare.lstrip('/')
        if bare.startswith('www.'):
            bare = bare[4:]
        label = bare.split('/')[0].split('.')[0]
        return f"{label}Link" if label else 'link'

    label = hostname.replace('www.', '', 1).split('.')[0]
    return f"{label}Link" if label else 'link'


def href_key(href: str, index: int) -> str:
    name = href_name(href)
    return f"link_{index}" if name == 'link' else name


def _is_button_like(tag_name: str, input_type: str) -> bool:
    return tag_name == 'button' or (tag_name == 'input' and input_type in BUTTON_INPUT_TYPES)


def synthesize_selector(tag_name: str, role: str, text_content: str, aria_label: str, placeholder: str,
                        attributes: Mapping[str, str], index: int, max_text_length: int = 100) -> ElementSelector:
    """Pick the most stable locator expression for one node.

    Branches are tried in a fixed order and the first applicable one wins;
    the positional ``nth`` locator is the guaranteed fallback. Expressions
    are Playwright Page calls, e.g. ``get_by_role('button', name='Submit')``.
    """
    input_type = (attributes.get('type') or '').lower()

    if role and (aria_label or text_content):
        accessible_name = aria_label or text_content
        return ElementSelector(
            f"get_by_role('{escape_string(role)}', name='{escape_string(accessible_name)}')",
            sanitize_key(accessible_name),
        )

    if tag_name in FORM_FIELD_TAGS:
        if aria_label:
            return ElementSelector(f"get_by_label('{escape_string(aria_label)}')", sanitize_key(aria_label))
        if placeholder:
            return ElementSelector(f"get_by_placeholder('{escape_string(placeholder)}')", sanitize_key(placeholder))

    if _is_button_like(tag_name, input_type):
        if text_content:
            return ElementSelector(
                f"get_by_role('button', name='{escape_string(text_content)}')",
                sanitize_key(text_content),
            )
        return ElementSelector("get_by_role('button')", f"button_{index}")

    if tag_name == 'a':
        if text_content:
            return ElementSelector(
                f"get_by_role('link', name='{escape_string(text_content)}')",
                sanitize_key(text_content),
            )
        href = attributes.get('href') or ''
        if href and href != '#':
            return ElementSelector(f"locator('a[href=\"{escape_string(href)}\"]')", href_key(href, index))
        return ElementSelector(f"locator('a').nth({index})", f"link_{index}")

    if tag_name == 'img':
        alt = attributes.get('alt')
        if alt:
            return ElementSelector(f"get_by_alt_text('{escape_string(alt)}')", sanitize_key(alt))
        return ElementSelector("get_by_role('img')", f"image_{index}")

    if text_content and 0 < len(text_content) < max_text_length:
        return ElementSelector(f"get_by_text('{escape_string(text_content)}')", sanitize_key(text_content))

    test_id = attributes.get('data-testid')
    if test_id:
        return ElementSelector(f"get_by_test_id('{escape_string(test_id)}')", sanitize_key(test_id))

    element_id = attributes.get('id')
    if element_id:
        return ElementSelector(f"locator('#{escape_string(element_id)}')", sanitize_key(element_id))

    name = attributes.get('name')
    if name:
        return ElementSelector(f"locator('[name=\"{escape_string(name)}\"]')", sanitize_key(name))

    return ElementSelector(f"locator('{escape_string(tag_name)}').nth({index})", f"{tag_name}_{index}")


def resolve_locator(page: Any, expression: str) -> Any:
    """Re-apply a generated locator expression to a live page.

    Only chains of LOCATOR_METHODS with literal arguments are accepted;
    anything else raises VisibilityCheckError.
    """
    try:
        tree = ast.parse(expression, mode='eval')
    except SyntaxError as e:
        raise VisibilityCheckError(f"Unparseable locator {expression!r}: {e}") from e
    return _apply_call(page, tree.body, expression)


def _apply_call(page: Any, node: ast.AST, expression: str) -> Any:
    if not isinstance(node, ast.Call):
        raise VisibilityCheckError(f"Unsupported locator {expression!r}")

    if isinstance(node.func, ast.Name):
        target, method = page, node.func.id
    elif isinstance(node.func, ast.Attribute):
        target, method = _apply_call(page, node.func.value, expression), node.func.attr
    else:
        raise VisibilityCheckError(f"Unsupported locator {expression!r}")

    if method not in LOCATOR_METHODS or any(kw.arg is None for kw in node.keywords):
        raise VisibilityCheckError(f"Unsupported call {method!r} in {expression!r}")

    try:
        args = [ast.literal_eval(arg) for arg in node.args]
        kwargs = {kw.arg: ast.literal_eval(kw.value) for kw in node.keywords}
    except ValueError as e:
        raise VisibilityCheckError(f"Non-literal argument in {expression!r}") from e

    return getattr(target, method)(*args, **kwargs)
