# constants.py
import logging

logger = logging.getLogger(__name__)

# Defaults merged under every caller configuration
DEFAULT_CONFIG = {
    'container_selector': 'body',
    'include_helpers': True,
    'interactive_only': True,
    'selector_priorities': ['role', 'testid', 'label', 'text', 'id', 'css'],
    'max_text_length': 100,
    'include_hidden_elements': False,
    'naming_convention': 'camelCase',
    'enable_runtime_visibility_check': False,
    'custom_element_types': {},
    'element_type_mappings': {},
    'include_selectors': [],
    'exclude_selectors': [],
    'element_filters': [],
}

NAMING_CONVENTIONS = ('camelCase', 'snake_case', 'kebab-case')

# Members every generated page object defines itself
RESERVED_PROPERTY_NAMES = ('page', 'goto')

DEFAULT_ELEMENT_TYPES = {
    'button': [
        'button',
        'input[type="button"]',
        'input[type="submit"]',
        'input[type="reset"]',
        '[role="button"]',
    ],
    'link': ['a', '[role="link"]'],
    'input': [
        'input[type="text"]',
        'input[type="email"]',
        'input[type="password"]',
        'input[type="number"]',
        'input[type="tel"]',
        'input[type="url"]',
        'input[type="search"]',
    ],
    'checkbox': ['input[type="checkbox"]', '[role="checkbox"]'],
    'radio': ['input[type="radio"]', '[role="radio"]'],
    'select': ['select', '[role="combobox"]', '[role="listbox"]'],
    'textarea': ['textarea'],
    'image': ['img', '[role="img"]'],
    'heading': ['h1', 'h2', 'h3', 'h4', 'h5', 'h6', '[role="heading"]'],
    'label': ['label', '[role="label"]'],
    'alert': ['[role="alert"]', '[role="status"]', '[role="alertdialog"]'],
    'dialog': ['[role="dialog"]', '[role="modal"]'],
    'tab': ['[role="tab"]', '[role="tabpanel"]'],
    'navigation': ['nav', '[role="navigation"]'],
    'main': ['main', '[role="main"]'],
    'aside': ['aside', '[role="complementary"]'],
    'header': ['header', '[role="banner"]'],
    'footer': ['footer', '[role="contentinfo"]'],
    'section': ['section', 'article'],
    'text': ['p', 'span', 'div'],
}

# Discovery queries
INTERACTIVE_SELECTORS = [
    'button',
    'a',
    'input',
    'select',
    'textarea',
    '[role="button"]',
    '[role="link"]',
    '[role="tab"]',
    '[role="menuitem"]',
    '[role="combobox"]',
    '[role="listbox"]',
    '[role="checkbox"]',
    '[role="radio"]',
    '[onclick]',
    '[onfocus]',
    '[onblur]',
    '[tabindex]',
    '[data-testid]',
    'label',
]

BROAD_SELECTORS = [
    '[role]',
    'button',
    'a',
    'input',
    'select',
    'textarea',
    'img',
    'h1',
    'h2',
    'h3',
    'h4',
    'h5',
    'h6',
    'label',
    'p',
    'span',
    'div',
    'section',
    'article',
    'main',
    'aside',
    'header',
    'footer',
    'nav',
]

STRUCTURAL_TAGS = ('script', 'style', 'noscript', 'meta', 'link', 'title', 'head')

# Classifier tables
BUTTON_INPUT_TYPES = ('button', 'submit', 'reset')
SPECIAL_INPUT_TYPES = (
    'checkbox', 'radio', 'file', 'range', 'color', 'date', 'time',
    'datetime-local', 'month', 'week', 'password', 'email', 'tel', 'url',
)
FORM_FIELD_TAGS = ('input', 'select', 'textarea')
HEADING_TAGS = ('h1', 'h2', 'h3', 'h4', 'h5', 'h6')
ALERT_ROLES = ('alert', 'status', 'alertdialog')
DIALOG_ROLES = ('dialog', 'modal')
BLOCK_CONTENT_TAGS = (
    'p', 'span', 'div', 'section', 'article', 'main', 'aside', 'header',
    'footer', 'nav',
)

# Href naming, checked in order
SOCIAL_DOMAINS = [
    ('instagram.com', 'instagram'),
    ('linkedin.com', 'linkedin'),
    ('facebook.com', 'facebook'),
    ('twitter.com', 'twitter'),
    ('x.com', 'twitter'),
    ('youtube.com', 'youtube'),
    ('tiktok.com', 'tiktok'),
]

# Length limits (characters)
MAX_NAME_SOURCE_LENGTH = 50
MAX_FALLBACK_VALUE_LENGTH = 20
MAX_DIV_TEXT_LENGTH = 200
MAX_MEANINGFUL_TEXT_LENGTH = 80
MAX_NON_INTERACTIVE_TEXT_LENGTH = 50
MAX_PLAIN_TEXT_LENGTH = 30
MAX_SPECIAL_CHAR_RATIO = 0.7

# Timeouts and batching
BATCH_SIZE = 5
EXTRACTION_TIMEOUT_MS = 60000
PAGE_LOAD_TIMEOUT_MS = 5000
ELEMENT_SELECTION_TIMEOUT_MS = 10000
ELEMENT_TIMEOUT_MS = 5000
NAVIGATION_TIMEOUT_MS = 30000

# Read-only scripts evaluated against a node
TAG_NAME_SCRIPT = "el => el.tagName"
ATTRIBUTES_SCRIPT = """el => {
    const attrs = {};
    for (let j = 0; j < el.attributes.length; j++) {
        const attr = el.attributes[j];
        attrs[attr.name] = attr.value;
    }
    return attrs;
}"""
