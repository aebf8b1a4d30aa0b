# utils.py
import asyncio
import dataclasses
import re
from typing import Any, Awaitable, Callable, Dict, Hashable, Iterable, List, Sequence, TypeVar

from .constants import logger
from .errors import PageObjectError, PhaseError, PhaseTimeoutError

T = TypeVar('T')
K = TypeVar('K', bound=Hashable)

_PUNCTUATION = re.compile(r'[^\w\s]', re.ASCII)
_NON_WORD = re.compile(r'[^\w]', re.ASCII)
_NON_ALNUM = re.compile(r'[^a-zA-Z0-9]')
_LEADING_DIGITS = re.compile(r'^\d+')
_BAD_START = re.compile(r'^[^a-zA-Z_]')


async def execute_with_timeout(operation: Callable[[], Awaitable[T]], timeout_ms: int, operation_name: str) -> T:
    """Await ``operation()`` for at most ``timeout_ms`` milliseconds.

    Timeouts raise PhaseTimeoutError and any other failure is wrapped in a
    PhaseError naming ``operation_name``. Errors that already belong to the
    generator's taxonomy pass through untouched.
    """
    try:
        return await asyncio.wait_for(operation(), timeout=timeout_ms / 1000)
    except PageObjectError:
        raise
    except asyncio.TimeoutError as e:
        raise PhaseTimeoutError(operation_name, timeout_ms) from e
    except Exception as e:
        raise PhaseError(operation_name, str(e) or type(e).__name__, e) from e


async def gather_in_batches(items: Sequence[Any], worker: Callable[[Any, int], Awaitable[T]], batch_size: int) -> List[T]:
    """Run ``worker(item, index)`` over ``items`` one batch at a time.

    Work inside a batch runs concurrently. A failed or ``None`` result drops
    that item only; the remaining results keep their input order.
    """
    results = []
    for i in range(0, len(items), batch_size):
        batch = items[i:i + batch_size]
        batch_results = await asyncio.gather(
            *(worker(item, i + offset) for offset, item in enumerate(batch)),
            return_exceptions=True,
        )
        for offset, result in enumerate(batch_results):
            if isinstance(result, BaseException):
                logger.debug(f"Task {i + offset} dropped: {result}")
            elif result is not None:
                results.append(result)
    return results


def group_by(elements: Iterable[T], key_fn: Callable[[T], K]) -> Dict[K, List[T]]:
    groups: Dict[K, List[T]] = {}
    for element in elements:
        groups.setdefault(key_fn(element), []).append(element)
    return groups


def _finish_identifier(name: str) -> str:
    name = _LEADING_DIGITS.sub('', name)
    name = _BAD_START.sub('', name)
    return name or 'element'


def to_camel_case(text: str) -> str:
    if not text or not isinstance(text, str):
        return 'element'
    words = _PUNCTUATION.sub(' ', text).split()
    joined = ''.join(
        word.lower() if index == 0 else word[:1].upper() + word[1:].lower()
        for index, word in enumerate(words)
    )
    return _finish_identifier(_NON_WORD.sub('', joined))


def to_snake_case(text: str) -> str:
    if not text or not isinstance(text, str):
        return 'element'
    # split camel humps so "emailAddress" becomes "email_address"
    text = re.sub(r'([a-z0-9])([A-Z])', r'\1 \2', text)
    words = _PUNCTUATION.sub(' ', text).split()
    return _finish_identifier(_NON_WORD.sub('', '_'.join(word.lower() for word in words)))


def to_kebab_case(text: str) -> str:
    if not text or not isinstance(text, str):
        return 'element'
    text = re.sub(r'([a-z0-9])([A-Z])', r'\1 \2', text)
    words = _NON_ALNUM.sub(' ', text).split()
    name = _LEADING_DIGITS.sub('', '-'.join(word.lower() for word in words))
    name = name.lstrip('-')
    return name or 'element'


CASE_CONVERTERS = {
    'camelCase': to_camel_case,
    'snake_case': to_snake_case,
    'kebab-case': to_kebab_case,
}


def convert_case(text: str, naming_convention: str = 'camelCase') -> str:
    return CASE_CONVERTERS[naming_convention](text)


def sanitize_key(text: str) -> str:
    return _NON_ALNUM.sub('', text).lower()


def escape_string(text: str) -> str:
    # Only single quotes are escaped
    return text.replace("'", "\\'")


def uniquify_property_names(elements: Iterable[T]) -> List[T]:
    """Suffix repeated property names with 1, 2, ... in order of appearance."""
    used = set()
    unique = []
    for element in elements:
        base = element.property_name
        candidate = base
        counter = 1
        while candidate in used:
            candidate = f"{base}{counter}"
            counter += 1
        used.add(candidate)
        unique.append(dataclasses.replace(element, property_name=candidate))
    return unique
