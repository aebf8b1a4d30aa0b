"""
Identifier utilities, timeouts and batching tests
"""
import asyncio
import sys
import os

import pytest

# プロジェクトルートをPythonパスに追加
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from page_object_generator.errors import ConfigurationError, PhaseError, PhaseTimeoutError
from page_object_generator.models import AccessibleElement, ElementSelector
from page_object_generator.utils import (
    convert_case,
    escape_string,
    execute_with_timeout,
    gather_in_batches,
    group_by,
    sanitize_key,
    to_camel_case,
    to_kebab_case,
    to_snake_case,
    uniquify_property_names,
)


def _element(property_name, expression="get_by_text('x')"):
    return AccessibleElement(type='button', selector=ElementSelector(expression, 'x'),
                             name=property_name, property_name=property_name)


class TestCaseConversion:

    @pytest.mark.parametrize("text,expected", [
        ("Email Address", "emailAddress"),
        ("  Sign   in! ", "signIn"),
        ("first-name", "firstName"),
        ("SUBMIT FORM", "submitForm"),
        ("123 Main Street", "MainStreet"),
        ("button_3", "button_3"),
        ("img_logo", "img_logo"),
        ("_private", "_private"),
    ])
    def test_camel_case(self, text, expected):
        assert to_camel_case(text) == expected

    @pytest.mark.parametrize("text", ["", "!!!", "   ", None, 42])
    def test_camel_case_defaults_to_element(self, text):
        assert to_camel_case(text) == "element"

    def test_snake_case(self):
        assert to_snake_case("Email Address") == "email_address"
        assert to_snake_case("emailAddress") == "email_address"
        assert to_snake_case("Sign in!") == "sign_in"
        assert to_snake_case("") == "element"

    def test_kebab_case(self):
        assert to_kebab_case("Email Address") == "email-address"
        assert to_kebab_case("button_3") == "button-3"
        assert to_kebab_case("9 lives") == "lives"
        assert to_kebab_case("???") == "element"

    def test_convert_case_dispatch(self):
        assert convert_case("Search Box") == "searchBox"
        assert convert_case("Search Box", "snake_case") == "search_box"
        assert convert_case("Search Box", "kebab-case") == "search-box"


class TestStrings:

    def test_sanitize_key(self):
        assert sanitize_key("Sign In!") == "signin"
        assert sanitize_key("data-test_id 42") == "datatestid42"
        assert sanitize_key("") == ""

    def test_escape_string_only_escapes_single_quotes(self):
        assert escape_string("It's") == "It\\'s"
        assert escape_string('say "hi"') == 'say "hi"'
        assert escape_string("a\\b") == "a\\b"


class TestUniquify:

    def test_first_occurrence_keeps_bare_name(self):
        names = [el.property_name for el in uniquify_property_names(
            [_element("submit"), _element("submit"), _element("search"), _element("submit")])]
        assert names == ["submit", "submit1", "search", "submit2"]

    def test_suffix_collision_with_existing_name(self):
        names = [el.property_name for el in uniquify_property_names(
            [_element("a"), _element("a1"), _element("a")])]
        assert names == ["a", "a1", "a2"]

    def test_does_not_mutate_input(self):
        elements = [_element("x"), _element("x")]
        uniquify_property_names(elements)
        assert [el.property_name for el in elements] == ["x", "x"]

    def test_group_by_keeps_first_seen_order(self):
        grouped = group_by(["b1", "a1", "b2", "c1", "a2"], lambda s: s[0])
        assert list(grouped) == ["b", "a", "c"]
        assert grouped["b"] == ["b1", "b2"]


class TestExecuteWithTimeout:

    @pytest.mark.asyncio
    async def test_returns_result(self):
        async def op():
            return 42
        assert await execute_with_timeout(op, 1000, "Quick") == 42

    @pytest.mark.asyncio
    async def test_timeout_names_phase(self):
        async def op():
            await asyncio.sleep(1)

        with pytest.raises(PhaseTimeoutError) as exc_info:
            await execute_with_timeout(op, 10, "Slow")

        assert exc_info.value.phase == "Slow"
        assert str(exc_info.value) == "Slow failed: timeout after 10ms"
        assert isinstance(exc_info.value, TimeoutError)

    @pytest.mark.asyncio
    async def test_other_errors_are_wrapped(self):
        async def op():
            raise RuntimeError("boom")

        with pytest.raises(PhaseError) as exc_info:
            await execute_with_timeout(op, 1000, "Element selection")

        assert str(exc_info.value) == "Element selection failed: boom"
        assert isinstance(exc_info.value.cause, RuntimeError)

    @pytest.mark.asyncio
    async def test_own_errors_pass_through(self):
        async def op():
            raise ConfigurationError(["bad"])

        with pytest.raises(ConfigurationError):
            await execute_with_timeout(op, 1000, "Outer")


class TestGatherInBatches:

    @pytest.mark.asyncio
    async def test_concurrency_bounded_by_batch_size(self):
        running = 0
        peak = 0

        async def worker(item, index):
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1
            return item * 10

        results = await gather_in_batches(list(range(12)), worker, 5)

        assert results == [i * 10 for i in range(12)]
        assert peak == 5

    @pytest.mark.asyncio
    async def test_failures_and_none_are_dropped(self):
        async def worker(item, index):
            if item == "bad":
                raise RuntimeError("broken element")
            if item == "empty":
                return None
            return f"{item}@{index}"

        results = await gather_in_batches(["a", "bad", "b", "empty", "c", "d"], worker, 2)

        assert results == ["a@0", "b@2", "c@4", "d@5"]
