"""
Extraction orchestrator tests against an in-memory page
"""
import sys
import os
from unittest.mock import patch

import pytest

# プロジェクトルートをPythonパスに追加
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from page_object_generator.errors import ConfigurationError, PhaseError, PhaseTimeoutError
from page_object_generator.extractor import extract_accessible_elements, extract_element_info
from page_object_generator.config import merge_config
from page_object_generator.models import FilterKind
from fake_page import FakeNode, FakePage, call


def login_page():
    return FakePage([
        FakeNode('input', {'type': 'email', 'aria-label': 'Email Address'}),
        FakeNode('input', {'type': 'password', 'name': 'password', 'placeholder': 'Password'}),
        FakeNode('button', {'type': 'submit', 'data-testid': 'x', 'id': 'y'}, text='Submit'),
        FakeNode('button', {}, text='Submit'),
        FakeNode('a', {'href': '/forgot'}, text=' Forgot password? '),
        FakeNode('button', {'aria-hidden': 'true', 'id': 'ghost'}, text='Ghost'),
        FakeNode('a', {'href': 'https://twitter.com/foo'}),
        FakeNode('div', {'tabindex': '-1'}),
    ])


class TestExtractElementInfo:

    @pytest.mark.asyncio
    async def test_record_fields(self):
        node = FakeNode('INPUT', {'type': 'email', 'aria-label': 'Email Address', 'class': 'field wide',
                                  'aria-labelledby': 'lbl'})

        element = await extract_element_info(node, 0, merge_config())

        assert element.type == 'email'
        assert element.tag_name == 'input'
        assert element.selector.expression == "get_by_label('Email Address')"
        assert element.key == 'emailaddress'
        assert element.property_name == 'emailAddress'
        assert element.class_name == 'field wide'
        assert element.aria_labelledby == 'lbl'
        assert element.id == '' and element.placeholder == '' and element.role == ''
        assert element.attributes == node.attrs

    @pytest.mark.asyncio
    async def test_type_mapping_applies(self):
        node = FakeNode('my-toggle', {'id': 'dark-mode'})
        config = merge_config({'element_type_mappings': {'my-toggle': 'checkbox'}})

        element = await extract_element_info(node, 3, config)

        assert element.type == 'checkbox'
        assert element.property_name == 'darkMode'


class TestExtractAccessibleElements:

    @pytest.mark.asyncio
    async def test_login_page(self):
        page = login_page()

        elements = await extract_accessible_elements(page)

        summary = [(el.type, el.selector.expression, el.property_name) for el in elements]
        assert summary == [
            ('email', "get_by_label('Email Address')", 'emailAddress'),
            ('password', "get_by_placeholder('Password')", 'password'),
            ('button', "get_by_role('button', name='Submit')", 'submit'),
            ('link', "get_by_role('link', name='Forgot password?')", 'forgotPassword'),
            ('link', "locator('a[href=\"https://twitter.com/foo\"]')", 'twitter'),
        ]
        assert page.load_states == ['domcontentloaded']
        assert page.queries[0].startswith('body button, body a, body input')

    @pytest.mark.asyncio
    async def test_property_names_unique(self):
        page = FakePage([
            FakeNode('button', {}, text='Twitter'),
            FakeNode('a', {'href': 'https://twitter.com/foo'}),
            FakeNode('input', {'name': 'q', 'placeholder': 'Search'}),
            FakeNode('input', {'name': 'q', 'aria-label': 'Search again'}),
            FakeNode('input', {'name': 'q', 'id': 'q3', 'placeholder': 'Find'}),
        ])

        elements = await extract_accessible_elements(page)

        names = [el.property_name for el in elements]
        assert names == ['twitter', 'twitter1', 'q', 'searchAgain', 'q1']
        assert len(set(names)) == len(names)

    @pytest.mark.asyncio
    async def test_duplicates_collapse(self):
        page = FakePage([FakeNode('button', text='Submit'), FakeNode('button', text='Submit')])

        elements = await extract_accessible_elements(page)

        assert len(elements) == 1
        assert elements[0].property_name == 'submit'

    @pytest.mark.asyncio
    async def test_idempotent(self):
        page = login_page()

        first = await extract_accessible_elements(page)
        second = await extract_accessible_elements(page)

        assert [(el.type, el.selector.expression) for el in first] == \
               [(el.type, el.selector.expression) for el in second]

    @pytest.mark.asyncio
    async def test_failing_element_is_dropped(self):
        page = FakePage([
            FakeNode('button', text='First'),
            FakeNode('button', text='Broken', fail=True),
            FakeNode('button', text='Last'),
        ])

        elements = await extract_accessible_elements(page)

        assert [el.property_name for el in elements] == ['first', 'last']

    @pytest.mark.asyncio
    async def test_slow_element_times_out_alone(self):
        page = FakePage([
            FakeNode('button', text='Fast'),
            FakeNode('button', text='Slow', delay=1),
        ])

        with patch('page_object_generator.extractor.ELEMENT_TIMEOUT_MS', 50):
            elements = await extract_accessible_elements(page)

        assert [el.property_name for el in elements] == ['fast']

    @pytest.mark.asyncio
    async def test_indexes_are_global_across_batches(self):
        nodes = [FakeNode('button', {'id': f'b{i}'}, text=f'Button {i}') for i in range(6)]
        nodes.append(FakeNode('a', {'id': 'bare'}))
        page = FakePage(nodes)

        elements = await extract_accessible_elements(page)

        assert elements[-1].selector.expression == "locator('a').nth(6)"
        assert elements[-1].property_name == 'bare'
        assert len(elements) == 7

    @pytest.mark.asyncio
    async def test_include_hidden_elements(self):
        page = FakePage([FakeNode('button', {'aria-hidden': 'true'}, text='Close')])

        assert await extract_accessible_elements(page) == []
        elements = await extract_accessible_elements(page, {'include_hidden_elements': True})
        assert [el.property_name for el in elements] == ['close']

    @pytest.mark.asyncio
    async def test_runtime_visibility_check(self):
        page = FakePage([FakeNode('button', text='Shown'), FakeNode('button', text='Offscreen')])
        page.invisible.add(call('get_by_role', 'button', name='Offscreen'))

        default = await extract_accessible_elements(page)
        checked = await extract_accessible_elements(page, {'enable_runtime_visibility_check': True})

        assert len(default) == 2
        assert [el.property_name for el in checked] == ['shown']

    @pytest.mark.asyncio
    async def test_custom_filters_run_before_builtin(self):
        seen = []

        class Spy:
            name = 'Spy'
            description = 'records what it sees'
            kind = FilterKind.CUSTOM
            enabled = True

            def filter(self, elements):
                seen.extend(el.property_name for el in elements)
                return elements

        page = FakePage([FakeNode('button', text='Go'), FakeNode('button', text='Go')])
        await extract_accessible_elements(page, {'element_filters': [Spy()]})

        assert seen == ['go', 'go']

    @pytest.mark.asyncio
    async def test_snake_case_naming(self):
        page = FakePage([FakeNode('input', {'type': 'email', 'aria-label': 'Email Address'})])

        elements = await extract_accessible_elements(page, {'naming_convention': 'snake_case'})

        assert elements[0].property_name == 'email_address'


class TestExtractionFailures:

    @pytest.mark.asyncio
    async def test_invalid_configuration_never_touches_page(self):
        page = FakePage([FakeNode('button', text='Go')])

        with pytest.raises(ConfigurationError):
            await extract_accessible_elements(page, {'max_text_length': 0})
        with pytest.raises(ConfigurationError):
            await extract_accessible_elements(page, {'selector_priorities': []})

        assert page.queries == []
        assert page.load_states == []

    @pytest.mark.asyncio
    async def test_query_timeout_is_fatal(self):
        page = FakePage([FakeNode('button', text='Go')])
        page.query_delay = 1

        with patch('page_object_generator.extractor.ELEMENT_SELECTION_TIMEOUT_MS', 20):
            with pytest.raises(PhaseTimeoutError) as exc_info:
                await extract_accessible_elements(page)

        assert exc_info.value.phase == 'Element selection'

    @pytest.mark.asyncio
    async def test_query_error_is_fatal(self):
        page = FakePage([])

        def bad_locator(selector):
            raise ValueError('Unexpected token "]" while parsing selector')

        page.locator = bad_locator

        with pytest.raises(PhaseError) as exc_info:
            await extract_accessible_elements(page)

        assert exc_info.value.phase == 'Element selection'
        assert 'Unexpected token' in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_outer_timeout(self):
        page = FakePage([FakeNode('button', text='Go')])
        page.query_delay = 1

        with pytest.raises(PhaseTimeoutError) as exc_info:
            await extract_accessible_elements(page, timeout_ms=20)

        assert exc_info.value.phase == 'Element extraction'

    @pytest.mark.asyncio
    async def test_page_load_failure_is_not_fatal(self):
        page = FakePage([FakeNode('button', text='Go')])

        async def never_loads(state='load', timeout=None):
            raise RuntimeError('Target closed')

        page.wait_for_load_state = never_loads

        elements = await extract_accessible_elements(page)

        assert [el.property_name for el in elements] == ['go']
