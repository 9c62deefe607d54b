from unittest.mock import Mock, call

import pytest

from compound.elements import component, fragment, h
from compound.test import TestSession
from compound.toggles import cloned, flexible


@pytest.mark.parametrize('toggles', [cloned, flexible])
def test_initial_state(toggles):
    on_toggle = Mock()
    with TestSession(toggles.usage(on_toggle=on_toggle)) as session:
        assert session.has_text('The button is off')
        assert session.find('button').has_prop('aria-pressed', 'false')
        on_toggle.assert_not_called()


@pytest.mark.parametrize('toggles', [cloned, flexible])
def test_single_toggle(toggles):
    on_toggle = Mock()
    with TestSession(toggles.usage(on_toggle=on_toggle)) as session:
        assert session.find('button').click()

        assert session.has_text('The button is on')
        assert session.find('button').has_prop('aria-pressed', 'true')
        assert session.find('button').has_prop(
            'class', 'toggle-btn toggle-btn-on',
        )
        on_toggle.assert_called_once_with(True)


@pytest.mark.parametrize('toggles', [cloned, flexible])
def test_double_toggle(toggles):
    on_toggle = Mock()
    with TestSession(toggles.usage(on_toggle=on_toggle)) as session:
        assert session.find('button').click()
        assert session.find('button').click()

        assert session.has_text('The button is off')
        assert on_toggle.call_args_list == [call(True), call(False)]


@pytest.mark.parametrize('toggles', [cloned, flexible])
def test_toggle_without_callback(toggles):
    elem = toggles.toggle(
        toggles.on(h.span('on')),
        toggles.off(h.span('off')),
        toggles.button,
    )
    with TestSession(elem) as session:
        assert session.find('span').has_text('off')
        assert session.find('button').click()
        assert session.find('span').has_text('on')


@pytest.mark.parametrize('toggles', [cloned, flexible])
def test_extra_props_pass_through(toggles):
    elem = toggles.toggle(
        toggles.button({'aria-label': 'custom-button', 'id': 'switch'}),
    )
    with TestSession(elem) as session:
        button = session.find('button')
        assert button.has_prop('aria-label', 'custom-button')
        assert button.has_prop('id', 'switch')
        assert button.has_prop('aria-pressed', 'false')


def test_flexible_depth_independence():
    on_toggle = Mock()
    elem = flexible.toggle(on_toggle=on_toggle)(
        flexible.on(h.span('on')),
        flexible.off(h.span('off')),
        h.section(h.div(h.div(flexible.button))),
    )
    with TestSession(elem) as session:
        assert session.find('section div div button').click()

        assert session.find('span').has_text('on')
        assert session.find('button').has_prop('aria-pressed', 'true')
        on_toggle.assert_called_once_with(True)


def test_cloned_only_reaches_direct_children():
    on_toggle = Mock()
    elem = cloned.toggle(on_toggle=on_toggle)(
        cloned.on(h.span('on')),
        cloned.off(h.span('off')),
        h.div(cloned.button),
    )
    with TestSession(elem) as session:
        assert session.find('div button').has_prop('aria-pressed', 'false')
        assert session.find('div button').click()

        assert session.find('span').has_text('off')
        assert session.renders == 1
        on_toggle.assert_not_called()


def test_cloned_passes_through_non_component_children():
    elem = cloned.toggle(
        'plain text',
        None,
        h.p('paragraph'),
        cloned.off(h.span('off')),
    )
    with TestSession(elem) as session:
        assert session.find('p').has_text('paragraph')
        assert session.find('span').has_text('off')
        assert session.has_text('plain textparagraphoff')


def test_cloned_injection_overrides_caller_props():
    seen = []

    @component
    def reader(on=None, toggle=None):
        seen.append(on)

    with TestSession(cloned.toggle(reader(on='caller'))) as session:
        assert session.renders == 1
        assert seen == [False]


def test_cloned_render_is_idempotent():
    seen = []

    @component
    def reader(on=None, toggle=None):
        seen.append((on, toggle))

    with TestSession(cloned.toggle(reader)) as session:
        session.rerender()

        assert len(seen) == 2
        (on_1, toggle_1), (on_2, toggle_2) = seen
        assert on_1 is False and on_2 is False
        assert toggle_1 is toggle_2


def test_flexible_render_is_idempotent():
    seen = []

    @component
    def reader():
        return flexible.toggle_context.consumer(seen.append)

    with TestSession(flexible.toggle(reader)) as session:
        session.rerender()

        assert len(seen) == 2
        assert seen[0] is seen[1]
        assert seen[0].on is False


def test_flexible_mutator_schedules_render():
    seen = []

    @component
    def reader():
        return flexible.toggle_context.consumer(seen.append)

    with TestSession(flexible.toggle(reader)) as session:
        seen[0].toggle()

        # the new state is only visible in the next render pass
        assert len(seen) == 1
        assert session._update()
        assert [value.on for value in seen] == [False, True]


def test_flexible_default_outside_toggle():
    elem = fragment(
        flexible.on(h.span('on')),
        flexible.off(h.span('off')),
        flexible.button,
    )
    with TestSession(elem) as session:
        assert session.find('span').has_text('off')
        assert session.find('button').click()

        assert session.find('span').has_text('off')
        assert session.renders == 1


def test_flexible_nested_toggles_shadow():
    elem = flexible.toggle(
        flexible.on(h.span('outer on')),
        flexible.off(h.span('outer off')),
        h.div({'id': 'outer'})(flexible.button),
        flexible.toggle(
            flexible.on(h.span('inner on')),
            flexible.off(h.span('inner off')),
            h.div({'id': 'inner'})(flexible.button),
        ),
        flexible.off(h.span('outer again off')),
    )
    with TestSession(elem) as session:
        assert session.find('#inner button').click()

        assert session.find('span:text("outer off")')
        assert session.find('span:text("inner on")')
        assert session.find('span:text("outer again off")')
        assert session.find('#outer button').has_prop('aria-pressed', 'false')

        assert session.find('#outer button').click()

        assert session.find('span:text("outer on")')
        assert session.find('span:text("inner on")')
        assert session.find('span:text("outer again off")').not_exists()


def test_flexible_scope_ends_with_provider():
    elem = fragment(
        flexible.toggle(flexible.button),
        flexible.on(h.span('outside on')),
        flexible.off(h.span('outside off')),
    )
    with TestSession(elem) as session:
        assert session.find('button').click()

        assert session.find('button').has_prop('aria-pressed', 'true')
        assert session.find('span').has_text('outside off')


@pytest.mark.parametrize('toggles', [cloned, flexible])
def test_chained_checks_see_the_new_render(toggles):
    with TestSession(toggles.usage(on_toggle=Mock())) as session:
        assert session.find('button').click().has_prop('aria-pressed', 'true')
        assert session.find('button').click().has_prop('aria-pressed', 'false')
        assert session.find('button').has_prop('onclick')


def test_flexible_consecutive_toggles_before_render():
    on_toggle = Mock()
    seen = []

    @component
    def reader():
        return flexible.toggle_context.consumer(seen.append)

    with TestSession(flexible.toggle(on_toggle=on_toggle)(reader)) as session:
        seen[0].toggle()
        seen[0].toggle()
        assert session._update()

        assert [value.on for value in seen] == [False, False]
        assert on_toggle.call_args_list == [call(True), call(False)]


def test_flexible_button_parent():
    elem = flexible.toggle(h.div({'id': 'wrapper'})(flexible.button))
    with TestSession(elem) as session:
        wrapper = session.find('button').parent()
        assert wrapper.has_prop('id', 'wrapper')
        assert wrapper.find('button').click()
        assert session.find('#wrapper > button').has_prop(
            'aria-pressed', 'true',
        )
