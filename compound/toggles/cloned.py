import logging

from ..elements import (
    Component, clone_element, component, fragment, map_children,
)
from ..hooks import use_callback, use_state
from ..switch import switch


logger = logging.getLogger(__name__)


def noop():
    pass


@component
def toggle(children=(), on_toggle=None):
    is_on, set_on = use_state(False)

    @use_callback(set_on, on_toggle)
    def flip():
        new_on = set_on(lambda on: not on)
        if on_toggle is not None:
            on_toggle(new_on)

    # Only direct component children get the injected props. HTML elements
    # pass through untouched so `on` and `toggle` never become attributes,
    # which also means slots nested inside them see nothing.
    def inject(child):
        if not isinstance(child, Component):
            return child
        return clone_element(child, on=is_on, toggle=flip)

    return fragment(*map_children(children, inject))


@component
def on(on=False, toggle=None, children=()):
    return fragment(*children) if on else None


@component
def off(on=False, toggle=None, children=()):
    return None if on else fragment(*children)


@component
def button(on=False, toggle=None, **props):
    if toggle is None:
        toggle = noop

    @use_callback(toggle)
    def onclick(e):
        toggle()

    return switch({'on': bool(on), 'onclick': onclick, **props})


def log_toggle(on):
    logger.info('onToggle %s', on)


@component
def usage(on_toggle=log_toggle):
    return toggle(on_toggle=on_toggle)(
        on('The button is on'),
        off('The button is off'),
        button,
    )
