import logging
from types import SimpleNamespace

from ..context import create_context
from ..elements import component, fragment, h
from ..hooks import use_callback, use_memo, use_state
from ..switch import switch


logger = logging.getLogger(__name__)


def noop():
    pass


toggle_context = create_context(SimpleNamespace(on=False, toggle=noop))


@component
def toggle(children=(), on_toggle=None):
    is_on, set_on = use_state(False)

    @use_callback(set_on, on_toggle)
    def flip():
        new_on = set_on(lambda on: not on)
        if on_toggle is not None:
            on_toggle(new_on)

    @use_memo(is_on, flip)
    def value():
        return SimpleNamespace(on=is_on, toggle=flip)

    return toggle_context.provider(value=value)(*children)


@component
def on(children=()):
    return toggle_context.consumer(
        lambda value: fragment(*children) if value.on else None
    )


@component
def off(children=()):
    return toggle_context.consumer(
        lambda value: None if value.on else fragment(*children)
    )


@component
def button(**props):
    return toggle_context.consumer(
        lambda value: switch({
            'on': value.on,
            'onclick': lambda e: value.toggle(),
            **props,
        })
    )


def log_toggle(on):
    logger.info('onToggle %s', on)


@component
def usage(on_toggle=log_toggle):
    return toggle(on_toggle=on_toggle)(
        on('The button is on'),
        off('The button is off'),
        h.div(button),
    )
