import logging
from types import SimpleNamespace

from .elements import render_child
from .hooks import CONTEXT


logger = logging.getLogger(__name__)


def mount(queue, elem):
    state = None
    result = None
    mounted = True

    def request_render():
        queue.put_nowait(('render',))

    def rerender():
        nonlocal state, result

        if not mounted:
            raise ValueError('cannot render an unmounted tree')

        token = CONTEXT.set(SimpleNamespace(
            contexts={},
            request_render=request_render,
        ))
        try:
            state, result = render_child(
                elem,
                elem if state is not None else None,
                state,
                result,
            )
        finally:
            CONTEXT.reset(token)

        logger.debug('rendered %r', elem)
        return result

    def unmount():
        nonlocal mounted

        if not mounted:
            return
        mounted = False
        if state is not None:
            elem._unmount(state, result)

    result = rerender()
    return result, rerender, unmount


def drain(queue):
    changes = []
    while not queue.empty():
        changes.append(queue.get_nowait())
    return changes
