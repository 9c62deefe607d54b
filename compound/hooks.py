from contextvars import ContextVar
from types import SimpleNamespace


CONTEXT = ContextVar('context')


def use_ref():
    ctx = CONTEXT.get()

    if isinstance(ctx.refs, list):
        ref = SimpleNamespace()
        ctx.refs.append(ref)
    else:
        try:
            ref = next(ctx.refs)
        except StopIteration:
            raise ValueError('more refs used than previous render') from None
    return ref


def use_state(initial_value=None):
    ctx = CONTEXT.get()

    ref = use_ref()
    ref.request_render = ctx.request_render

    if not hasattr(ref, 'value'):
        if callable(initial_value):
            initial_value = initial_value()

        def set_value(value):
            if callable(value):
                value = value(ref.value)

            ref.value = value
            if ref.request_render is not None:
                ref.request_render()
            return value

        def cleanup():
            ref.request_render = None

        ref.value = initial_value
        ref.set_value = set_value
        ref._compound_cleanup = cleanup

    return ref.value, ref.set_value


def use_memo(*key):
    def decorator(callback):
        ref = use_ref()
        if not hasattr(ref, 'key') or ref.key != key:
            ref.key = key
            ref.value = callback()
        return ref.value
    return decorator


def use_callback(*key):
    def decorator(callback):
        return use_memo(*key)(lambda: callback)
    return decorator


def use_context(context):
    ctx = CONTEXT.get()
    try:
        return ctx.contexts[context.key][-1]
    except (KeyError, IndexError):
        return context.initial_value
