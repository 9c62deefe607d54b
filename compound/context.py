from .elements import Element, HTMLElement, INCOMPATIBLE, COMPATIBLE, component
from .hooks import CONTEXT, use_context


class ContextProvider(Element):

    def __init__(self, key, props, children):
        if set(props) - {'value'}:
            raise ValueError('context provider only accepts a value prop')

        super().__init__(props, children)
        self._key = key

    def _copy(self, props, children):
        return ContextProvider(self._key, props, children)

    def _comp(self, elem):
        if isinstance(elem, ContextProvider) and elem._key is self._key:
            return COMPATIBLE
        else:
            return INCOMPATIBLE

    def _init(self):
        return (), (None, {})

    def _render(self, prev_state, prev_result):
        try:
            value = self._props['value']
        except KeyError:
            raise ValueError('context provider requires a value') from None

        stack = CONTEXT.get().contexts.setdefault(self._key, [])
        stack.append(value)
        try:
            return HTMLElement(None, {}, self._children)._render(
                prev_state, prev_result,
            )
        finally:
            stack.pop()

    def _unmount(self, state, result):
        HTMLElement(None, {}, self._children)._unmount(state, result)


class Context:

    def __init__(self, initial_value=None):
        self.key = object()
        self.initial_value = initial_value
        self.provider = ContextProvider(self.key, {}, ())

        @component
        def consumer(children=()):
            render, = children
            return render(use_context(self))

        self.consumer = consumer

    def __repr__(self):
        return f'<Context initial_value={self.initial_value!r}>'


def create_context(initial_value=None):
    return Context(initial_value)
