from abc import ABC, abstractmethod

from .hooks import CONTEXT


INCOMPATIBLE = 0
COMPATIBLE = 1


class Element(ABC):

    def __init__(self, props, children):
        self._props = props
        self._children = children

    @abstractmethod
    def _copy(self, props, children):
        raise NotImplementedError

    @abstractmethod
    def _comp(self, elem):
        raise NotImplementedError

    @abstractmethod
    def _init(self):
        raise NotImplementedError

    @abstractmethod
    def _render(self, prev_state, prev_result):
        raise NotImplementedError

    @abstractmethod
    def _unmount(self, state, result):
        raise NotImplementedError

    def __call__(self, *args, **kwargs):
        if args and isinstance(args[0], dict):
            props, *args = args
            kwargs = {**props, **kwargs}

        if 'children' in kwargs:
            raise ValueError('\'children\' is not allowed as a property name')

        props = {**self._props, **kwargs}
        return self._copy(props, (*self._children, *args))


def render_child(child, prev_child, prev_child_state, prev_child_result):
    if isinstance(child, Element):
        comp = child._comp(prev_child)
    else:
        comp = INCOMPATIBLE

    if comp == INCOMPATIBLE:
        if isinstance(prev_child, Element):
            prev_child._unmount(prev_child_state, prev_child_result)
        if not isinstance(child, Element):
            return None, child
        prev_child_state, prev_child_result = child._init()

    return child._render(prev_child_state, prev_child_result)


class HTMLElement(Element):

    def __init__(self, tag, props, children):
        if tag is None and props:
            raise ValueError('fragment cannot have props')

        super().__init__(props, children)
        self._tag = tag

    def _copy(self, props, children):
        return HTMLElement(self._tag, props, children)

    def __eq__(self, other):
        return (
            isinstance(other, HTMLElement) and
            other._tag == self._tag and
            other._props == self._props and
            other._children == self._children
        )

    def __repr__(self):
        return f'<HTMLElement {self._tag or "fragment"}>'

    def _comp(self, elem):
        if isinstance(elem, HTMLElement) and elem._tag == self._tag:
            return COMPATIBLE
        else:
            return INCOMPATIBLE

    def _init(self):
        return (), (self._tag, self._props)

    def _render(self, prev_state, prev_result):
        state = []
        child_results = []

        for i, child in enumerate(self._children):
            if i < len(prev_state):
                prev_child, prev_child_state = prev_state[i]
                prev_child_result = prev_result[i + 2]
            else:
                prev_child = None
                prev_child_state = None
                prev_child_result = None

            child_state, child_result = render_child(
                child, prev_child, prev_child_state, prev_child_result,
            )
            state.append((child, child_state))
            child_results.append(child_result)

        for (prev_child, prev_child_state), prev_child_result in zip(
            prev_state[len(self._children):],
            prev_result[len(self._children) + 2:],
        ):
            if isinstance(prev_child, Element):
                prev_child._unmount(prev_child_state, prev_child_result)

        return tuple(state), (self._tag, self._props, *child_results)

    def _unmount(self, state, result):
        for (child, child_state), child_result in zip(state, result[2:]):
            if isinstance(child, Element):
                child._unmount(child_state, child_result)


class Component(Element):

    def __init__(self, func, props, children):
        super().__init__(props, children)
        self._func = func

    def _copy(self, props, children):
        return Component(self._func, props, children)

    def __repr__(self):
        return f'<Component {self._func.__qualname__}>'

    def _comp(self, elem):
        if isinstance(elem, Component) and elem._func == self._func:
            return COMPATIBLE
        else:
            return INCOMPATIBLE

    def _init(self):
        return (None, None, None), None

    def _render(self, prev_state, prev_result):
        refs, prev_elem, prev_elem_state = prev_state
        ctx = CONTEXT.get()

        outer_refs = getattr(ctx, 'refs', None)
        ctx.refs = [] if refs is None else iter(refs)
        try:
            props = self._props
            if self._children:
                props = {**props, 'children': self._children}
            elem = self._func(**props)

            if refs is None:
                refs = tuple(ctx.refs)
            else:
                try:
                    next(ctx.refs)
                except StopIteration:
                    pass
                else:
                    raise ValueError('less refs used than previous render')
        finally:
            ctx.refs = outer_refs

        elem_state, result = render_child(
            elem, prev_elem, prev_elem_state, prev_result,
        )
        return (refs, elem, elem_state), result

    def _unmount(self, state, result):
        refs, elem, elem_state = state
        if isinstance(elem, Element):
            elem._unmount(elem_state, result)
        for ref in refs or ():
            if hasattr(ref, '_compound_cleanup'):
                ref._compound_cleanup()


class HTMLFactory:

    def __getattr__(self, name):
        return HTMLElement(name, {}, ())


h = HTMLFactory()


def component(func):
    return Component(func, {}, ())


fragment = HTMLElement(None, {}, ())


def map_children(children, callback):
    return tuple(
        child if child is None else callback(child)
        for child in children
    )


def clone_element(elem, **props):
    # text, fragments and context providers cannot carry props
    if not isinstance(elem, (HTMLElement, Component)):
        return elem
    if isinstance(elem, HTMLElement) and elem._tag is None:
        return elem
    return elem._copy({**elem._props, **props}, elem._children)
