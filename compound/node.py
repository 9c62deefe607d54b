from .html import SafeText, html_flatten, html_get
from .filter import parse_filter


class Node:

    def __init__(self, parents, node):
        self._parents = parents
        self._node = node

    @classmethod
    def from_path(cls, result, path):
        parents = []
        node = result
        for index in path:
            parents.append((node, index))
            node = html_get(node, index)
        return cls(tuple(parents), node)

    @property
    def path(self):
        return tuple(index for _, index in self._parents)

    @property
    def parent(self):
        if not self._parents:
            return None
        *parents, (node, _) = self._parents
        return Node(tuple(parents), node)

    @property
    def type(self):
        if isinstance(self._node, (str, SafeText)):
            return 'text'
        elif isinstance(self._node, tuple):
            return 'element' if self._node[0] is not None else 'document'
        raise ValueError('unknown node type')

    def _props(self):
        if self.type != 'element':
            raise ValueError('node is not an element')
        return self._node[1]

    @property
    def tag(self):
        self._props()
        return self._node[0]

    def __getitem__(self, key):
        return self._props()[key]

    def __contains__(self, key):
        return key in self._props()

    def get(self, key, default=None):
        return self._props().get(key, default)

    def children(self, *, deep=False):
        if self.type == 'text':
            raise ValueError('node is not an element')
        flat = html_flatten((None, {}, *self._node[2:]))
        for index, child in enumerate(flat):
            child = Node((*self._parents, (self._node, index)), child)
            yield child
            if deep and child.type != 'text':
                yield from child.children(deep=True)

    def text(self):
        if self.type == 'text':
            return self._node
        return SafeText.join(
            child._node
            for child in self.children(deep=True)
            if child.type == 'text'
        )

    def find(self, filter):
        return parse_filter(filter)([self])
