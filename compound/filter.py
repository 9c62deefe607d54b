from functools import partial
from itertools import chain
import json
import re


WORD_RE = re.compile(r'[A-Za-z_-][A-Za-z0-9_-]*')
SPACE_RE = re.compile(r'\s*')

SELECTOR_ARGS = {
    'eq': int,
    'text': str,
    'contains': str,
}

_decoder = json.JSONDecoder()


def _sort_nodes(nodes):
    nodes_by_path = {}
    for node in nodes:
        nodes_by_path[node.path] = node
    for path in sorted(nodes_by_path):
        yield nodes_by_path[path]


def _lazy_index(nodes, index):
    nodes = list(_sort_nodes(nodes))
    try:
        yield nodes[index]
    except IndexError:
        pass


def _check(predicate, nodes):
    kind, *args = predicate

    if kind == 'element':
        return (node for node in nodes if node.type == 'element')

    elif kind == 'tag':
        tag, = args
        return (node for node in nodes if (
            node.type == 'element' and node.tag == tag
        ))

    elif kind == 'prop':
        key, value = args
        return (node for node in nodes if (
            node.type == 'element' and node.get(key) == value
        ))

    elif kind == 'has_prop':
        key, = args
        return (node for node in nodes if (
            node.type == 'element' and key in node
        ))

    elif kind == 'class':
        classname, = args
        return (node for node in nodes if (
            node.type == 'element' and
            classname in (node.get('class') or '').split()
        ))

    elif kind == 'eq':
        index, = args
        return _lazy_index(nodes, index)

    elif kind == 'text':
        content, = args
        return (node for node in nodes if node.text() == content)

    elif kind == 'contains':
        content, = args
        return (node for node in nodes if content in node.text())

    else:
        raise ValueError(f'unknown predicate: {kind}')


def _children(nodes, deep):
    for node in nodes:
        if node.type in ('element', 'document'):
            yield from node.children(deep=deep)


def _find(filters, nodes):
    nodes = list(nodes)
    matches = []

    for filter in filters:
        nodes_ = list(nodes)
        for predicates, deep in filter:
            nodes_ = _children(nodes_, deep)
            for predicate in predicates:
                nodes_ = predicate(nodes_)
        matches.append(nodes_)

    return _sort_nodes(chain.from_iterable(matches))


class _Parser:

    def __init__(self, filter):
        self.filter = filter
        self.index = 0

    def error(self, message):
        return ValueError(f'{self.index}: {message}')

    def peek(self, chars):
        return self.filter.startswith(chars, self.index)

    def at_end(self):
        return self.index >= len(self.filter)

    def space(self):
        self.index = SPACE_RE.match(self.filter, self.index).end()

    def word(self):
        match = WORD_RE.match(self.filter, self.index)
        if match is None:
            raise self.error('expected a word')
        self.index = match.end()
        return match.group()

    def value(self):
        try:
            value, self.index = _decoder.raw_decode(self.filter, self.index)
        except ValueError:
            raise self.error('expected a value') from None
        return value

    def expect(self, chars, message):
        if not self.peek(chars):
            raise self.error(message)
        self.index += len(chars)

    def selector(self):
        name = self.word()
        try:
            arg_type = SELECTOR_ARGS[name]
        except KeyError:
            raise self.error(f'unknown selector {name}') from None

        self.expect('(', f':{name} expects an argument')
        self.space()
        arg = self.value()
        self.space()
        self.expect(')', 'expected right par')

        if not isinstance(arg, arg_type) or isinstance(arg, bool):
            raise self.error(
                f':{name} argument should be a {arg_type.__name__}'
            )
        return (name, arg)

    def step(self):
        deep = True
        if self.peek('>'):
            deep = False
            self.index += 1
            self.space()

        predicates = []

        if self.peek('*'):
            predicates.append(('element',))
            self.index += 1
        elif WORD_RE.match(self.filter, self.index):
            predicates.append(('tag', self.word()))

        while not self.at_end():
            if self.peek('#'):
                self.index += 1
                predicates.append(('prop', 'id', self.word()))
            elif self.peek('.'):
                self.index += 1
                predicates.append(('class', self.word()))
            elif self.peek('['):
                self.index += 1
                key = self.word()
                if self.peek('='):
                    self.index += 1
                    predicates.append(('prop', key, self.value()))
                else:
                    predicates.append(('has_prop', key))
                self.expect(']', 'expected right bracket')
            elif self.peek(':'):
                self.index += 1
                predicates.append(self.selector())
            else:
                break

        if not predicates:
            raise self.error('expected a predicate')

        return tuple(partial(_check, p) for p in predicates), deep

    def parse(self):
        filters = [[]]

        self.space()
        while not self.at_end():
            if self.peek(',') and filters[-1]:
                self.index += 1
                filters.append([])
                self.space()
                continue

            filters[-1].append(self.step())
            self.space()

        if not filters[-1]:
            raise self.error('expected a predicate')

        return partial(_find, tuple(map(tuple, filters)))


def parse_filter(filter):
    return _Parser(filter).parse()
