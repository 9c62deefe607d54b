import html
from itertools import islice
import json


class SafeText:

    __slots__ = ['text']

    def __init__(self, text):
        self.text = text

    def __bool__(self):
        return bool(self.text)

    def __eq__(self, other):
        if isinstance(other, SafeText):
            return other.text == self.text
        elif isinstance(other, str):
            return html.escape(other, quote=False) == self.text
        else:
            return False

    def __hash__(self):
        return hash((SafeText, self.text))

    def __repr__(self):
        return f'SafeText({self.text!r})'

    @classmethod
    def join(cls, parts):
        parts = list(parts)
        if not any(isinstance(part, cls) for part in parts):
            return ''.join(parts)
        return cls(''.join(
            part.text if isinstance(part, cls) else
            html.escape(part, quote=False)
            for part in parts
        ))


def concat_text(left, right):
    if isinstance(left, str) and isinstance(right, str):
        return left + right
    return SafeText.join([left, right])


def clean_value(value):
    if callable(value):
        return 'call(event)'
    return value


def html_flatten(node):
    if node is None:
        return
    if not isinstance(node, tuple) or node[0] is not None:
        yield node
        return

    text = None
    stack = [islice(node, 2, None)]
    while stack:
        try:
            node = next(stack[-1])
        except StopIteration:
            stack.pop()
            continue

        if node is None:
            continue

        if isinstance(node, tuple) and node[0] is None:
            stack.append(islice(node, 2, None))
            continue

        if isinstance(node, (str, SafeText)):
            text = node if text is None else concat_text(text, node)
            continue

        if text:
            yield text
        text = None
        yield node

    if text:
        yield text


def html_get(node, index):
    if node[0] is not None:
        node = (None, {}, *node[2:])
    try:
        return next(islice(html_flatten(node), index, None))
    except StopIteration:
        raise IndexError('node index out of range') from None


def html_parts(node):
    for node in html_flatten(node):
        if isinstance(node, SafeText):
            yield node.text
            continue

        if isinstance(node, str):
            yield html.escape(node, quote=False)
            continue

        tag, props, *children = node

        yield '<'
        yield tag
        for key, value in props.items():
            value = clean_value(value)
            if value is False or value is None:
                continue
            yield ' '
            yield key
            if value is True:
                continue
            yield '="'
            if not isinstance(value, str):
                value = json.dumps(value)
            yield html.escape(value)
            yield '"'
        yield '>'

        yield from html_parts((None, {}, *children))

        yield '</'
        yield tag
        yield '>'


def html_str(node):
    return ''.join(html_parts(node))
