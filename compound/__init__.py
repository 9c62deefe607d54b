from .app import Compound
from .context import create_context
from .elements import clone_element, component, fragment, h, map_children
from .hooks import use_callback, use_context, use_memo, use_ref, use_state


__all__ = [
    'Compound',
    'create_context',
    'clone_element',
    'component',
    'fragment',
    'h',
    'map_children',
    'use_callback',
    'use_context',
    'use_memo',
    'use_ref',
    'use_state',
]
