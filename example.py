from compound import Compound
from compound.elements import component, fragment, h
from compound.toggles import cloned, flexible


@component
def examples():
    return fragment(
        h.h1('Compound Components'),
        cloned.usage,
        h.h1('Flexible Compound Components'),
        flexible.usage,
    )


app = Compound(examples, debug=True, title='Toggle')
