from .elements import component, h


@component
def switch(on=False, onclick=None, **props):
    classes = ['toggle-btn', 'toggle-btn-on' if on else 'toggle-btn-off']
    return h.button({
        'type': 'button',
        'class': ' '.join(classes),
        'aria-pressed': 'true' if on else 'false',
        'aria-label': 'Toggle',
        'onclick': onclick,
        **props,
    })
