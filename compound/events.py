import logging
from types import SimpleNamespace


logger = logging.getLogger(__name__)


def dispatch(target, event_type, **details):
    current_target = target

    while current_target is not None:
        try:
            callback = current_target[f'on{event_type}']
        except (ValueError, KeyError):
            callback = None

        if callback is not None:
            logger.debug(
                'dispatching %s to <%s> at %r',
                event_type, current_target.tag, current_target.path,
            )
            callback(SimpleNamespace(
                type=event_type,
                target=target,
                current_target=current_target,
                **details,
            ))
            return True

        current_target = current_target.parent

    return False
