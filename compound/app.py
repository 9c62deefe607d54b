import asyncio
import json
import logging
from pathlib import Path
from uuid import uuid4

from starlette.applications import Starlette
from starlette.responses import HTMLResponse
from starlette.routing import Route, WebSocketRoute
from starlette.websockets import WebSocketDisconnect

from .events import dispatch
from .html import SafeText, html_str
from .node import Node
from .render import drain, mount


logger = logging.getLogger(__name__)

DOCTYPE = SafeText('<!doctype html>')
SCRIPT_BEFORE, SCRIPT_AFTER = (
    Path(__file__).parent.joinpath('app.js')
    .read_text().split('{{socket_url}}')
)


def wrap(result, title, script=None):
    head = ('head', {}, ('title', {}, title))
    if script is not None:
        head = (*head, script)

    return (
        None, {},
        DOCTYPE,
        ('html', {}, head, ('body', {}, result)),
    )


class Compound(Starlette):

    def __init__(
        self, elem, *,
        debug=False,
        title='compound',
        session_timeout=5,
    ):
        routes = [
            Route(
                '/{path:path}',
                endpoint=self._http,
                methods=['GET'],
                name='http',
            ),
            WebSocketRoute(
                '/{session_id:uuid}',
                endpoint=self._websocket,
                name='websocket',
            ),
        ]

        super().__init__(debug=debug, routes=routes)

        self._elem = elem
        self._title = title
        self._session_timeout = session_timeout
        self._sessions = {}

    async def _http(self, request):
        queue = asyncio.Queue()
        result, rerender, unmount = mount(queue, self._elem)

        session_id = uuid4()
        script = ('script', {}, SafeText(
            SCRIPT_BEFORE +
            json.dumps(str(request.url_for('websocket', session_id=session_id))) +
            SCRIPT_AFTER
        ))
        self._sessions[session_id] = (queue, script, result, rerender, unmount)
        logger.debug('session %s created for %s', session_id, request.url.path)

        def session_timeout():
            try:
                del self._sessions[session_id]
            except KeyError:
                return
            logger.debug('session %s timed out', session_id)
            unmount()

        loop = asyncio.get_running_loop()
        loop.call_later(self._session_timeout, session_timeout)

        return HTMLResponse(html_str(wrap(result, self._title, script)))

    async def _websocket(self, socket):
        session_id = socket.path_params['session_id']
        try:
            queue, script, result, rerender, unmount = (
                self._sessions.pop(session_id)
            )
        except KeyError:
            logger.warning('unknown session %s', session_id)
            await socket.close()
            return

        await socket.accept()
        logger.debug('session %s connected', session_id)

        async def next_render():
            changes = [await queue.get()]
            changes.extend(drain(queue))
            for change in changes:
                if change[0] != 'render':
                    raise ValueError(f'unknown change: {change[0]}')
            return rerender()

        receive_fut = asyncio.create_task(socket.receive_json())
        render_fut = asyncio.create_task(next_render())

        try:
            while True:
                await asyncio.wait(
                    [receive_fut, render_fut],
                    return_when=asyncio.FIRST_COMPLETED,
                )

                if receive_fut.done():
                    try:
                        event_type, *path = receive_fut.result()
                    except WebSocketDisconnect:
                        logger.debug('session %s disconnected', session_id)
                        return

                    page = wrap(result, self._title, script)
                    try:
                        target = Node.from_path(page, path)
                    except (IndexError, TypeError, ValueError):
                        logger.warning(
                            'session %s: no node at %r', session_id, path,
                        )
                    else:
                        dispatch(target, event_type)

                    receive_fut = asyncio.create_task(socket.receive_json())

                elif render_fut.done():
                    result = render_fut.result()
                    await socket.send_text(json.dumps(
                        ['body', html_str(result)],
                        separators=(',', ':'),
                    ))
                    render_fut = asyncio.create_task(next_render())
        finally:
            for fut in (receive_fut, render_fut):
                if not fut.done():
                    fut.cancel()
            unmount()
