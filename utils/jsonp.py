# utils/jsonp.py
import re
from flask import current_app, request

CALLBACK_PARAMS = ('callback', 'jscallback', 'jsonp', 'jsoncallback')
UNSAFE_CALLBACK_CHARS = re.compile(r'[^a-zA-Z0-9_$.]')


def callback_name():
    """Sanitized JSONP callback from the query string, or None."""
    for param in CALLBACK_PARAMS:
        callback = request.args.get(param)
        if callback:
            return UNSAFE_CALLBACK_CHARS.sub('', callback)
    return None


def jsonp(data, status=200, headers=None):
    """JSON response, wrapped as ``callback(<json>)`` when a callback was requested."""
    body = current_app.json.dumps(data)
    callback = callback_name()
    if callback:
        return current_app.response_class(
            f"{callback}({body})",
            status=status,
            headers=headers,
            content_type='text/javascript; charset=utf-8',
        )
    return current_app.response_class(
        body,
        status=status,
        headers=headers,
        content_type='application/json; charset=utf-8',
    )
