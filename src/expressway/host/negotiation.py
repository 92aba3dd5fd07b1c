"""Content negotiation — maps callback and middleware results to Responses.

Whatever a middleware chain returns reaches the host here. isinstance-
based dispatch, no magic, fully predictable.
"""

import json as json_module
from typing import Any

from expressway.http.response import JSON_CONTENT_TYPE, Response
from expressway.middleware.protocol import Final, Intermediate


def negotiate(value: Any) -> Response:
    """Convert a chain result to a Response.

    Dispatch order:

    1. ``Response``              -> pass through
    2. ``Final`` / ``Intermediate`` -> negotiate the wrapped value
    3. ``None``                  -> 204, empty body
    4. ``bytes``                 -> 200, application/octet-stream
    5. ``dict`` / ``list``        -> 200, JSON-encoded
    6. ``(value, int)``          -> negotiate value, override status
    7. ``(value, int, dict)``    -> negotiate value, override status + headers
    8. anything else             -> 200, JSON-encoded
    """
    match value:
        case Response():
            return value
        case Final(response=inner) | Intermediate(value=inner):
            return negotiate(inner)
        case None:
            return Response(body="", status=204)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return _json_response(value)
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case _:
            return _json_response(value)


def _json_response(value: Any) -> Response:
    return Response(
        body=json_module.dumps(value, default=str),
        content_type=JSON_CONTENT_TYPE,
    )
