"""HTTP types — immutable request, chainable response, case-insensitive headers."""

from expressway.http.headers import Headers
from expressway.http.request import Request
from expressway.http.response import Response

__all__ = ["Headers", "Request", "Response"]
