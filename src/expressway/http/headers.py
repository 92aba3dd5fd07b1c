"""Read-only, case-insensitive request headers.

Built once from the ASGI scope. Repeated fields are folded into one
comma-separated value, so a middleware sees a single string per name.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Header mapping keyed by lowercase field name.

    Usage::

        headers = Headers({"X-Api-Key": "secret"})
        headers["x-api-key"]          # "secret"
        headers.get("authorization")  # None
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, str] | None = None) -> None:
        self._fields: dict[str, str] = {
            name.lower(): value for name, value in (fields or {}).items()
        }

    @classmethod
    def from_asgi(cls, raw: Iterable[tuple[bytes, bytes]]) -> "Headers":
        """Decode ASGI header pairs, joining repeats with ``", "``."""
        fields: dict[str, str] = {}
        for raw_name, raw_value in raw:
            name = raw_name.decode("latin-1").lower()
            value = raw_value.decode("latin-1")
            fields[name] = f"{fields[name]}, {value}" if name in fields else value
        return cls(fields)

    def __getitem__(self, key: str) -> str:
        return self._fields[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Headers({self._fields!r})"
