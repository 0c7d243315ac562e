"""Read-only string multimap shared by request headers and query params."""

from collections.abc import Iterable, Iterator, Mapping
from urllib.parse import parse_qsl


class MultiDict(Mapping[str, str]):
    """An immutable mapping where each key may carry several values.

    ``__getitem__`` returns the first value; ``get_list`` returns all.
    With ``fold_case=True`` keys are matched case-insensitively, as HTTP
    header names are.
    """

    __slots__ = ("_data", "_fold_case")

    def __init__(self, pairs: Iterable[tuple[str, str]] = (), *, fold_case: bool = False) -> None:
        data: dict[str, list[str]] = {}
        for key, value in pairs:
            data.setdefault(key.lower() if fold_case else key, []).append(value)
        self._data = data
        self._fold_case = fold_case

    @classmethod
    def from_raw_headers(cls, raw: Iterable[tuple[bytes, bytes]]) -> "MultiDict":
        """Build case-insensitive headers from ASGI ``(name, value)`` byte pairs."""
        return cls(
            ((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw),
            fold_case=True,
        )

    @classmethod
    def from_query_string(cls, query_string: bytes) -> "MultiDict":
        """Parse an URL-encoded query string, keeping blank values."""
        return cls(parse_qsl(query_string.decode("latin-1"), keep_blank_values=True))

    def _key(self, key: str) -> str:
        return key.lower() if self._fold_case else key

    def __getitem__(self, key: str) -> str:
        return self._data[self._key(key)][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._key(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def get_list(self, key: str) -> list[str]:
        """Return every value for *key* (empty list when missing)."""
        return list(self._data.get(self._key(key), ()))
