from typing import Iterator, List, Optional, Tuple


class Query:
    """
    Class representing the URI query parameters.

    The parameters are held as an ordered list of (key, value) pairs where a value of None is a key given without
    '='. Keys are not required to be unique; lookups and updates act on the first occurrence of a key.
    """

    _args: List[Tuple[str, Optional[str]]]

    def __init__(self, args: Optional[List[Tuple[str, Optional[str]]]] = None):
        self._args = list(args) if args else []

    @classmethod
    def from_string(cls, query: str) -> "Query":
        """
        Parse a query string of '&' separated 'key' or 'key=value' entries.

        :param query: The query string, without the leading '?'.
        :return: A new Query.
        """
        args = []
        if query:
            for arg in query.split("&"):
                key, sep, value = arg.partition("=")
                args.append((key, value if sep else None))
        return cls(args)

    @classmethod
    def from_opaque(cls, query: str) -> "Query":
        """
        Wrap a pre-built query string as a single key without a value.
        """
        return cls([(query, None)])

    def _index(self, key: str) -> int:
        for i, (name, _) in enumerate(self._args):
            if name == key:
                return i
        return -1

    def __str__(self):
        return "&".join(k if v is None else f"{k}={v}" for k, v in self._args)

    def __repr__(self):
        return f"Query({str(self)!r})"

    def __bool__(self):
        return len(self._args) > 0

    def __len__(self):
        return len(self._args)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __eq__(self, other):
        if not isinstance(other, Query):
            return NotImplemented
        return self._args == other._args

    def copy(self) -> "Query":
        return Query(self._args)

    def items(self) -> List[Tuple[str, Optional[str]]]:
        return list(self._args)

    def keys(self) -> List[str]:
        keys = []
        for name, _ in self._args:
            if name not in keys:
                keys.append(name)
        return keys

    def has(self, key: str) -> bool:
        return self._index(key) >= 0

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        i = self._index(key)
        if i < 0:
            return default
        value = self._args[i][1]
        return default if value is None else value

    def set(self, key: str, value: Optional[str]) -> None:
        """
        Set the value of key, keeping its position if it is already present and appending it otherwise.

        :param key: The parameter name.
        :param value: The parameter value, or None for a bare key.
        """
        i = self._index(key)
        if i < 0:
            self._args.append((key, value))
        else:
            self._args[i] = (key, value)

    def remove(self, key: str) -> bool:
        i = self._index(key)
        if i < 0:
            return False
        del self._args[i]
        return True

    def map(self, func) -> "Query":
        """
        Return a new Query with func applied to every key and value.
        """
        return Query([(func(k), None if v is None else func(v)) for k, v in self._args])
