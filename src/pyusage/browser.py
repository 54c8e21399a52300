"""Browser host abstraction for analytics running inside a web page.

:class:`AnalyticsBrowser` only talks to a :class:`BrowserHost`.
:class:`PyodideHost` is the real implementation for Pyodide, where the
DOM is reachable through the ``js`` module.
"""

from __future__ import annotations

from collections.abc import Iterator, MutableMapping
from typing import Any, Protocol


class BrowserHost(Protocol):
    """What the browser adapters need from the page they run in."""

    @property
    def local_storage(self) -> MutableMapping[str, str]: ...

    @property
    def screen_width(self) -> int: ...

    @property
    def screen_height(self) -> int: ...

    @property
    def pixel_depth(self) -> int: ...

    @property
    def viewport_width(self) -> int: ...

    @property
    def viewport_height(self) -> int: ...

    @property
    def language(self) -> str | None: ...

    async def request(self, url: str, *, method: str, send_data: str) -> Any: ...


class _LocalStorage(MutableMapping[str, str]):
    """Mapping view over a DOM ``Storage`` object."""

    def __init__(self, storage: Any) -> None:
        self._storage = storage

    def __getitem__(self, key: str) -> str:
        value = self._storage.getItem(key)
        if value is None:
            raise KeyError(key)
        return str(value)

    def __setitem__(self, key: str, value: str) -> None:
        self._storage.setItem(key, value)

    def __delitem__(self, key: str) -> None:
        if self._storage.getItem(key) is None:
            raise KeyError(key)
        self._storage.removeItem(key)

    def __iter__(self) -> Iterator[str]:
        for index in range(self._storage.length):
            yield str(self._storage.key(index))

    def __len__(self) -> int:
        return int(self._storage.length)


class PyodideHost:
    """Browser host backed by the Pyodide ``js`` bridge."""

    def __init__(self) -> None:
        import js  # Only importable inside Pyodide.

        self._window = js.window
        self._local_storage = _LocalStorage(self._window.localStorage)

    @property
    def local_storage(self) -> MutableMapping[str, str]:
        return self._local_storage

    @property
    def screen_width(self) -> int:
        return int(self._window.screen.width)

    @property
    def screen_height(self) -> int:
        return int(self._window.screen.height)

    @property
    def pixel_depth(self) -> int:
        return int(self._window.screen.pixelDepth)

    @property
    def viewport_width(self) -> int:
        return int(self._window.document.documentElement.clientWidth)

    @property
    def viewport_height(self) -> int:
        return int(self._window.document.documentElement.clientHeight)

    @property
    def language(self) -> str | None:
        language = self._window.navigator.language
        return None if language is None else str(language)

    async def request(self, url: str, *, method: str, send_data: str) -> Any:
        from pyodide.http import pyfetch

        return await pyfetch(url, method=method, body=send_data)
