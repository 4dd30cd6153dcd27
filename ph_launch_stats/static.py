from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import Tag


def _clean(text: str) -> str:
    return " ".join(text.split())


def _attr_value(el: Tag, name: str) -> str | None:
    value = el.get(name)
    if value is None:
        return None
    # Multi-valued attributes (rel, class) come back as lists.
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


class SoupPage:
    """PageAccess over a static BeautifulSoup snapshot of the fetched HTML."""

    def __init__(self, source: str | bytes | BeautifulSoup, url: str) -> None:
        if isinstance(source, BeautifulSoup):
            self._soup = source
        else:
            self._soup = BeautifulSoup(source, "html.parser")
        self._url = url

    @property
    def url(self) -> str:
        return self._url

    async def first_text(self, selector: str) -> str | None:
        el = self._soup.select_one(selector)
        if el is None:
            return None
        return _clean(el.get_text())

    async def first_attr(self, selector: str, name: str) -> str | None:
        el = self._soup.select_one(selector)
        if el is None:
            return None
        return _attr_value(el, name)

    async def all_texts(self, selector: str) -> list[str]:
        return [_clean(el.get_text()) for el in self._soup.select(selector)]

    async def all_attrs(self, selector: str, name: str) -> list[str]:
        out: list[str] = []
        for el in self._soup.select(selector):
            value = _attr_value(el, name)
            if value is not None:
                out.append(value)
        return out

    async def title(self) -> str | None:
        if self._soup.title is None:
            return None
        return _clean(self._soup.title.get_text())
