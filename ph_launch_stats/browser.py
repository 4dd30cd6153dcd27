from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

from playwright._impl._errors import TargetClosedError
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .errors import PageAccessError

T = TypeVar("T")

_ATTRS_JS = "(els, name) => els.map((el) => el.getAttribute(name))"


class PlaywrightPage:
    """
    PageAccess over a live Playwright page.

    Every read is bounded by `lookup_timeout_ms`. A read that times out or
    fails on its element counts as "not found"; a page that has been closed or
    crashed raises PageAccessError.
    """

    def __init__(self, page: Page, url: str, *, lookup_timeout_ms: int = 2000) -> None:
        self._page = page
        self._url = url
        self._timeout_ms = int(lookup_timeout_ms)
        self._crashed = False
        page.on("crash", self._on_crash)

    @property
    def url(self) -> str:
        return self._url

    def _on_crash(self, page: Page) -> None:
        self._crashed = True

    def _is_dead(self, err: PlaywrightError) -> bool:
        # A crashed page stays open but every call fails with "Target crashed".
        return (
            self._crashed
            or self._page.is_closed()
            or isinstance(err, TargetClosedError)
            or "target crashed" in str(err).lower()
        )

    async def _guard(self, read: Callable[[], Awaitable[T]], default: T) -> T:
        try:
            return await read()
        except PlaywrightTimeoutError:
            return default
        except PlaywrightError as e:
            if self._is_dead(e):
                raise PageAccessError(
                    f"Page closed or crashed while reading {self._url}: {e}"
                ) from e
            return default

    async def first_text(self, selector: str) -> str | None:
        loc = self._page.locator(selector).first

        async def _read() -> str | None:
            if await loc.count() == 0:
                return None
            return await loc.inner_text(timeout=self._timeout_ms)

        return await self._guard(_read, None)

    async def first_attr(self, selector: str, name: str) -> str | None:
        loc = self._page.locator(selector).first

        async def _read() -> str | None:
            if await loc.count() == 0:
                return None
            return await loc.get_attribute(name, timeout=self._timeout_ms)

        return await self._guard(_read, None)

    async def all_texts(self, selector: str) -> list[str]:
        elements = await self._guard(self._page.locator(selector).all, [])
        out: list[str] = []
        for el in elements:
            text = await self._guard(
                lambda el=el: el.inner_text(timeout=self._timeout_ms), None
            )
            if text is not None:
                out.append(text)
        return out

    async def all_attrs(self, selector: str, name: str) -> list[str]:
        async def _read() -> list[Any]:
            return await self._page.locator(selector).evaluate_all(_ATTRS_JS, name)

        values = await self._guard(_read, [])
        return [str(v) for v in values if v is not None]

    async def title(self) -> str | None:
        return await self._guard(self._page.title, None)


async def settle_page(
    page: Page, *, network_idle_timeout_ms: int, settle_ms: int
) -> bool:
    """
    Give client-side rendering a chance to finish.

    Waits for network idle (bounded) and then a short fixed delay. Returns
    whether network idle was reached; not reaching it is not an error.
    """
    idle = True
    try:
        await page.wait_for_load_state("networkidle", timeout=network_idle_timeout_ms)
    except PlaywrightError:
        idle = False

    if settle_ms > 0:
        await page.wait_for_timeout(settle_ms)
    return idle
