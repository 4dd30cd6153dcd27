from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterable


def dedupe_texts(values: Iterable[str | None]) -> tuple[str, ...]:
    """Drop blanks and exact repeats, keeping first-seen order."""
    out: list[str] = []
    seen: set[str] = set()
    for item in values:
        text = (item or "").strip()
        if not text or text in seen:
            continue
        seen.add(text)
        out.append(text)
    return tuple(out)


@dataclass(frozen=True)
class PostRecord:
    """One extracted post page, as appended to the dataset."""

    title: str
    tagline: str
    votes: str
    comments: str
    makers: tuple[str, ...]
    topics: tuple[str, ...]
    product_url: str
    ph_url: str
    slug: str
    posted_at: str
    extracted_at: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "makers", dedupe_texts(self.makers))
        object.__setattr__(self, "topics", dedupe_texts(self.topics))

    def to_item(self) -> dict[str, Any]:
        item = asdict(self)
        item["makers"] = list(self.makers)
        item["topics"] = list(self.topics)
        return item
