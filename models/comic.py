"""
xkcd comic record.

Mirrors the JSON document served at https://xkcd.com/<n>/info.0.json. The
same field names are used in the persisted comics.json, so a record can be
written back exactly as it was received.
"""
import os
from dataclasses import dataclass, fields
from typing import Optional, Dict, Any

from exceptions import ParseFailure
from helpers import img_path

# xkcd deliberately has no comic #404; it is represented by a placeholder
NOT_FOUND_COMIC_NUMBER = 404

NOT_FOUND_ALT_TEXT = (
    "I have always been of the opinion that http://xkcd.com/404/ is an actual comic, "
    "if a slightly avant-garde one. I actually went out of my way to modify the 'random' "
    "button to include it, but that annoyed too many people—most of whom reasonably "
    "assumed it was a bug—and I eventually undid it."
)


@dataclass
class Comic:
    """One xkcd comic. Dates are kept as the strings xkcd sends (not zero-padded)."""
    num: int = 0
    year: str = ""
    month: str = ""
    day: str = ""
    title: str = ""
    img: str = ""
    alt: str = ""
    link: str = ""
    news: str = ""
    safe_title: str = ""
    transcript: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Comic":
        """
        Build a Comic from a decoded JSON object.

        Missing or null fields fall back to 0 / "". Anything that is not an
        object, or a ``num`` that is not an integer, raises ParseFailure.
        """
        if not isinstance(data, dict):
            raise ParseFailure(f"Expected a comic object, got {type(data).__name__}")

        num = data.get("num")
        if num is None:
            num = 0
        if isinstance(num, bool) or not isinstance(num, int):
            try:
                num = int(num)
            except (TypeError, ValueError) as e:
                raise ParseFailure(f"Invalid comic number: {num!r}") from e

        values = {"num": num}
        for f in fields(cls):
            if f.name == "num":
                continue
            value = data.get(f.name)
            values[f.name] = "" if value is None else str(value)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "num": self.num,
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "title": self.title,
            "img": self.img,
            "alt": self.alt,
            "link": self.link,
            "news": self.news,
            "safe_title": self.safe_title,
            "transcript": self.transcript,
        }

    @property
    def image_extension(self) -> str:
        """Extension of the last path segment of ``img``; "" when it has none."""
        segment = self.img.rsplit("/", 1)[-1]
        if "." not in segment:
            return ""
        return segment.rsplit(".", 1)[1]

    @property
    def img_2x(self) -> Optional[str]:
        """High resolution variant (``foo.png`` -> ``foo_2x.png``), PNG only."""
        if not self.img.endswith(".png"):
            return None
        return self.img[:-len(".png")] + "_2x.png"

    def img_path(self, cache_dir=None) -> str:
        return img_path(self.num, self.image_extension, cache_dir)

    def has_image_downloaded(self, cache_dir=None) -> bool:
        return os.path.exists(self.img_path(cache_dir))


def not_found_comic() -> Comic:
    """The placeholder stored for comic #404."""
    return Comic(
        num=NOT_FOUND_COMIC_NUMBER,
        year="2008",
        month="4",
        day="1",
        title="404 Not Found",
        img="",
        alt=NOT_FOUND_ALT_TEXT,
        link="",
        news="",
        safe_title="404 Not Found",
        transcript="nginx",
    )
