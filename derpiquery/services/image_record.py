"""Typed, permissive views over Derpibooru image JSON.

Every accessor is a pure function of the underlying JSON object. Absent or
ill-typed fields yield the zero value of the accessor's type instead of
raising: 0, "", False, or None for the creation date. The API has renamed
fields before (``id_number`` became a string ``id`` in July 2016), so a
record must keep working when the schema drifts.
"""

import copy
import json
import logging
import posixpath
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

_DECIMAL_RE = re.compile(r"^[+-]?[0-9]+$")


# ── Helper Functions ─────────────────────────────────────────────────────────

def _load_json(data: bytes | str):
    """Decode a JSON buffer, returning None when it is not valid JSON."""
    try:
        return json.loads(data)
    except (TypeError, ValueError) as e:
        logger.warning("Ignoring malformed JSON payload: %s", e)
        return None


def _file_stem(name: str) -> str:
    """Everything before the final '.', or the whole name when there is none."""
    stem, dot, _ = name.rpartition(".")
    return stem if dot else name


def _parse_decimal(value: str) -> int:
    text = value.strip()
    if not _DECIMAL_RE.match(text):
        return 0
    return int(text)


def _parse_iso_datetime(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp. Values without an offset are taken as UTC."""
    if not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ── Image Record ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ImageRecord:
    """Read-only view over one image object from the search API."""

    data: dict = field(default_factory=dict, hash=False)

    def __post_init__(self):
        data = self.data if isinstance(self.data, dict) else {}
        # Detach from the caller's object
        object.__setattr__(self, "data", copy.deepcopy(data))

    @classmethod
    def from_bytes(cls, data: bytes | str) -> "ImageRecord":
        """Build a record from a raw JSON document.

        Invalid JSON, or a document whose top level is not an object, gives
        an empty record.
        """
        parsed = _load_json(data)
        return cls(parsed if isinstance(parsed, dict) else {})

    # Typed field readers

    def _str(self, key: str) -> str:
        value = self.data.get(key)
        return value if isinstance(value, str) else ""

    def _int(self, key: str) -> int:
        value = self.data.get(key)
        if isinstance(value, bool):
            return 0
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return 0

    def _bool(self, key: str) -> bool:
        value = self.data.get(key)
        return value if isinstance(value, bool) else False

    # Identity

    @property
    def id(self) -> int:
        value = self.data.get("id")
        if value is None:
            # Pre-2016 responses
            value = self.data.get("id_number")
        if isinstance(value, str):
            return _parse_decimal(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return 0

    @property
    def image_url(self) -> str:
        image = self._str("image")
        return f"https:{image}" if image else ""

    @property
    def name(self) -> str:
        path = urlsplit(self.image_url).path
        return _file_stem(posixpath.basename(path))

    @property
    def original_name(self) -> str:
        return _file_stem(self._str("file_name"))

    @property
    def uploader(self) -> str:
        return self._str("uploader")

    @property
    def format(self) -> str:
        return self._str("original_format")

    @property
    def sha512_hash(self) -> str:
        return self._str("sha512_hash")

    # Dates

    @property
    def creation_date(self) -> datetime | None:
        return _parse_iso_datetime(self._str("created_at"))

    @property
    def year(self) -> int:
        created = self.creation_date
        return created.year if created else 0

    @property
    def month(self) -> int:
        created = self.creation_date
        return created.month if created else 0

    @property
    def day(self) -> int:
        created = self.creation_date
        return created.day if created else 0

    # Counters and dimensions

    @property
    def score(self) -> int:
        return self._int("score")

    @property
    def upvotes(self) -> int:
        return self._int("upvotes")

    @property
    def downvotes(self) -> int:
        return self._int("downvotes")

    @property
    def faves(self) -> int:
        return self._int("faves")

    @property
    def comments(self) -> int:
        return self._int("comments")

    @property
    def width(self) -> int:
        return self._int("width")

    @property
    def height(self) -> int:
        return self._int("height")

    @property
    def aspect_ratio(self) -> int:
        return self._int("aspect_ratio")

    # Flags

    @property
    def is_rendered(self) -> bool:
        return self._bool("is_rendered")

    @property
    def is_optimized(self) -> bool:
        return self._bool("is_optimized")

    @property
    def raw_json(self) -> dict:
        """A copy of the underlying object, for fields without an accessor."""
        return copy.deepcopy(self.data)


@dataclass
class SearchPage:
    images: list[ImageRecord] = field(default_factory=list)
    total: int = 0


# ── Splitting ────────────────────────────────────────────────────────────────

def split_array(array: list | None) -> list[ImageRecord]:
    """Create one record per array element, keeping order.

    Elements that are not objects become empty records.
    """
    if not array:
        return []
    return [ImageRecord(item if isinstance(item, dict) else {}) for item in array]


def parse_search_page(payload) -> SearchPage:
    """Unwrap a ``search.json`` response: ``{"search": [...], "total": n}``.

    Accepts the raw body (bytes or str) or an already-parsed value.
    """
    if isinstance(payload, (bytes, bytearray, str)):
        payload = _load_json(payload)
    if not isinstance(payload, dict):
        return SearchPage()

    items = payload.get("search")
    images = split_array(items if isinstance(items, list) else None)

    total = payload.get("total")
    if isinstance(total, bool) or not isinstance(total, int):
        total = len(images)

    return SearchPage(images=images, total=total)
