"""Example value generation keyed by field-name heuristics.

Values come from a Faker instance owned by the generator. Pass a ``seed``
to get the same examples on every run; without one every run differs.

Patterns are plain substrings matched against the lower-cased field
name. A leading ``^`` anchors the pattern at the start of the name, a
trailing ``$`` at the end (``^ip$`` only matches ``ip`` itself).
"""

import calendar
import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal

from faker import Faker

from api_documentator.schema.types import FieldTypeResolver

logger = logging.getLogger(__name__)

Generator = Callable[[Faker], object]

_MISSING = object()

DEFAULT_LOCALE = "en_US"

NEGATIVE_FLAGS = ("disabled", "hidden", "deleted", "blocked", "banned", "expired", "archived")

_WINDOW_START = datetime(2020, 1, 1)
_WINDOW_END = datetime(2025, 12, 31, 23, 59, 59)
_BIRTH_START = datetime(1950, 1, 1)


def _float(f: Faker, low: float, high: float, digits: int = 2) -> float:
    return round(f.random.uniform(low, high), digits)


def _moment(f: Faker) -> datetime:
    """A datetime in 2020-2025, independent of the current clock."""
    span = int((_WINDOW_END - _WINDOW_START).total_seconds())
    return _WINDOW_START + timedelta(seconds=f.random_int(0, span))


def _iso8601(f: Faker) -> str:
    return _moment(f).isoformat(timespec="seconds")


def _birth_date(f: Faker) -> str:
    return (_BIRTH_START + timedelta(days=f.random_int(0, 365 * 55))).strftime("%Y-%m-%d")


def _semver(f: Faker) -> str:
    return f"{f.random_int(0, 5)}.{f.random_int(0, 20)}.{f.random_int(0, 50)}"


def _file_name(f: Faker) -> str:
    return f"{f.word()}.{f.file_extension()}"


DEFAULT_PATTERNS: list[tuple[str, Generator]] = [
    # Identification
    ("uuid", lambda f: f.uuid4()),
    ("slug", lambda f: f.slug()),

    # Dates & times go first: `updated_at` must not hit `date`
    ("_at$", _iso8601),
    ("datetime", _iso8601),
    ("timestamp", lambda f: int(calendar.timegm(_moment(f).timetuple()))),
    ("birthday", _birth_date),
    ("birth", _birth_date),
    ("date", lambda f: _moment(f).strftime("%Y-%m-%d")),
    ("timezone", lambda f: f.timezone()),
    ("time", lambda f: _moment(f).strftime("%H:%M:%S")),
    ("expires", _iso8601),

    # Personal
    ("first_name", lambda f: f.first_name()),
    ("last_name", lambda f: f.last_name()),
    ("full_name", lambda f: f.name()),
    ("username", lambda f: f.user_name()),
    ("user_name", lambda f: f.user_name()),
    ("filename", _file_name),
    ("file_name", _file_name),
    ("^name$", lambda f: f.name()),
    ("email", lambda f: f.safe_email()),
    ("phone", lambda f: f.phone_number()),
    ("mobile", lambda f: f.phone_number()),
    ("avatar", lambda f: f.image_url(width=200, height=200)),
    ("bio", lambda f: f.sentence(nb_words=10)),
    ("gender", lambda f: f.random_element(("male", "female", "other"))),
    ("^age$", lambda f: f.random_int(18, 80)),
    ("password", lambda f: "********"),

    # Content
    ("title", lambda f: f.sentence(nb_words=4)),
    ("headline", lambda f: f.sentence(nb_words=6)),
    ("subject", lambda f: f.sentence(nb_words=5)),
    ("description", lambda f: f.paragraph(nb_sentences=2)),
    ("summary", lambda f: f.paragraph(nb_sentences=1)),
    ("content", lambda f: "\n\n".join(f.paragraphs(nb=3))),
    ("body", lambda f: "\n\n".join(f.paragraphs(nb=3))),
    ("excerpt", lambda f: f.sentence(nb_words=15)),
    ("comment", lambda f: f.sentence(nb_words=10)),
    ("note", lambda f: f.sentence(nb_words=8)),
    ("message", lambda f: f.sentence(nb_words=12)),
    ("text", lambda f: f.text(max_nb_chars=200)),

    # Address
    ("address", lambda f: f.street_address()),
    ("street", lambda f: f.street_name()),
    ("city", lambda f: f.city()),
    ("country", lambda f: f.country()),
    ("zip", lambda f: f.postcode()),
    ("postcode", lambda f: f.postcode()),
    ("postal", lambda f: f.postcode()),
    ("latitude", lambda f: float(f.latitude())),
    ("longitude", lambda f: float(f.longitude())),
    ("^lat$", lambda f: float(f.latitude())),
    ("^lng$", lambda f: float(f.longitude())),
    ("^lon$", lambda f: float(f.longitude())),

    # Internet
    ("url", lambda f: f.url()),
    ("link", lambda f: f.url()),
    ("website", lambda f: f.url()),
    ("domain", lambda f: f.domain_name()),
    ("ipv6", lambda f: f.ipv6()),
    ("ipv4", lambda f: f.ipv4()),
    ("ip_address", lambda f: f.ipv4()),
    ("^ip$", lambda f: f.ipv4()),
    ("mac_address", lambda f: f.mac_address()),
    ("^mac$", lambda f: f.mac_address()),
    ("user_agent", lambda f: f.user_agent()),

    # Financial
    ("price", lambda f: _float(f, 10, 1000)),
    ("amount", lambda f: _float(f, 1, 10000)),
    ("cost", lambda f: _float(f, 1, 500)),
    ("total", lambda f: _float(f, 10, 5000)),
    ("balance", lambda f: _float(f, 0, 10000)),
    ("salary", lambda f: f.random_int(30000, 150000)),
    ("currency", lambda f: f.currency_code()),
    ("credit_card", lambda f: f.credit_card_number()),
    ("card_number", lambda f: f.credit_card_number()),
    ("iban", lambda f: f.iban()),
    ("swift", lambda f: f.swift()),

    # Quantities
    ("_count$", lambda f: f.random_int(1, 100)),
    ("^count$", lambda f: f.random_int(1, 100)),
    ("quantity", lambda f: f.random_int(1, 50)),
    ("stock", lambda f: f.random_int(0, 1000)),
    ("percent", lambda f: f.random_int(0, 100)),
    ("rating", lambda f: _float(f, 1, 5, 1)),
    ("score", lambda f: f.random_int(0, 100)),
    ("weight", lambda f: _float(f, 0.1, 100)),
    ("height", lambda f: f.random_int(100, 220)),
    ("width", lambda f: f.random_int(1, 1000)),
    ("length", lambda f: f.random_int(1, 1000)),
    ("^size$", lambda f: f.random_element(("S", "M", "L", "XL"))),
    ("position", lambda f: f.random_int(1, 50)),
    ("priority", lambda f: f.random_int(1, 10)),
    ("level", lambda f: f.random_int(1, 10)),

    # Status & flags
    ("status", lambda f: f.random_element(("active", "inactive", "pending"))),
    ("^state$", lambda f: f.random_element(("draft", "published", "archived"))),
    ("state", lambda f: f.state()),
    ("^type$", lambda f: f.random_element(("default", "premium", "basic"))),
    ("role", lambda f: f.random_element(("user", "admin", "moderator"))),
    ("active", lambda f: f.boolean(chance_of_getting_true=80)),
    ("enabled", lambda f: f.boolean(chance_of_getting_true=80)),
    ("visible", lambda f: f.boolean(chance_of_getting_true=80)),
    ("verified", lambda f: f.boolean(chance_of_getting_true=70)),
    ("confirmed", lambda f: f.boolean(chance_of_getting_true=70)),
    ("approved", lambda f: f.boolean(chance_of_getting_true=60)),
    ("published", lambda f: f.boolean(chance_of_getting_true=50)),
    ("featured", lambda f: f.boolean(chance_of_getting_true=20)),

    # Files & media
    ("extension", lambda f: f.file_extension()),
    ("mime", lambda f: f.mime_type()),
    ("thumbnail", lambda f: f.image_url(width=150, height=150)),
    ("logo", lambda f: f.image_url(width=200, height=200)),
    ("icon", lambda f: f.image_url(width=64, height=64)),
    ("image", lambda f: f.image_url(width=640, height=480)),
    ("photo", lambda f: f.image_url(width=640, height=480)),
    ("picture", lambda f: f.image_url(width=640, height=480)),
    ("video", lambda f: f"https://example.com/video/{f.uuid4()}.mp4"),
    ("audio", lambda f: f"https://example.com/audio/{f.uuid4()}.mp3"),
    ("file", lambda f: f"/uploads/{_file_name(f)}"),
    ("path", lambda f: f.file_path()),

    # Company & business
    ("company", lambda f: f.company()),
    ("organization", lambda f: f.company()),
    ("job", lambda f: f.job()),
    ("department", lambda f: f.random_element(("Engineering", "Marketing", "Sales", "HR"))),
    ("industry", lambda f: f.random_element(("Technology", "Finance", "Healthcare", "Retail"))),

    # Technical
    ("token", lambda f: f.sha256()),
    ("hash", lambda f: f.sha1()),
    ("secret", lambda f: f.sha1()),
    ("api_key", lambda f: f.md5()),
    ("barcode", lambda f: f.ean13()),
    ("sku", lambda f: f.bothify(text="SKU-####").upper()),
    ("serial", lambda f: f.bothify(text="SN-####-????").upper()),
    ("code", lambda f: f.bothify(text="??###").upper()),
    ("version", _semver),
    ("locale", lambda f: f.locale()),
    ("language", lambda f: f.language_code()),
    ("color", lambda f: f.hex_color()),
    ("hex", lambda f: f.hex_color()),
    ("rgb", lambda f: [int(c) for c in f.rgb_color().split(",")]),
    ("_name$", lambda f: " ".join(f.words(nb=2))),
]


def _matches(pattern: str, field: str) -> bool:
    if pattern.startswith("^") and pattern.endswith("$"):
        return field == pattern[1:-1]
    if pattern.startswith("^"):
        return field.startswith(pattern[1:])
    if pattern.endswith("$"):
        return field.endswith(pattern[:-1])
    return pattern in field


def _fits(value, type_: str | None) -> bool:
    """Whether a generated value is usable for a field declared as ``type_``."""
    if type_ is None:
        return True
    if isinstance(value, bool):
        return type_ == "boolean"
    if isinstance(value, int):
        return type_ in ("integer", "number")
    if isinstance(value, float):
        return type_ == "number"
    if isinstance(value, str):
        return type_ == "string"
    if isinstance(value, list):
        return type_ == "array"
    return type_ == "object"


class ExampleGenerator:
    """Generates plausible example values from field names and types."""

    def __init__(self, locale: str | None = None, seed: int | None = None, patterns=None):
        self._faker = Faker(locale or DEFAULT_LOCALE)
        if seed is not None:
            self._faker.seed_instance(seed)
        self._custom: list[tuple[str, Generator]] = []
        self._types = FieldTypeResolver()
        for pattern, generator in (patterns or ()):
            self.add_pattern(pattern, generator)

    @property
    def faker(self) -> Faker:
        return self._faker

    def add_pattern(self, pattern: str, generator: Generator) -> "ExampleGenerator":
        """Register a pattern that takes precedence over the built-in table."""
        self._custom.append((pattern.lower(), generator))
        return self

    def value(self, field: str, type_: str | None = None):
        """Example value for ``field``: name patterns first, then the type."""
        found = self._from_patterns(field.lower(), type_)
        if found is not _MISSING:
            return found
        return self.generate_value(field, type_ or self._types.from_field_name(field))

    def generate_value(self, field: str, type_: str = "string"):
        """Type-first example value, refined by field name."""
        f = field.lower()

        if type_ == "integer":
            return self._integer(f)
        if type_ == "number":
            return self._number(f)
        if type_ == "boolean":
            return not any(flag in f for flag in NEGATIVE_FLAGS)
        if type_ == "array":
            return []
        if type_ == "object":
            return {}

        found = self._from_patterns(f, "string")
        if found is not _MISSING:
            return found
        return self._faker.word()

    def _from_patterns(self, name: str, type_: str | None):
        # the first matching pattern decides; a value of the wrong type is discarded
        for pattern, generator in [*self._custom, *DEFAULT_PATTERNS]:
            if not _matches(pattern, name):
                continue
            try:
                value = generator(self._faker)
            except AttributeError:
                # provider missing for the configured locale
                logger.debug("No faker provider for pattern %r (locale %s)", pattern, self._faker.locales)
                return _MISSING
            return _json_safe(value) if _fits(value, type_) else _MISSING
        return _MISSING

    def generate_object(self, attributes: dict | None, id: int = 1) -> dict:
        """Flat example record: ``id`` plus one value per attribute."""
        example = {"id": id}

        if not attributes:
            example["created_at"] = _iso8601(self._faker)
            example["updated_at"] = _iso8601(self._faker)
            return example

        for name, config in attributes.items():
            if name == "id":
                continue
            example[name] = self.value(name, (config or {}).get("type", "string"))

        return example

    def generate_json_api_resource(self, resource_type: str, attributes: dict | None, id: int = 1) -> dict:
        """Example JSON:API resource object (``type``, ``id``, ``attributes``, ``links``)."""
        record = self.generate_object(attributes, id)
        record.pop("id")

        return {
            "type": resource_type,
            "id": str(id),
            "attributes": record,
            "links": {"self": f"/{resource_type}/{id}"},
        }

    def random_int(self, min: int = 1, max: int = 100) -> int:
        return self._faker.random_int(min, max)

    def _integer(self, f: str) -> int:
        r = self._faker.random_int

        if "per_page" in f or "limit" in f:
            return 15
        if "page" in f:
            return 1
        if "offset" in f or "skip" in f:
            return 0
        if f == "age" or f.endswith("_age"):
            return r(18, 80)
        if "year" in f:
            return _moment(self._faker).year
        if "month" in f:
            return r(1, 12)
        if "day" in f:
            return r(1, 28)
        if "hour" in f:
            return r(0, 23)
        if "minute" in f:
            return r(0, 59)
        if f == "count" or f.endswith("_count") or "quantity" in f:
            return r(1, 100)
        if "stock" in f:
            return r(0, 1000)
        if "total" in f:
            return r(50, 500)
        if "order" in f or "position" in f or "sort" in f:
            return r(1, 10)
        if "priority" in f or "level" in f:
            return r(1, 5)
        if "percent" in f:
            return r(0, 100)
        if "rating" in f or "score" in f:
            return r(1, 5)
        if "width" in f or "height" in f:
            return r(100, 1920)
        if "size" in f:
            return r(100, 10000)
        if "duration" in f:
            return r(60, 7200)
        if "attempts" in f or "retries" in f:
            return r(1, 5)
        if f.endswith("_id"):
            return r(1, 1000)
        return r(1, 100)

    def _number(self, f: str) -> float:
        fk = self._faker

        if "price" in f:
            return _float(fk, 10, 1000)
        if "amount" in f or "sum" in f:
            return _float(fk, 1, 10000)
        if "cost" in f:
            return _float(fk, 1, 500)
        if "total" in f:
            return _float(fk, 10, 5000)
        if "balance" in f:
            return _float(fk, 0, 10000)
        if "tax" in f:
            return _float(fk, 0, 100)
        if "discount" in f:
            return _float(fk, 0, 50)
        if "rate" in f and "rating" not in f:
            return _float(fk, 0, 1)
        if "percent" in f:
            return _float(fk, 0, 100, 1)
        if "latitude" in f or f == "lat":
            return float(fk.latitude())
        if "longitude" in f or f in ("lng", "lon"):
            return float(fk.longitude())
        if "weight" in f:
            return _float(fk, 0.1, 100)
        if "rating" in f or "score" in f:
            return _float(fk, 1, 5, 1)
        return _float(fk, 0, 1000)


def _json_safe(value):
    if isinstance(value, Decimal):
        return float(value)
    return value
