"""Field extractors.

Each ``extract_*`` function takes a :class:`Scope` and returns one typed value
or ``None``. The ``*_STRATEGIES`` tuples are tried in order and the first hit
wins, so supporting a new markup variant means appending a strategy.
"""

from __future__ import annotations

import re
from typing import List, Optional
from urllib.parse import urljoin

from listing_sync.models import AVAILABILITY_UNSPECIFIED, AVAILABLE_NOW, DEFAULT_CATEGORY

from .scope import DETAIL, Scope, Strategy, first_match, node_text, normalize_space


_AMOUNT = r"(\d{1,3}(?:,\d{3})+|\d+)(\.\d{1,2})?"
_COUNT = r"(\d{1,3}(?:,\d{3})+|\d+)"

RENT_LABEL_RE = re.compile(r"\b(?:RENT|Rent)\s*:?\s*\$?\s*" + _AMOUNT)
# Per-area rates ("$24.00/yr", "$2/sf") are not the monthly price
CURRENCY_RE = re.compile(
    r"\$\s?" + _AMOUNT + r"(?!\d|[.,]\d|\s*/\s*(?:yr|year|sf|sq))",
    re.IGNORECASE,
)
AREA_LABEL_RE = re.compile(r"\b(?:square[ \t]+feet|sq\.?[ \t]*ft\b\.?)\s*:?\s*" + _COUNT, re.IGNORECASE)
# Number and unit share one text node
AREA_UNIT_RE = re.compile(
    _COUNT + r"[ \t]*(?:SF\b|sq\.?[ \t]*ft\b\.?|square[ \t]+f(?:ee|oo)t\b|sqft\b|ft²)",
    re.IGNORECASE,
)
RATE_LABEL_RE = re.compile(r"RENT\s*/\s*SF\s*:?\s*\$?\s*(\d[\d,]*(?:\.\d+)?)\s*/\s*yr", re.IGNORECASE)
RATE_TOKEN_RE = re.compile(r"\$\s?(\d[\d,]*(?:\.\d+)?)\s*/\s*(?:yr|sf)\b", re.IGNORECASE)
ADDRESS_RE = re.compile(
    r"\b\d+[ \t]+[A-Za-z0-9 \t.,#'-]+?\s*,\s*[A-Za-z][A-Za-z \t.'-]*?\s*,\s*[A-Z]{2}[ \t]*\d{5}(?:-\d{4})?"
)
CITY_RE = re.compile(r",\s*([A-Za-z][A-Za-z .'-]*?)\s*,\s*[A-Z]{2}\s*\d{5}")

TITLE_BOILERPLATE_RE = re.compile(r"^(?:View|Apply|Map|Details|Current|Rental)\b", re.IGNORECASE)
TITLE_MIN, TITLE_MAX = 4, 200

DESCRIPTION_BOILERPLATE = ("Privacy Policy",)
DESCRIPTION_MIN = 30
DESCRIPTION_LIMIT = 2000
SENTENCE_LIMIT = 300
SENTENCE_RE = re.compile(r"[A-Z][a-z][^.!?]{47,497}[.!?]")

AVAILABLE_NOW_RE = re.compile(r"\bavailable\s*:?\s*now\b", re.IGNORECASE)
_MONTH = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?"
    r"|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\.?"
)
_AVAILABLE_LABEL = r"\bavailable\s*:?\s*(?:on\s+|from\s+)?"
AVAILABLE_NUMERIC_RE = re.compile(_AVAILABLE_LABEL + r"(\d{1,2}/\d{1,2}/\d{2,4})\b", re.IGNORECASE)
AVAILABLE_MONTH_DAY_RE = re.compile(
    _AVAILABLE_LABEL + r"(" + _MONTH + r"\s+\d{1,2},?\s*\d{4})\b", re.IGNORECASE
)
AVAILABLE_MONTH_YEAR_RE = re.compile(_AVAILABLE_LABEL + r"(" + _MONTH + r"\s+\d{4})\b", re.IGNORECASE)

COMMERCIAL_TYPE_RE = re.compile(r"Commercial\s*Type\s*:\s*([A-Za-z][\w-]*)", re.IGNORECASE)
LEASE_TYPE_RE = re.compile(r"Lease\s*Type\s*:\s*([A-Za-z][\w-]*)", re.IGNORECASE)
PROPERTY_WORD_RE = re.compile(
    r"\b(office|retail|industrial|warehouse|mixed[- ]use|medical|flex)\b", re.IGNORECASE
)
UTILITIES_RE = re.compile(r"Utilities\s*Included\s*:\s*([^\n]+)", re.IGNORECASE)

IMAGE_ATTRS = ("data-src", "data-original", "src")
IMAGE_EXCLUDE = ("large.png", "logo", "place_holder", "placeholder")
LOGO_MARKERS = ("large.png", "logo")
ASSET_HOST = "images.cdn.appfolio.com"


def _number(raw: str, decimals: Optional[str] = None) -> Optional[float]:
    try:
        return float(raw.replace(",", "") + (decimals or ""))
    except ValueError:
        return None


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."


# ---------- price ----------

def _price_from_rent_label(scope: Scope) -> Optional[float]:
    m = RENT_LABEL_RE.search(scope.text)
    return _number(m.group(1), m.group(2)) if m else None


def _price_from_currency(scope: Scope) -> Optional[float]:
    m = CURRENCY_RE.search(scope.text)
    return _number(m.group(1), m.group(2)) if m else None


PRICE_STRATEGIES = (
    Strategy("rent_label", _price_from_rent_label, frozenset({DETAIL})),
    Strategy("currency_token", _price_from_currency),
)


def extract_price(scope: Scope) -> Optional[float]:
    """Monthly price, e.g. ``$1,234.56``; a ``RENT`` label wins on detail pages."""
    return first_match(PRICE_STRATEGIES, scope)


# ---------- area ----------

def _area_from_label(scope: Scope) -> Optional[int]:
    m = AREA_LABEL_RE.search(scope.text)
    return int(m.group(1).replace(",", "")) or None if m else None


def _area_from_unit(scope: Scope) -> Optional[int]:
    m = AREA_UNIT_RE.search(scope.text)
    return int(m.group(1).replace(",", "")) or None if m else None


AREA_STRATEGIES = (
    Strategy("square_feet_label", _area_from_label),
    Strategy("number_with_unit", _area_from_unit),
)


def extract_area(scope: Scope) -> Optional[int]:
    return first_match(AREA_STRATEGIES, scope)


# ---------- stated rate per area ----------

def _rate_from_label(scope: Scope) -> Optional[float]:
    m = RATE_LABEL_RE.search(scope.text)
    return _number(m.group(1)) if m else None


def _rate_from_token(scope: Scope) -> Optional[float]:
    m = RATE_TOKEN_RE.search(scope.text)
    return _number(m.group(1)) if m else None


RATE_STRATEGIES = (
    Strategy("rent_per_sf_label", _rate_from_label),
    Strategy("per_year_token", _rate_from_token),
)


def extract_rate(scope: Scope) -> Optional[float]:
    """Annual price per square foot when the page states it directly."""
    return first_match(RATE_STRATEGIES, scope)


# ---------- address / city ----------

def extract_address(scope: Scope) -> Optional[str]:
    m = ADDRESS_RE.search(scope.text)
    if not m:
        return None
    return re.sub(r"\s+,", ",", normalize_space(m.group(0)))


def city_from_address(address: Optional[str]) -> Optional[str]:
    if not address:
        return None
    m = CITY_RE.search(address)
    return m.group(1).strip() if m else None


# ---------- title ----------

def _is_title(text: str) -> bool:
    return TITLE_MIN <= len(text) < TITLE_MAX and not TITLE_BOILERPLATE_RE.match(text)


def _title_from_heading(scope: Scope) -> Optional[str]:
    for heading in scope.body.css("h1, h2, h3, h4"):
        text = node_text(heading)
        if _is_title(text):
            return text
    return None


def _title_from_anchor(scope: Scope) -> Optional[str]:
    text = normalize_space(scope.anchor_text)
    if _is_title(text) and not text.lower().startswith(("http://", "https://")):
        return text
    return None


def _title_from_page_title(scope: Scope) -> Optional[str]:
    if not scope.profile.full_page:
        return None
    text = normalize_space(scope.sel.xpath("//title/text()").get())
    return text if _is_title(text) else None


def _title_from_id(scope: Scope) -> Optional[str]:
    return f"Listing {scope.listing_id[:8]}" if scope.listing_id else None


TITLE_STRATEGIES = (
    Strategy("heading", _title_from_heading),
    Strategy("anchor_text", _title_from_anchor),
    Strategy("page_title", _title_from_page_title),
    Strategy("address", extract_address),
    Strategy("listing_id", _title_from_id),
)


def extract_title(scope: Scope) -> Optional[str]:
    return first_match(TITLE_STRATEGIES, scope)


# ---------- description ----------

def _is_boilerplate(text: str) -> bool:
    return any(marker in text for marker in DESCRIPTION_BOILERPLATE)


def _description_from_container(scope: Scope) -> Optional[str]:
    for css in scope.profile.description_selectors:
        for element in scope.body.css(css):
            text = node_text(element)
            if len(text) > DESCRIPTION_MIN and not _is_boilerplate(text):
                return text
    return None


def _description_from_paragraphs(scope: Scope) -> Optional[str]:
    longest = ""
    for paragraph in scope.body.css("p"):
        text = node_text(paragraph)
        if len(text) > len(longest) and not _is_boilerplate(text):
            longest = text
    return longest or None


def _description_from_sentence(scope: Scope) -> Optional[str]:
    for m in SENTENCE_RE.finditer(scope.flat_text):
        if not _is_boilerplate(m.group(0)):
            return truncate(m.group(0), SENTENCE_LIMIT)
    return None


DESCRIPTION_STRATEGIES = (
    Strategy("description_container", _description_from_container),
    Strategy("longest_paragraph", _description_from_paragraphs),
    Strategy("sentence_run", _description_from_sentence),
)


def extract_description(scope: Scope) -> Optional[str]:
    text = first_match(DESCRIPTION_STRATEGIES, scope)
    return truncate(text, DESCRIPTION_LIMIT) if text else None


# ---------- availability ----------

def _available_now(scope: Scope) -> Optional[str]:
    return AVAILABLE_NOW if AVAILABLE_NOW_RE.search(scope.text) else None


def _available_pattern(pattern: "re.Pattern[str]"):
    def find(scope: Scope) -> Optional[str]:
        m = pattern.search(scope.text)
        return normalize_space(m.group(1)) if m else None

    return find


AVAILABILITY_STRATEGIES = (
    Strategy("available_now", _available_now),
    Strategy("numeric_date", _available_pattern(AVAILABLE_NUMERIC_RE)),
    Strategy("month_day_year", _available_pattern(AVAILABLE_MONTH_DAY_RE)),
    Strategy("month_year", _available_pattern(AVAILABLE_MONTH_YEAR_RE)),
)


def extract_availability(scope: Scope) -> str:
    """``"Now"``, a date-like string, or the contact-for-availability token."""
    return first_match(AVAILABILITY_STRATEGIES, scope) or AVAILABILITY_UNSPECIFIED


# ---------- category / lease type / utilities ----------

def _label_pattern(pattern: "re.Pattern[str]"):
    def find(scope: Scope) -> Optional[str]:
        m = pattern.search(scope.text)
        return _capitalize(m.group(1)) if m else None

    return find


CATEGORY_STRATEGIES = (
    Strategy("commercial_type_label", _label_pattern(COMMERCIAL_TYPE_RE)),
    Strategy("lease_type_label", _label_pattern(LEASE_TYPE_RE)),
    Strategy("property_vocabulary", _label_pattern(PROPERTY_WORD_RE)),
)


def extract_category(scope: Scope) -> str:
    return first_match(CATEGORY_STRATEGIES, scope) or DEFAULT_CATEGORY


def extract_lease_type(scope: Scope) -> Optional[str]:
    m = LEASE_TYPE_RE.search(scope.text)
    return m.group(1).strip() if m else None


def extract_utilities(scope: Scope) -> Optional[str]:
    m = UTILITIES_RE.search(scope.text)
    return normalize_space(m.group(1)) or None if m else None


# ---------- images ----------

def _image_src(img) -> Optional[str]:
    for attr in IMAGE_ATTRS:
        value = (img.attrib.get(attr) or "").strip()
        if value and not value.startswith("data:"):
            return value
    return None


def _resolve(scope: Scope, src: str) -> str:
    return urljoin(scope.base_url, src) if scope.base_url else src


def _dedupe(urls: List[str]) -> List[str]:
    seen: set[str] = set()
    out: List[str] = []
    for url in urls:
        if url not in seen:
            seen.add(url)
            out.append(url)
    return out


def _images_from_gallery(scope: Scope) -> List[str]:
    urls: List[str] = []
    for css in scope.profile.gallery_selectors:
        for img in scope.body.css(css):
            src = _image_src(img)
            if src and not any(marker in src for marker in IMAGE_EXCLUDE):
                urls.append(_resolve(scope, src))
    return _dedupe(urls)


def _images_from_asset_host(scope: Scope) -> List[str]:
    urls: List[str] = []
    for img in scope.body.css("img"):
        src = _image_src(img)
        if src and ASSET_HOST in src and not any(marker in src for marker in LOGO_MARKERS):
            urls.append(src)
    return _dedupe(urls)


IMAGE_STRATEGIES = (
    Strategy("gallery_markers", _images_from_gallery),
    Strategy("asset_host", _images_from_asset_host),
)


def extract_images(scope: Scope) -> List[str]:
    """Gallery URLs in first-seen order; the first one is the primary image."""
    return first_match(IMAGE_STRATEGIES, scope) or []
