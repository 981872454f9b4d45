"""
URL codec - maps a WidgetConfig to and from URL parameters.

Decoding reads ``key=value`` pairs from the fragment (after ``#``) and the
query string (after ``?``) of a sequence of URLs. A field keeps the first
value it receives: the fragment of a URL beats its query string, and an
earlier URL beats a later one. Unknown keys and unrecognized values are
ignored.

Encoding writes the set fields as a fragment:

    WidgetConfig(sectors=["a", "b"], analysis=DemandType.PRODUCTION, year=2020)
    -> "#sectors=a,b&type=Production&year=2020"

``source`` is never encoded.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple
from urllib.parse import quote, unquote

from ...models.widget_config import DemandType, ResultPerspective, WidgetConfig
from ...utils.logging_setup import get_logger

logger = get_logger(__name__)

Parameter = Tuple[str, str]

_PERSPECTIVES = {
    "direct": ResultPerspective.DIRECT,
    "direct results": ResultPerspective.DIRECT,
    "supply": ResultPerspective.DIRECT,
    "supply chain": ResultPerspective.DIRECT,
    "final": ResultPerspective.FINAL,
    "final results": ResultPerspective.FINAL,
    "consumption": ResultPerspective.FINAL,
    "final consumption": ResultPerspective.FINAL,
    "point of consumption": ResultPerspective.FINAL,
    "intermediate": ResultPerspective.INTERMEDIATE,
    "intermediate results": ResultPerspective.INTERMEDIATE,
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


# =============================================================================
# URL PARTS
# =============================================================================

def get_hash_part(url: Optional[str]) -> Optional[str]:
    """Text after the last ``#``, or None."""
    if not url:
        return None
    parts = url.split("#")
    return parts[-1] if len(parts) >= 2 else None


def get_query_part(url: Optional[str]) -> Optional[str]:
    """Text after the first ``?`` of the URL without its fragment, or None."""
    if not url:
        return None
    part = url
    parts = url.split("#")
    if len(parts) > 1:
        part = parts[-2]
    parts = part.split("?")
    return parts[1] if len(parts) >= 2 else None


def strip_fragment(url: str) -> str:
    return url.split("#", 1)[0]


def with_fragment(url: str, fragment: str) -> str:
    """Replace the fragment of ``url``; an empty fragment removes it."""
    base = strip_fragment(url or "")
    if not fragment or fragment == "#":
        return base
    if not fragment.startswith("#"):
        fragment = "#" + fragment
    return base + fragment


def get_parameters(url_part: Optional[str]) -> List[Parameter]:
    """
    Split ``k1=v1&k2=v2`` into (key, raw value) pairs.

    Keys are trimmed and lower-cased, values trimmed but still
    percent-encoded. Pairs without ``=`` are skipped.
    """
    if not url_part:
        return []
    params: List[Parameter] = []
    for pair in url_part.split("&"):
        key_val = pair.split("=")
        if len(key_val) < 2:
            continue
        params.append((key_val[0].strip().lower(), key_val[1].strip()))
    return params


# =============================================================================
# VALUE PARSING
# =============================================================================

def parse_perspective(value: Optional[str]) -> Optional[ResultPerspective]:
    """Resolve a perspective from its known synonyms, None if unknown."""
    if not value:
        return None
    return _PERSPECTIVES.get(value.strip().lower())


def parse_demand_type(value: Optional[str]) -> Optional[DemandType]:
    if not value:
        return None
    v = value.strip().lower()
    if v == "consumption":
        return DemandType.CONSUMPTION
    if v == "production":
        return DemandType.PRODUCTION
    return None


def parse_year(value: Optional[str]) -> Optional[int]:
    """Leading integer of the text (``"2020x"`` -> 2020), None if there is none."""
    if not value:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def parse_list(raw: str) -> List[str]:
    items = (unquote(item).strip() for item in raw.split(","))
    return [item for item in items if item]


# =============================================================================
# DECODING
# =============================================================================

def apply_parameters(config: WidgetConfig, params: Iterable[Parameter]) -> WidgetConfig:
    """
    Fill the unset fields of ``config`` from URL parameters (in place).

    A field that already holds a value is left alone.
    """
    for key, raw in params:
        if key == "model":
            if not config.model:
                config.model = unquote(raw) or None

        elif key == "sectors":
            if not config.sectors:
                config.sectors = parse_list(raw)

        elif key == "indicators":
            if not config.indicators:
                config.indicators = parse_list(raw)

        elif key in ("type", "analysis"):
            if not config.analysis:
                config.analysis = parse_demand_type(unquote(raw))

        elif key == "perspective":
            if not config.perspective:
                config.perspective = parse_perspective(unquote(raw))

        elif key == "location":
            if not config.location:
                config.location = unquote(raw) or None

        elif key == "year":
            if not config.year:
                config.year = parse_year(unquote(raw))

    return config


def parse_url_config(urls: Iterable[Optional[str]]) -> WidgetConfig:
    """
    Decode a config from URLs in priority order.

    For each URL the fragment is applied before the query string; earlier
    URLs take precedence over later ones.
    """
    config = WidgetConfig()
    count = 0
    for url in urls:
        if not url:
            continue
        count += 1
        apply_parameters(config, get_parameters(get_hash_part(url)))
        apply_parameters(config, get_parameters(get_query_part(url)))
    logger.debug(f"Parsed config from {count} URL(s): {config.to_dict()}")
    return config


def decode(url: str) -> WidgetConfig:
    """Decode a single URL or a bare fragment such as ``#year=2020``."""
    return parse_url_config([url])


# =============================================================================
# ENCODING
# =============================================================================

def _quote(value: object) -> str:
    return quote(str(value), safe="")


def encode_parameters(config: WidgetConfig) -> str:
    """Encode the set fields as ``k=v&...`` (without a leading ``#``)."""
    parts: List[str] = []
    if config.sectors:
        parts.append("sectors=" + ",".join(_quote(s) for s in config.sectors))
    if config.indicators:
        parts.append("indicators=" + ",".join(_quote(i) for i in config.indicators))

    scalars = [
        ("type", config.analysis.value if config.analysis else None),
        ("perspective", config.perspective.value if config.perspective else None),
        ("year", config.year),
        ("location", config.location),
        ("model", config.model),
    ]
    for key, value in scalars:
        if value:
            parts.append(f"{key}={_quote(value)}")
    return "&".join(parts)


def encode_fragment(config: WidgetConfig) -> str:
    """Encode the set fields as a URL fragment, always starting with ``#``."""
    return "#" + encode_parameters(config)
