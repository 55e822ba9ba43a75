# talent_matcher/locations.py
"""
City/country reference lookups used by the profile normalizer.

The table is read once from data/locations.yaml at import time and exposed
read-only.
"""
from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from talent_matcher.models import Location
from talent_matcher.utils import normalize_text

logger = logging.getLogger(__name__)

LOCATIONS_FILE = Path(__file__).resolve().parent / "data" / "locations.yaml"


def _load_reference(path: Path) -> Tuple[Mapping[str, str], Mapping[str, str]]:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Location reference must be a YAML mapping: {path}")

    aliases: Dict[str, str] = {}
    for alias, country in (data.get("aliases") or {}).items():
        aliases[normalize_text(str(alias))] = normalize_text(str(country))

    city_to_country: Dict[str, str] = {}
    for country, cities in (data.get("countries") or {}).items():
        c = normalize_text(str(country))
        for city in cities or []:
            city_to_country.setdefault(normalize_text(str(city)), c)

    logger.debug("Loaded %d cities and %d country aliases from %s", len(city_to_country), len(aliases), path)
    return MappingProxyType(aliases), MappingProxyType(city_to_country)


COUNTRY_ALIASES, CITY_TO_COUNTRY = _load_reference(LOCATIONS_FILE)
KNOWN_COUNTRIES = frozenset(CITY_TO_COUNTRY.values()) | frozenset(COUNTRY_ALIASES.values())


def canonical_country(name: Any) -> Optional[str]:
    c = normalize_text(name)
    if not c:
        return None
    return COUNTRY_ALIASES.get(c, c)


def country_for_city(city: Any) -> Optional[str]:
    return CITY_TO_COUNTRY.get(normalize_text(city))


def parse_location(text: Any) -> Location:
    """
    Parse free text such as "Paris, France" or "Dubai".

    The last comma-separated part is the country; the first is the city.
    A single part is read as a city when the reference table knows it,
    otherwise as a country.
    """
    parts = [normalize_text(p) for p in str(text).split(",")] if isinstance(text, str) else []
    parts = [p for p in parts if p]
    if not parts:
        return Location()

    if len(parts) == 1:
        only = parts[0]
        known = country_for_city(only)
        if known:
            return Location(city=only, country=known)
        folded = canonical_country(only)
        if folded in KNOWN_COUNTRIES:
            return Location(city=None, country=folded)
        # unknown single token: keep it as the city, country unknown
        return Location(city=only, country=None)

    return Location(city=parts[0], country=canonical_country(parts[-1]))


def build_location(city: Any, country: Any) -> Location:
    """Location from separate city and country fields; infers a missing country."""
    c = normalize_text(city) or None
    k = canonical_country(country)
    if k is None and c is not None:
        k = country_for_city(c)
    return Location(city=c, country=k)
