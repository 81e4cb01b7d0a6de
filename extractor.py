"""Field extraction for Carzone listing pages using configurable CSS selector rules."""
import json
import logging
from dataclasses import dataclass, field, replace
from typing import Optional

from bs4 import BeautifulSoup

from models import ListingRecord, SENTINEL

logger = logging.getLogger(__name__)

METHODS = ("text", "join")


@dataclass(frozen=True)
class FieldRule:
    """How one listing field is located in the page.

    Args:
        selectors: CSS selectors backing the field
        method: "text" takes the first selector's first match;
            "join" joins the first match of every selector
        separator: Separator used by the "join" method
    """
    selectors: tuple[str, ...]
    method: str = "text"
    separator: str = ", "

    def __post_init__(self):
        if self.method not in METHODS:
            raise ValueError(f"Unknown extraction method: {self.method!r}")
        if not self.selectors:
            raise ValueError("A field rule needs at least one selector")


def _feature(item_id: str) -> str:
    return f"li#{item_id} span.fpa-features__item__text"


def _default_fields() -> dict[str, FieldRule]:
    return {
        "name": FieldRule(("span.fpa-title__inner",)),
        "price": FieldRule(("div.cz-price span",)),
        "nct": FieldRule((_feature("nct"),)),
        "location": FieldRule(("p.fpa-actions__sub-title",)),
        "key_features": FieldRule(
            tuple(_feature(i) for i in
                  ("engine", "bodytype", "transmission", "colour", "mileage", "seats")),
            method="join",
        ),
        "transmission": FieldRule((_feature("transmission"),)),
        "tax": FieldRule((_feature("tax-band"),)),
        "mileage": FieldRule((_feature("mileage"),)),
        # Carzone has no dedicated fuel item; the engine line carries it ("1.5 Petrol").
        "fuel_type": FieldRule((_feature("engine"),)),
    }


@dataclass
class SelectorConfig:
    """Ordered table of field name -> FieldRule.

    Defaults to the Carzone listing page layout.
    """
    fields: dict[str, FieldRule] = field(default_factory=_default_fields)


def load_selector_config(path: str) -> SelectorConfig:
    """Load selector overrides from a JSON file.

    The file looks like ``{"fields": {"price": {"selectors": ["..."]}}}``.
    Fields not mentioned keep their default rule.

    Raises:
        ValueError: On unknown field names or malformed rules
    """
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    overrides = raw.get("fields") if isinstance(raw, dict) else None
    if not isinstance(overrides, dict):
        raise ValueError(f"{path}: expected a top-level 'fields' object")

    config = SelectorConfig()
    known = set(ListingRecord.field_names())
    for name, rule in overrides.items():
        if name not in known:
            raise ValueError(f"{path}: unknown field {name!r}")
        if not isinstance(rule, dict):
            raise ValueError(f"{path}: rule for {name!r} must be an object")
        selectors = rule.get("selectors")
        if isinstance(selectors, str):
            selectors = [selectors]
        if not isinstance(selectors, list) or not all(isinstance(s, str) for s in selectors):
            raise ValueError(f"{path}: 'selectors' for {name!r} must be a list of strings")
        default = config.fields[name]
        method = rule.get("method", default.method)
        if not isinstance(method, str) or method not in METHODS:
            raise ValueError(f"{path}: 'method' for {name!r} must be one of {', '.join(METHODS)}")
        separator = rule.get("separator", default.separator)
        if not isinstance(separator, str):
            raise ValueError(f"{path}: 'separator' for {name!r} must be a string")
        config.fields[name] = replace(
            default,
            selectors=tuple(selectors),
            method=method,
            separator=separator,
        )

    logger.debug(f"Loaded {len(overrides)} selector overrides from {path}")
    return config


def _first_text(soup: BeautifulSoup, selector: str) -> str:
    """Whitespace-normalized text of the first match, or "" if nothing matches."""
    element = soup.select_one(selector)
    if element is None:
        return ""
    return " ".join(element.get_text().split())


def _apply_rule(soup: BeautifulSoup, rule: FieldRule) -> str:
    if rule.method == "join":
        parts = [_first_text(soup, selector) for selector in rule.selectors]
        value = rule.separator.join(part for part in parts if part)
    else:
        value = _first_text(soup, rule.selectors[0])
    return value or SENTINEL


def extract_listing(html: str, url: str, config: Optional[SelectorConfig] = None) -> ListingRecord:
    """Extract a ListingRecord from a listing page.

    Args:
        html: Raw HTML of the listing page
        url: URL the page was fetched from
        config: Selector configuration. Uses the Carzone defaults if None.

    Returns:
        ListingRecord with every field set, "N/A" where nothing matched
    """
    if config is None:
        config = SelectorConfig()

    soup = BeautifulSoup(html, "lxml")
    values = {
        name: _apply_rule(soup, rule)
        for name, rule in config.fields.items()
        if name in ListingRecord.field_names()
    }
    missing = [name for name, value in values.items() if value == SENTINEL]
    if missing:
        logger.debug(f"No match for {', '.join(missing)} on {url}")
    return ListingRecord(url=url, **values)
