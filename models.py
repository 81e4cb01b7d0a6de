"""Data models for Carzone listing scraping."""
from dataclasses import dataclass, fields
from typing import Optional

SENTINEL = "N/A"


@dataclass(frozen=True)
class ListingRecord:
    """A single used-car listing, one per scraped URL.

    Every field is a string; anything that could not be found on the page
    holds ``SENTINEL``.
    """
    url: str
    name: str = SENTINEL
    price: str = SENTINEL
    nct: str = SENTINEL
    location: str = SENTINEL
    key_features: str = SENTINEL
    transmission: str = SENTINEL
    tax: str = SENTINEL
    mileage: str = SENTINEL
    fuel_type: str = SENTINEL

    @classmethod
    def from_error(cls, url: str, message: str) -> "ListingRecord":
        """Build the placeholder record for a URL that could not be scraped."""
        return cls(url=url, name=f"Error: {message}")

    @classmethod
    def field_names(cls) -> list[str]:
        """Extracted field names in column order (``url`` excluded)."""
        return [f.name for f in fields(cls) if f.name != "url"]

    def as_row(self) -> list[str]:
        """Values in column order, with the URL last."""
        return [getattr(self, name) for name in self.field_names()] + [self.url]


@dataclass
class FetchResult:
    """Outcome of fetching a single URL."""
    url: str
    html: Optional[str] = None
    error: Optional[str] = None
    status_code: Optional[int] = None
    duration: float = 0.0
    success: bool = False
