"""Price estimators used to put a cost on shopping list lines.

PriceTable   - static price list stored next to the other data files.
HttpPriceEstimator - asks a market price service over HTTP (httpx).

Both return unit costs in cents, or None when no price is known.
"""
import logging
from typing import Dict, Optional, Tuple

import httpx

from kitcha.domain.Ingredient import Unit, normalize_name
from kitcha.infra.json_store import load_document
from kitcha.infra.paths import PRICES_FILENAME, data_file
from kitcha.utilities.config import PRICE_SERVICE_TIMEOUT, PRICE_SERVICE_URL

logger = logging.getLogger(__name__)


def _price_key(name: str, unit: Unit) -> str:
    return f"{normalize_name(name)}|{Unit.parse(unit).value}"


def _as_cents(value) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


class PriceTable:
    """Price list document: {"flour|cups": 25, "eggs|pieces": 12, ...}."""

    def __init__(self, prices: Optional[Dict[str, int]] = None, filename: str = PRICES_FILENAME):
        self.filename = filename
        self._raw = prices
        self._prices: Optional[Dict[str, int]] = None

    def _load(self) -> Dict[str, int]:
        if self._prices is None:
            raw = self._raw if self._raw is not None else load_document(data_file(self.filename), {})
            self._prices = {}
            for key, value in raw.items():
                name, _, unit = key.partition('|')
                cents = _as_cents(value)
                if cents is None or not unit:
                    logger.warning("Ignoring price entry %r: %r", key, value)
                    continue
                try:
                    self._prices[_price_key(name, unit)] = cents
                except ValueError as e:
                    logger.warning("Ignoring price entry %r: %s", key, e)
        return self._prices

    def get_unit_cost(self, ingredient_name: str, unit: Unit) -> Optional[int]:
        return self._load().get(_price_key(ingredient_name, unit))


class HttpPriceEstimator:
    """Market price service client.

    GET {base_url}/prices?ingredient=<name>&unit=<unit> -> {"unitCostCents": int | null}

    Transport failures and non-200 answers are logged and treated as "no
    price"; retry policy is left to the service operator. Answers (including
    misses) are memoized for the lifetime of the instance.
    """

    def __init__(self, base_url: str = PRICE_SERVICE_URL, *, timeout: float = PRICE_SERVICE_TIMEOUT,
                 client: Optional[httpx.Client] = None):
        if not base_url and client is None:
            raise ValueError("A price service URL is required")
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)
        self._memo: Dict[Tuple[str, str], Optional[int]] = {}

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def get_unit_cost(self, ingredient_name: str, unit: Unit) -> Optional[int]:
        key = (normalize_name(ingredient_name), Unit.parse(unit).value)
        if key in self._memo:
            return self._memo[key]
        cents = self._fetch(*key)
        self._memo[key] = cents
        return cents

    def _fetch(self, name: str, unit: str) -> Optional[int]:
        try:
            response = self._client.get('/prices', params={'ingredient': name, 'unit': unit})
        except httpx.HTTPError as e:
            logger.warning("Price lookup for %s (%s) failed: %s", name, unit, e)
            return None
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            logger.warning("Price service answered %s for %s (%s)", response.status_code, name, unit)
            return None
        try:
            payload = response.json()
        except ValueError:
            logger.warning("Price service sent invalid JSON for %s (%s)", name, unit)
            return None
        return _as_cents(payload.get('unitCostCents')) if isinstance(payload, dict) else None


def default_price_estimator():
    """HTTP estimator when a price service is configured, else the local price table."""
    if PRICE_SERVICE_URL:
        return HttpPriceEstimator(PRICE_SERVICE_URL)
    return PriceTable()
