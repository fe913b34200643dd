"""Fact lookups that build the JSON payloads of the lookup endpoints."""

from collections.abc import Callable, Mapping
from datetime import date, datetime, timezone
from typing import Any

from countryinfo.core.errors import CountryNotFound
from countryinfo.core.facts import (
    ANIMAL_FACTS,
    CAPITAL_FACTS,
    CURRENCY_FACTS,
    normalize_country,
)
from countryinfo.core.models import AnimalFact, CapitalFact, CurrencyFact


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class FactLookup:
    """Looks up country facts and shapes the success payloads.

    The tables are injectable so tests can supply their own; by default
    the static tables from ``countryinfo.core.facts`` are used.
    """

    def __init__(
        self,
        animals: Mapping[str, AnimalFact] = ANIMAL_FACTS,
        capitals: Mapping[str, CapitalFact] = CAPITAL_FACTS,
        currencies: Mapping[str, CurrencyFact] = CURRENCY_FACTS,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self.animals = animals
        self.capitals = capitals
        self.currencies = currencies
        self._today = today

    def animal(self, country: str) -> dict[str, Any]:
        """Return ``{country, nationalAnimal, scientificName}``.

        Raises:
            CountryNotFound: If the normalized key is not in the table.
        """
        fact = self.animals.get(normalize_country(country))
        if fact is None:
            raise CountryNotFound(
                f'National animal data for "{country}" is not available'
            )
        return {
            "country": country,
            "nationalAnimal": fact.animal,
            "scientificName": fact.scientific_name,
        }

    def capital(self, country: str) -> dict[str, Any]:
        """Return ``{country, capitalCity, capitalPopulation}``.

        Raises:
            CountryNotFound: If the normalized key is not in the table.
        """
        fact = self.capitals.get(normalize_country(country))
        if fact is None:
            raise CountryNotFound(
                f'Capital city data for "{country}" is not available'
            )
        return {
            "country": country,
            "capitalCity": fact.capital,
            "capitalPopulation": fact.population,
        }

    def currency(self, country: str) -> dict[str, Any]:
        """Return ``{country, currency, symbol, valueAgainstUSD, date}``.

        ``date`` is the current UTC calendar date in ISO format.

        Raises:
            CountryNotFound: If the normalized key is not in the table.
        """
        fact = self.currencies.get(normalize_country(country))
        if fact is None:
            raise CountryNotFound(f'Currency data for "{country}" is not available')
        return {
            "country": country,
            "currency": fact.currency,
            "symbol": fact.symbol,
            "valueAgainstUSD": fact.value_against_usd,
            "date": self._today().isoformat(),
        }
