"""Static fact tables keyed by normalized country name.

All tables are read-only. Keys are in normalized form (see
``normalize_country``), with duplicate entries for common aliases.
"""

from collections.abc import Mapping
from types import MappingProxyType

from countryinfo.core.models import AnimalFact, CapitalFact, CurrencyFact


def normalize_country(raw: str) -> str:
    """Turn a raw path segment into a table key.

    Lowercases and replaces every hyphen with a space. Nothing is trimmed.
    """
    return raw.lower().replace("-", " ")


_EAGLE = AnimalFact("Bald Eagle", "Haliaeetus leucocephalus")
_LION = AnimalFact("Lion", "Panthera leo")

ANIMAL_FACTS: Mapping[str, AnimalFact] = MappingProxyType(
    {
        "usa": _EAGLE,
        "united states": _EAGLE,
        "uk": _LION,
        "united kingdom": _LION,
        "japan": AnimalFact("Green Pheasant", "Phasianus versicolor"),
        "india": AnimalFact("Bengal Tiger", "Panthera tigris tigris"),
        "germany": AnimalFact("Federal Eagle", "Aquila chrysaetos"),
        "france": AnimalFact("Gallic Rooster", "Gallus gallus domesticus"),
        "canada": AnimalFact("North American Beaver", "Castor canadensis"),
        "australia": AnimalFact("Red Kangaroo", "Macropus rufus"),
        "china": AnimalFact("Giant Panda", "Ailuropoda melanoleuca"),
        "brazil": AnimalFact("Jaguar", "Panthera onca"),
        "mexico": AnimalFact("Golden Eagle", "Aquila chrysaetos"),
        "south korea": AnimalFact("Siberian Tiger", "Panthera tigris altaica"),
        "russia": AnimalFact("Eurasian Brown Bear", "Ursus arctos arctos"),
    }
)

_WASHINGTON = CapitalFact("Washington, D.C.", "689,545")
_LONDON = CapitalFact("London", "8,982,000")

CAPITAL_FACTS: Mapping[str, CapitalFact] = MappingProxyType(
    {
        "usa": _WASHINGTON,
        "united states": _WASHINGTON,
        "uk": _LONDON,
        "united kingdom": _LONDON,
        "japan": CapitalFact("Tokyo", "13,960,000"),
        "india": CapitalFact("New Delhi", "16,787,941"),
        "germany": CapitalFact("Berlin", "3,645,000"),
        "france": CapitalFact("Paris", "2,161,000"),
        "canada": CapitalFact("Ottawa", "1,017,449"),
        "australia": CapitalFact("Canberra", "453,558"),
        "china": CapitalFact("Beijing", "21,540,000"),
        "brazil": CapitalFact("Brasília", "3,039,444"),
        "mexico": CapitalFact("Mexico City", "9,209,944"),
        "south korea": CapitalFact("Seoul", "9,733,509"),
        "russia": CapitalFact("Moscow", "12,506,468"),
        "switzerland": CapitalFact("Bern", "134,794"),
    }
)

_DOLLAR = CurrencyFact("US Dollar", "USD", "1.00")
_POUND = CurrencyFact("British Pound", "GBP", "0.79")
_EURO = CurrencyFact("Euro", "EUR", "0.92")

CURRENCY_FACTS: Mapping[str, CurrencyFact] = MappingProxyType(
    {
        "usa": _DOLLAR,
        "united states": _DOLLAR,
        "uk": _POUND,
        "united kingdom": _POUND,
        "japan": CurrencyFact("Japanese Yen", "JPY", "149.50"),
        "india": CurrencyFact("Indian Rupee", "INR", "83.12"),
        "germany": _EURO,
        "france": _EURO,
        "canada": CurrencyFact("Canadian Dollar", "CAD", "1.36"),
        "australia": CurrencyFact("Australian Dollar", "AUD", "1.54"),
        "china": CurrencyFact("Chinese Yuan", "CNY", "7.14"),
        "brazil": CurrencyFact("Brazilian Real", "BRL", "4.97"),
        "mexico": CurrencyFact("Mexican Peso", "MXN", "17.15"),
        "south korea": CurrencyFact("South Korean Won", "KRW", "1298.50"),
        "russia": CurrencyFact("Russian Ruble", "RUB", "89.50"),
        "switzerland": CurrencyFact("Swiss Franc", "CHF", "0.88"),
    }
)

# Amount of INR per one unit of each currency (sample data).
INR_CONVERSION_RATES: Mapping[str, float] = MappingProxyType(
    {
        "USD": 83.12,
        "GBP": 105.50,
        "JPY": 0.56,
        "INR": 1.00,
        "EUR": 90.25,
        "CAD": 61.20,
        "AUD": 54.00,
        "CNY": 11.65,
        "BRL": 16.75,
        "MXN": 4.85,
        "KRW": 0.064,
        "RUB": 0.93,
    }
)
