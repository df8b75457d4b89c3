"""Canned upstream payloads shared by the tests."""


def make_holiday(
    name: str,
    date: str,
    local_name: str | None = None,
    country_code: str = "US",
    types: list[str] | None = None,
    is_global: bool = True,
) -> dict:
    """A holiday entry shaped like the Date Nager response."""
    return {
        "date": date,
        "localName": local_name or name,
        "name": name,
        "countryCode": country_code,
        "fixed": False,
        "global": is_global,
        "counties": None,
        "launchYear": None,
        "types": types or ["Public"],
    }


US_HOLIDAYS_2024 = [
    make_holiday("New Year's Day", "2024-01-01"),
    make_holiday("Independence Day", "2024-07-04"),
    make_holiday("Thanksgiving Day", "2024-11-28"),
    make_holiday("Christmas Day", "2024-12-25", types=["Public", "Bank"]),
]


COUNTRY_INFO_US = {
    "commonName": "United States",
    "officialName": "United States of America",
    "countryCode": "US",
    "region": "Americas",
    "borders": [
        {
            "commonName": "Canada",
            "officialName": "Canada",
            "countryCode": "CA",
            "region": "Americas",
            "borders": None,
        },
        {
            "commonName": "Mexico",
            "officialName": "United Mexican States",
            "countryCode": "MX",
            "region": "Americas",
            "borders": None,
        },
    ],
}

POPULATION_SINGLE_US = {
    "error": False,
    "msg": "united states with population",
    "data": {
        "country": "United States",
        "code": "USA",
        "iso3": "USA",
        "populationCounts": [{"year": 2020, "value": 1}],
    },
}

POPULATION_LIST = {
    "error": False,
    "msg": "all countries and population",
    "data": [
        {
            "country": "Canada",
            "code": "CAN",
            "iso3": "CAN",
            "populationCounts": [{"year": 2019, "value": 37589262}],
        },
        {
            "country": "united states",
            "code": "USA",
            "iso3": "USA",
            "populationCounts": [
                {"year": 2018, "value": 326687501},
                {"year": "2019", "value": 328239523},
            ],
        },
    ],
}

FLAGS = {
    "error": False,
    "msg": "flags images retrieved",
    "data": [
        {"name": "Canada", "flag": "https://flags.example/can.svg", "iso2": "CA", "iso3": "CAN"},
        {
            "name": "United States of America",
            "flag": "https://flags.example/usa.svg",
            "iso2": "US",
            "iso3": "USA",
        },
        {"name": "Mexico", "flag": "https://flags.example/mex.svg", "iso2": "MX", "iso3": "MEX"},
    ],
}
