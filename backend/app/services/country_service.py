"""Country Service.

Combines country info, population and flag lookups into one
``CountryDetails`` view.  Only the country info is required; population
and flag are best-effort and degrade to empty values.
"""

import logging

from app.schemas.country import CountryBorder, CountryDetails, PopulationPoint
from app.services import country_client

logger = logging.getLogger(__name__)


async def get_country_details(country_code: str) -> CountryDetails:
    """Assemble the details view for ``country_code``.

    Raises:
        NotFoundError: The country info lookup failed.
    """
    logger.debug("Getting country details for %s", country_code)

    info = await country_client.fetch_country_info(country_code)
    name = info.common_name

    population: list[PopulationPoint] = []
    try:
        population = await country_client.fetch_population_series(name)
        logger.debug("Found %d population records", len(population))
    except Exception as exc:
        logger.warning("Error on population data: %s: %s", name, exc)

    flag_url = ""
    try:
        flag_url = await country_client.fetch_flag_url(name)
        logger.debug("Retrieved flag URL: %s", "Yes" if flag_url else "No")
    except Exception as exc:
        logger.warning("Error getting flag URL: %s: %s", name, exc)

    return CountryDetails(
        name=name,
        country_code=info.country_code,
        borders=[
            CountryBorder(name=border.common_name, country_code=border.country_code)
            for border in info.borders or []
        ],
        population=population,
        flag_url=flag_url,
    )
