from __future__ import annotations

from link_extractor.core.config import ContentCountry, Localization
from link_extractor.services.base_service import MediaCapability, StreamingService
from link_extractor.services.youtube.search_query_handler import (
    search_query_handler_factory,
)
from link_extractor.services.youtube.stream_link_handler import (
    stream_link_handler_factory,
)

# https://www.youtube.com/picker_ajax?action_country_json=1
_COUNTRY_CODES = (
    "DZ AR AU AT AZ BH BD BY BE BO BA BR BG KH CA CL CO CR HR CY CZ DK DO EC EG "
    "SV EE FI FR GE DE GH GR GT HN HK HU IS IN ID IQ IE IL IT JM JP JO KZ KE KW "
    "LA LV LB LY LI LT LU MY MT MX ME MA NP NL NZ NI NG MK NO OM PK PA PG PY PE "
    "PH PL PT PR QA RO RU SA SN RS SG SK SI ZA KR ES LK SE CH TW TZ TH TN TR UG "
    "UA AE GB US UY VE VN YE ZW"
).split()


class YoutubeService(StreamingService):
    name = "YouTube"
    base_url = "https://youtube.com"
    capabilities = (
        MediaCapability.AUDIO,
        MediaCapability.VIDEO,
        MediaCapability.LIVE,
        MediaCapability.COMMENTS,
    )
    supported_localizations = (Localization.from_localization_code("en-GB"),)
    supported_countries = tuple(ContentCountry(country_code=c) for c in _COUNTRY_CODES)

    stream_lh_factory = stream_link_handler_factory
    search_qh_factory = search_query_handler_factory
