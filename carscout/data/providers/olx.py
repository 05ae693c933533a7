import re

from carscout.data.base_provider import BaseProvider
from carscout.data.models import SourceName


class OlxProvider(BaseProvider):
    source_name = SourceName.OLX
    base_url = "https://www.olx.com.br"
    search_path = "/estado-sp/regiao-de-sao-paulo/veiculos/carros"
    location_param = "location"

    listing_selectors = (
        '[data-cy="l-card"]',
        ".sc-1wimjbb-1",
        ".sc-1wimjbb-0",
        '[data-testid="ad-card"]',
    )
    listing_path = "/veiculos/carros/"
    field_selectors = {
        "title": ('[data-testid="ad-title"]', ".sc-1wimjbb-5", "h2"),
        "price": ('[data-testid="ad-price"]', ".sc-1wimjbb-6", ".price"),
        "location": ('[data-testid="ad-location"]', ".sc-1wimjbb-7", ".location"),
        "description": (".sc-1wimjbb-8", ".description"),
    }
    # .../honda-civic-exl-2018-1234567890
    id_pattern = re.compile(r"-(\d{8,})(?:[/?#]|$)")
