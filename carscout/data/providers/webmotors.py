import re

from carscout.data.base_provider import BaseProvider
from carscout.data.models import SourceName


class WebmotorsProvider(BaseProvider):
    source_name = SourceName.WEBMOTORS
    base_url = "https://www.webmotors.com.br"
    search_path = "/carros"
    location_param = "localizacao"

    listing_selectors = (
        '[data-testid="card-vehicle"]',
        ".card-vehicle",
        ".vehicle-card",
        '[data-testid="vehicle-card"]',
        ".card",
    )
    listing_path = "/carros/"
    field_selectors = {
        "title": ('[data-testid="vehicle-title"]', ".vehicle-title", "h2", "h3"),
        "price": ('[data-testid="vehicle-price"]', ".vehicle-price", ".price"),
        "location": ('[data-testid="vehicle-location"]', ".vehicle-location", ".location"),
        "description": ('[data-testid="vehicle-description"]', ".vehicle-description", ".description"),
        "year": ('[data-testid="vehicle-year"]', ".vehicle-year", ".year"),
        "mileage": ('[data-testid="vehicle-mileage"]', ".vehicle-mileage", ".mileage"),
        "fuel": ('[data-testid="vehicle-fuel"]', ".vehicle-fuel", ".fuel"),
        "transmission": ('[data-testid="vehicle-transmission"]', ".vehicle-transmission", ".transmission"),
    }
    # .../comprar/honda/civic/2-0-exl/4-portas/2018/51234567
    id_pattern = re.compile(r"/(\d{7,})/?(?:[?#]|$)")
