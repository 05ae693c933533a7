import re

from carscout.data.base_provider import BaseProvider
from carscout.data.models import SourceName


class ICarrosProvider(BaseProvider):
    source_name = SourceName.ICARROS
    base_url = "https://www.icarros.com.br"
    search_path = "/comprar/carros"
    location_param = "localizacao"

    listing_selectors = (
        '[data-testid="vehicle-card"]',
        ".vehicle-card",
        ".card-vehicle",
        ".card",
        '[class*="card"]',
    )
    listing_path = "/comprar/carros/"
    field_selectors = {
        "title": ('[data-testid="vehicle-title"]', ".vehicle-title", "h2", "h3", ".title"),
        "price": ('[data-testid="vehicle-price"]', ".vehicle-price", ".price", '[class*="price"]'),
        "location": ('[data-testid="vehicle-location"]', ".vehicle-location", ".location", '[class*="location"]'),
        "description": ('[data-testid="vehicle-description"]', ".vehicle-description", ".description"),
        "year": ('[data-testid="vehicle-year"]', ".vehicle-year", ".year", '[class*="year"]'),
        "mileage": ('[data-testid="vehicle-mileage"]', ".vehicle-mileage", ".mileage", '[class*="mileage"]'),
        "fuel": ('[data-testid="vehicle-fuel"]', ".vehicle-fuel", ".fuel", '[class*="fuel"]'),
        "transmission": (
            '[data-testid="vehicle-transmission"]',
            ".vehicle-transmission",
            ".transmission",
            '[class*="transmission"]',
        ),
        "color": ('[data-testid="vehicle-color"]', ".vehicle-color", ".color", '[class*="color"]'),
    }
    # .../comprar/sao-paulo-sp/honda/civic/2018/d44012345
    id_pattern = re.compile(r"/d(\d{6,})(?:[/?#]|$)")
