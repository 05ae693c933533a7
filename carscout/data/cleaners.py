import re
from typing import Optional

from carscout.data.models import LOCATION_SENTINEL, PRICE_SENTINEL

SPACE_RE = re.compile(r"\s+")
PRICE_CHARS_RE = re.compile(r"[^\d,.]")
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
MILEAGE_RE = re.compile(r"(\d+(?:\.\d+)?)\s*km", re.IGNORECASE)

COMMON_COLORS = (
    "branco", "preto", "prata", "cinza", "azul", "vermelho", "verde", "amarelo",
    "laranja", "rosa", "marrom", "bege", "dourado", "roxo", "violeta",
)


def clean_text(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    cleaned = SPACE_RE.sub(" ", text.replace("\xa0", " ")).strip()
    return cleaned or None


def clean_price(text: Optional[str]) -> str:
    if not text:
        return PRICE_SENTINEL
    # "R$ 45.900,00" -> "45.900,00"
    cleaned = PRICE_CHARS_RE.sub("", text).strip(",.")
    return cleaned or PRICE_SENTINEL


def clean_location(text: Optional[str]) -> str:
    return clean_text(text) or LOCATION_SENTINEL


def clean_year(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    match = YEAR_RE.search(text)
    return match.group(0) if match else None


def clean_mileage(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    match = MILEAGE_RE.search(text)
    if match:
        return f"{match.group(1)} km"
    return text.strip() or None


def clean_color(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    lowered = text.lower().strip()
    for color in COMMON_COLORS:
        if color in lowered:
            return color.capitalize()
    return text.strip() or None
