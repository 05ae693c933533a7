from typing import List, Optional, Type

from carscout.data.base_provider import BaseProvider
from carscout.data.fetcher import HttpFetcher
from carscout.data.normalizer import ListingNormalizer, SequentialIdSource, UuidIdSource
from carscout.data.providers.icarros import ICarrosProvider
from carscout.data.providers.olx import OlxProvider
from carscout.data.providers.webmotors import WebmotorsProvider
from carscout.data.renderer import PageRenderer
from carscout.utils.config import AppSettings

# Fan-in order of the merged result follows this list.
PROVIDER_CLASSES: List[Type[BaseProvider]] = [OlxProvider, WebmotorsProvider, ICarrosProvider]

ID_SOURCES = {"sequential": SequentialIdSource, "uuid": UuidIdSource}


def build_providers(
    settings: Optional[AppSettings] = None,
    normalizer: Optional[ListingNormalizer] = None,
) -> List[BaseProvider]:
    settings = settings or AppSettings()
    fetcher = HttpFetcher(timeout_seconds=settings.FETCH_TIMEOUT_SECONDS)
    renderer = PageRenderer(
        executable_path=settings.BROWSER_EXECUTABLE_PATH,
        timeout_seconds=settings.RENDER_TIMEOUT_SECONDS,
        settle_seconds=settings.RENDER_SETTLE_SECONDS,
    )
    # Fetcher and renderer hold no per-call state; id sequences stay per provider.
    return [
        cls(
            fetcher=fetcher,
            renderer=renderer,
            normalizer=normalizer or ListingNormalizer(id_source=ID_SOURCES[settings.ID_STRATEGY]()),
        )
        for cls in PROVIDER_CLASSES
    ]
