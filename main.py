import asyncio
import json
import sys
from carscout.utils.config import AppSettings, SearchProfile, load_searches_from_yaml
from carscout.utils.log import configure_logging
from carscout.core.aggregator import SearchAggregator
import structlog

logger = structlog.get_logger()


async def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    # 1. Load Settings
    settings = AppSettings()
    configure_logging(settings.LOG_LEVEL)

    logger.info("starting_carscout")

    # 2. A query on the command line wins over the saved searches file
    if argv:
        searches = [SearchProfile(name="command_line", query=" ".join(argv), limit=settings.DEFAULT_LIMIT)]
    else:
        searches = load_searches_from_yaml(settings.SEARCHES_FILE)
    if not searches:
        logger.error("no_searches_found", path=settings.SEARCHES_FILE)
        return 1

    # 3. Run each search against every source
    aggregator = SearchAggregator(settings=settings)
    logger.info("sources_ready", sources=aggregator.describe_sources())

    payloads = []
    for profile in searches:
        try:
            request = profile.to_request()
        except ValueError as e:
            logger.error("invalid_search_profile", name=profile.name, error=str(e))
            continue
        result = await aggregator.run(request)
        payloads.append({"name": profile.name, **result.to_payload()})

    print(json.dumps(payloads, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
