from typing import List, Literal, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml
import os

from carscout.data.models import MAX_PER_SOURCE_LIMIT, SearchRequest


class SearchProfile(BaseModel):
    name: str
    query: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    location: Optional[str] = None
    limit: int = Field(default=10, ge=1, le=MAX_PER_SOURCE_LIMIT)

    def to_request(self) -> SearchRequest:
        return SearchRequest.build(
            query=self.query,
            model=self.model,
            year=self.year,
            location=self.location,
            limit=self.limit,
        )


class AppSettings(BaseSettings):
    BROWSER_EXECUTABLE_PATH: Optional[str] = None
    LOG_LEVEL: str = "INFO"
    FETCH_TIMEOUT_SECONDS: float = 30.0
    RENDER_TIMEOUT_SECONDS: float = 90.0
    RENDER_SETTLE_SECONDS: float = 1.5
    RESULT_CAP_MULTIPLIER: int = Field(default=3, ge=1)
    DEFAULT_LIMIT: int = Field(default=10, ge=1, le=MAX_PER_SOURCE_LIMIT)
    ID_STRATEGY: Literal["sequential", "uuid"] = "sequential"
    SEARCHES_FILE: str = "config/searches.yaml"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def load_searches_from_yaml(path: str) -> List[SearchProfile]:
    if not os.path.exists(path):
        return []
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}
        return [SearchProfile(**search) for search in data.get('searches', [])]
