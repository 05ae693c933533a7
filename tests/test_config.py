import pydantic
import pytest

from carscout.data.models import SearchRequest
from carscout.data.normalizer import SequentialIdSource, UuidIdSource
from carscout.data.registry import build_providers
from carscout.utils.config import AppSettings, SearchProfile, load_searches_from_yaml


def test_load_searches_from_yaml(tmp_path) -> None:
    path = tmp_path / "searches.yaml"
    path.write_text(
        "searches:\n"
        "  - name: civic_sp\n"
        "    query: Civic 2018\n"
        "    location: São Paulo\n"
        "  - name: corolla\n"
        "    model: Corolla\n"
        "    year: 2020\n"
        "    limit: 5\n",
        encoding="utf-8",
    )

    searches = load_searches_from_yaml(str(path))

    assert [s.name for s in searches] == ["civic_sp", "corolla"]
    assert searches[0].to_request() == SearchRequest(
        query_text="Civic 2018", location_filter="São Paulo", per_source_limit=10
    )
    assert searches[1].to_request().query_text == "Corolla 2020"
    assert searches[1].to_request().per_source_limit == 5


def test_missing_searches_file_yields_nothing(tmp_path) -> None:
    assert load_searches_from_yaml(str(tmp_path / "absent.yaml")) == []


def test_search_request_needs_query_or_model() -> None:
    with pytest.raises(ValueError):
        SearchRequest.build(query="  ", location="Campinas")


def test_search_request_prefers_query_over_model() -> None:
    assert SearchRequest.build(query="Civic", model="Corolla", year=2020).query_text == "Civic"
    assert SearchRequest.build(model="Corolla").query_text == "Corolla"


@pytest.mark.parametrize("limit", [0, 51])
def test_search_request_limit_is_bounded(limit) -> None:
    with pytest.raises(pydantic.ValidationError):
        SearchRequest.build(query="Civic", limit=limit)


def test_search_profile_limit_is_bounded() -> None:
    with pytest.raises(pydantic.ValidationError):
        SearchProfile(name="too_many", query="Civic", limit=100)


def test_settings_defaults(monkeypatch) -> None:
    monkeypatch.delenv("RESULT_CAP_MULTIPLIER", raising=False)
    monkeypatch.setenv("BROWSER_EXECUTABLE_PATH", "/usr/bin/chromium")

    settings = AppSettings(_env_file=None)

    assert settings.BROWSER_EXECUTABLE_PATH == "/usr/bin/chromium"
    assert settings.FETCH_TIMEOUT_SECONDS == 30.0
    assert settings.RENDER_TIMEOUT_SECONDS == 90.0
    assert settings.RESULT_CAP_MULTIPLIER == 3


@pytest.mark.parametrize("strategy, expected", [("sequential", SequentialIdSource), ("uuid", UuidIdSource)])
def test_id_strategy_selects_id_source(strategy, expected) -> None:
    providers = build_providers(AppSettings(_env_file=None, ID_STRATEGY=strategy))

    assert {type(provider.normalizer.id_source) for provider in providers} == {expected}
    assert len({id(provider.normalizer) for provider in providers}) == len(providers)


def test_unknown_id_strategy_is_rejected() -> None:
    with pytest.raises(pydantic.ValidationError):
        AppSettings(_env_file=None, ID_STRATEGY="random")
