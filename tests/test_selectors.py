from bs4 import BeautifulSoup

from carscout.data.selectors import (
    anchor_strategy,
    css_strategy,
    first_attribute,
    first_text,
    locate_fragments,
)


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_first_matching_strategy_wins() -> None:
    soup = _soup('<div class="generic">1</div><div class="specific">2</div><div class="specific">3</div>')

    fragments, strategy = locate_fragments(soup, [css_strategy(".specific"), css_strategy(".generic")])

    assert [f.get_text() for f in fragments] == ["2", "3"]
    assert strategy == "css[.specific]"


def test_falls_through_to_later_strategies() -> None:
    soup = _soup('<div class="generic">1</div>')

    fragments, strategy = locate_fragments(soup, [css_strategy(".specific"), css_strategy(".generic")])

    assert len(fragments) == 1
    assert strategy == "css[.generic]"


def test_no_strategy_matches() -> None:
    fragments, strategy = locate_fragments(_soup("<p>nada</p>"), [css_strategy(".card")])
    assert fragments == []
    assert strategy is None


def test_anchor_strategy_skips_script_links() -> None:
    soup = _soup(
        '<a href="/veiculos/carros/civic-123">Civic</a>'
        '<a href="javascript:void(\'/veiculos/carros/\')">bad</a>'
        '<a href="/imoveis/apto-1">Apto</a>'
    )

    fragments = anchor_strategy("/veiculos/carros/")(soup)

    assert [a["href"] for a in fragments] == ["/veiculos/carros/civic-123"]


def test_first_text_follows_selector_priority_not_document_order() -> None:
    node = _soup('<div><h2>Generic</h2><span class="title"> Specific </span></div>').div

    assert first_text(node, (".title", "h2")) == "Specific"
    assert first_text(node, (".missing", "h2")) == "Generic"
    assert first_text(node, (".missing",)) == ""


def test_first_text_skips_empty_matches() -> None:
    node = _soup('<div><span class="price"></span><p class="valor">R$ 10</p></div>').div
    assert first_text(node, (".price", ".valor")) == "R$ 10"


def test_first_attribute_checks_lazy_load_attributes_in_order() -> None:
    img = _soup('<img data-src="lazy.jpg" data-original="orig.jpg">').img

    assert first_attribute(img, ("src", "data-src", "data-original")) == "lazy.jpg"
    assert first_attribute(None, ("src",)) is None
