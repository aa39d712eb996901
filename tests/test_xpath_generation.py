from xpathadvisor.models import Strategy
from xpathadvisor.strategies import DEFAULT_STRATEGIES, strategy_by_name
from xpathadvisor.xpath_generator import XPathGenerator, generate_xpaths

BUTTON_MARKUP = '<button id="go" class="btn primary" data-testid="go-btn">Go</button>'


def _by_strategy(markup: str) -> dict[str, list[str]]:
    return {result.strategy: result.xpaths for result in generate_xpaths(markup)}


def test_button_markup_produces_id_class_attribute_and_structural_results() -> None:
    results = generate_xpaths(BUTTON_MARKUP)

    assert [result.strategy for result in results] == [
        "ID-based",
        "Class-based",
        "Attribute-based",
        "Structural",
    ]
    by_strategy = {result.strategy: result.xpaths for result in results}
    assert by_strategy["ID-based"] == ["//*[@id='go']"]
    assert by_strategy["Class-based"] == ["//*[@class='btn']", "//*[@class='primary']"]
    assert "//*[@data-testid='go-btn']" in by_strategy["Attribute-based"]
    assert by_strategy["Structural"] == [
        "//button[1]",
        "//div[contains(@class, 'container')]//button",
        "//main//button",
        "//section//button",
    ]


def test_data_testid_is_not_mistaken_for_an_id_declaration() -> None:
    by_strategy = _by_strategy('<div data-testid="panel" data-id="7"></div>')

    assert "ID-based" not in by_strategy
    assert by_strategy["Attribute-based"] == ["//*[@data-testid='panel']", "//*[@data-id='7']"]


def test_id_strategy_collects_every_declaration_with_either_quote_style() -> None:
    by_strategy = _by_strategy("<form id='login'><input id=\"user\"></form>")

    assert by_strategy["ID-based"] == ["//*[@id='login']", "//*[@id='user']"]


def test_results_are_deduplicated_in_first_seen_order() -> None:
    markup = '<ul><li class="item">One</li><li class="item">Two</li><li id="x"></li><li id="x"></li></ul>'
    by_strategy = _by_strategy(markup)

    assert by_strategy["ID-based"] == ["//*[@id='x']"]
    assert by_strategy["Class-based"] == ["//*[@class='item']"]
    for xpaths in by_strategy.values():
        assert len(xpaths) == len(set(xpaths))


def test_class_strategy_caps_tokens_per_declaration() -> None:
    by_strategy = _by_strategy('<div class="a  b c d e"></div>')

    assert by_strategy["Class-based"] == [
        "//*[@class='a']",
        "//*[@class='b']",
        "//*[@class='c']",
    ]


def test_attribute_strategy_reads_data_name_and_type_families() -> None:
    by_strategy = _by_strategy("<input type=\"text\" name='q' data-qa=\"search\">")

    assert by_strategy["Attribute-based"] == [
        "//*[@data-qa='search']",
        "//*[@name='q']",
        "//*[@type='text']",
    ]


def test_text_boundary_excludes_two_characters_and_includes_three() -> None:
    assert "Text-based" not in _by_strategy("<b>Go</b>")

    by_strategy = _by_strategy("<span>Add</span>")
    assert by_strategy["Text-based"] == [
        "//*[text()='Add']",
        "//*[contains(text(),'Add')]",
        "//*[normalize-space(text())='Add']",
    ]


def test_text_strategy_skips_long_labels_and_trims_whitespace() -> None:
    assert "Text-based" not in _by_strategy("<p>" + "x" * 50 + "</p>")

    by_strategy = _by_strategy("<p>  Save   changes </p>")
    assert by_strategy["Text-based"] == [
        "//*[text()='Save   changes']",
        "//*[contains(text(),'Save   changes')]",
        "//*[normalize-space(text())='Save   changes']",
    ]


def test_values_with_apostrophes_still_produce_well_formed_literals() -> None:
    by_strategy = _by_strategy("<a id=\"it's\">Don't panic</a>")

    assert by_strategy["ID-based"] == ["//*[@id=\"it's\"]"]
    assert by_strategy["Text-based"][0] == "//*[text()=\"Don't panic\"]"


def test_markup_without_matches_yields_empty_sequence() -> None:
    assert generate_xpaths("") == []
    assert generate_xpaths("just some words") == []
    assert generate_xpaths("   ") == []


def test_malformed_markup_degrades_to_partial_results() -> None:
    by_strategy = _by_strategy('<div id="open" <span class=')

    assert by_strategy["ID-based"] == ["//*[@id='open']"]
    assert "Class-based" not in by_strategy
    assert by_strategy["Structural"][0] == "//div[1]"


def test_non_string_markup_is_treated_as_empty() -> None:
    assert XPathGenerator().generate_xpaths(None) == []  # type: ignore[arg-type]


def test_generation_is_sorted_by_priority_and_repeatable() -> None:
    markup = '<section><label>Email</label><input id="email" class="field" name="email"></section>'
    first = generate_xpaths(markup)
    second = generate_xpaths(markup)

    priorities = [strategy_by_name(result.strategy).priority for result in first]
    assert priorities == sorted(priorities)
    assert first == second


def test_custom_strategy_is_ranked_without_touching_generation_logic() -> None:
    extra = Strategy(
        name="Role-based",
        description="Accessibility role",
        priority=0,
        generate=lambda markup, context=None: ["//*[@role='dialog']"] if "role=" in markup else [],
    )
    generator = XPathGenerator(strategies=(*reversed(DEFAULT_STRATEGIES), extra))

    results = generator.generate_xpaths('<div role="dialog" id="modal"></div>')

    assert [result.strategy for result in results][:2] == ["Role-based", "ID-based"]
    assert [strategy.priority for strategy in generator.strategies] == [0, 1, 2, 3, 4, 5]


def test_structural_strategy_keeps_tag_case() -> None:
    by_strategy = _by_strategy("<DIV>content here</DIV>")

    assert by_strategy["Structural"] == [
        "//DIV[1]",
        "//div[contains(@class, 'container')]//DIV",
        "//main//DIV",
        "//section//DIV",
    ]


def test_strategy_descriptions_and_priorities() -> None:
    assert [(item.name, item.description, item.priority) for item in DEFAULT_STRATEGIES] == [
        ("ID-based", "Most reliable - uses element ID", 1),
        ("Class-based", "Good reliability - uses CSS classes", 2),
        ("Attribute-based", "Moderate reliability - uses data attributes", 3),
        ("Text-based", "Use with caution - based on visible text", 4),
        ("Structural", "Hierarchical positioning - less reliable", 5),
    ]
