from xpathadvisor.xpath_generator import (
    INVALID_SYNTAX_ISSUE,
    LONG_PATH_SUGGESTION,
    LOW_ROBUSTNESS_SUGGESTION,
    POSITIONAL_SUGGESTION,
    SYNTAX_ISSUE,
    TEXT_MATCH_SUGGESTION,
    XPathGenerator,
    validate_xpath,
)


def test_id_locator_scores_high_and_is_valid() -> None:
    report = validate_xpath("//*[@id='submit']", "<button id='submit'>Send</button>")

    assert report.is_valid
    assert report.specificity >= 10
    assert report.robustness >= 10
    assert report.maintainability == 8
    assert report.issues == []
    assert report.suggestions == []
    assert report.verdict == "good"


def test_positional_penalty_is_applied_once() -> None:
    report = validate_xpath("//div[1]/span[2]")

    assert report.is_valid
    assert report.specificity == 2
    assert report.robustness == -3
    assert report.maintainability == 7
    assert report.suggestions == [LOW_ROBUSTNESS_SUGGESTION, POSITIONAL_SUGGESTION]
    assert report.verdict == "poor"


def test_relative_locator_is_flagged_but_still_scored() -> None:
    report = validate_xpath("div[@id='x']")

    assert not report.is_valid
    assert report.issues == [SYNTAX_ISSUE]
    assert report.specificity == 10
    assert report.robustness == 10
    assert report.maintainability == 10


def test_empty_string_is_invalid() -> None:
    report = validate_xpath("")

    assert not report.is_valid
    assert report.issues
    assert report.maintainability == 10


def test_exact_text_match_suggests_contains() -> None:
    report = validate_xpath("//button[text()='Save']")

    assert report.specificity == 3
    assert report.robustness == 0
    assert TEXT_MATCH_SUGGESTION in report.suggestions

    relaxed = validate_xpath("//button[contains(text(), 'Save')]")
    assert TEXT_MATCH_SUGGESTION not in relaxed.suggestions
    assert relaxed.robustness == 5


def test_deep_path_suggests_shortening_and_maintainability_floors_at_zero() -> None:
    report = validate_xpath("/html/body/div/div/section/button")

    assert report.maintainability == 4
    assert LONG_PATH_SUGGESTION in report.suggestions

    deepest = validate_xpath("/a/b/c/d/e/f/g/h/i/j/k/l")
    assert deepest.maintainability == 0


def test_robustness_weights_accumulate() -> None:
    report = validate_xpath("//*[@data-testid='save' and @role='button'][normalize-space(text())='Save']")

    assert report.robustness == 9 + 7 + 4
    assert report.specificity == 5
    assert report.suggestions == []


def test_class_locator_lands_in_warning_band() -> None:
    report = validate_xpath("//*[@class='btn']")

    assert report.specificity == 7
    assert report.robustness == 0
    assert report.verdict == "warning"


def test_non_string_input_falls_into_syntax_failure_branch() -> None:
    report = validate_xpath(None)  # type: ignore[arg-type]

    assert not report.is_valid
    assert report.issues == [INVALID_SYNTAX_ISSUE]
    assert report.xpath == "None"


def test_validate_results_covers_every_generated_locator_in_order() -> None:
    generator = XPathGenerator()
    markup = '<button id="go" class="btn">Save</button>'
    results = generator.generate_xpaths(markup)

    reports = generator.validate_results(results, markup)

    assert [report.xpath for report in reports] == [xpath for result in results for xpath in result.xpaths]
    assert reports == generator.validate_results(results, markup)


def test_report_serialises_with_camel_case_validity_key() -> None:
    payload = validate_xpath("//*[@id='a']").to_dict()

    assert payload["isValid"] is True
    assert set(payload) == {
        "xpath",
        "isValid",
        "specificity",
        "robustness",
        "maintainability",
        "issues",
        "suggestions",
    }


def test_suggestion_wording_for_every_trigger() -> None:
    positional = validate_xpath("//div[1]/span[2]")
    assert positional.suggestions == [
        "Consider using ID or data attributes for more robust selection",
        "Avoid position-based selectors as they break easily when DOM changes",
    ]

    deep = validate_xpath("/html/body/div/div/section/button[text()='Go']")
    assert deep.suggestions == [
        "Consider using ID or data attributes for more robust selection",
        "Simplify XPath - shorter paths are more maintainable",
        "Consider using contains() for text matching to handle whitespace variations",
    ]
