import pytest

from spark_query_quality.core.models import SearchMode
from spark_query_quality.core.rules import (
    ALL_RULES,
    check_actionability,
    check_keyword_density,
    check_length,
    check_mode_purity,
    check_question_format,
    check_specificity,
    check_vague_terms,
)

INTENT = SearchMode.INTENT
B2B = SearchMode.B2B


def test_rule_declaration_order_and_weights():
    assert [(r.id, r.weight) for r in ALL_RULES] == [
        ("length", 10),
        ("vague-terms", 15),
        ("question-format", 15),
        ("mode-purity", 30),
        ("specificity", 15),
        ("keyword-density", 10),
        ("actionability", 5),
    ]


def test_mode_purity_carries_the_highest_weight():
    heaviest = max(ALL_RULES, key=lambda r: r.weight)
    assert heaviest.id == "mode-purity"


def test_rule_evaluate_labels_outcome():
    result = ALL_RULES[0].evaluate("hi", INTENT)
    assert result.rule_id == "length"
    assert result.name == "Length Check"
    assert result.weight == 10
    assert result.passed is False
    assert result.score == 0


@pytest.mark.parametrize(
    "query, passed, score",
    [
        ("hi", False, 0),
        ("   short   ", False, 0),
        ("fifteen chars!!", True, 80),
        ("x" * 20, True, 100),
        ("x" * 200, True, 100),
        ("x" * 201, True, 80),
        ("x" * 500, True, 80),
        ("x" * 501, False, 50),
    ],
)
def test_length_bands(query, passed, score):
    outcome = check_length(query, INTENT)
    assert (outcome.passed, outcome.score) == (passed, score)


def test_length_details_use_trimmed_length():
    assert check_length("  hi  ", INTENT).details == "2 characters (minimum 10)"
    assert check_length("x" * 501, B2B).details == "501 characters (maximum 500)"


def test_vague_terms_scoring():
    clean = check_vague_terms("organic dog food subscriptions", INTENT)
    assert (clean.passed, clean.score, clean.details) == (True, 100, None)

    one = check_vague_terms("best organic dog food", INTENT)
    assert (one.passed, one.score) == (False, 30)
    assert one.details == "Remove: best"

    many = check_vague_terms("best top leading software", INTENT)
    assert (many.passed, many.score) == (False, 0)
    assert many.details == "Remove: best, top, leading"


@pytest.mark.parametrize(
    "query, passed",
    [
        ("what is the best CRM?", False),
        ("why do dogs bark", False),
        ("dog training classes?", False),
        ("dog training classes", True),
        ("whatever works", True),
    ],
)
def test_question_format(query, passed):
    outcome = check_question_format(query, B2B)
    assert outcome.passed is passed
    assert outcome.score == (100 if passed else 0)


def test_intent_purity_passes_with_signal_and_no_violations():
    outcome = check_mode_purity("interested in sustainable gardening and zero-waste living", INTENT)
    assert (outcome.passed, outcome.score) == (True, 100)


def test_intent_purity_requires_behavioural_signal():
    outcome = check_mode_purity("sustainable gardening and zero-waste living", INTENT)
    assert (outcome.passed, outcome.score) == (False, 50)
    assert outcome.message == "Intent mode requires behavioral signals"


def test_intent_signal_does_not_offset_persona_violation():
    outcome = check_mode_purity("software engineers who are interested in machine learning", INTENT)
    assert (outcome.passed, outcome.score) == (False, 40)
    assert outcome.details == 'Remove: persona: "software engineers"'


def test_intent_purity_two_violations():
    outcome = check_mode_purity("marketing managers who are married and interested in yoga", INTENT)
    assert (outcome.passed, outcome.score) == (False, 20)
    assert outcome.details == 'Remove: persona: "marketing managers", demographic: "married"'


def test_intent_purity_three_violations_scores_zero():
    outcome = check_mode_purity("CEO women based in Austin interested in golf", INTENT)
    assert (outcome.passed, outcome.score) == (False, 0)
    assert outcome.details == 'Remove: persona: "CEO", demographic: "women", location: "based in Austin"'


def test_overlapping_location_matches_count_as_one_violation():
    outcome = check_mode_purity("people from Boston who love hiking", INTENT)
    assert (outcome.passed, outcome.score) == (False, 40)
    assert outcome.details == 'Remove: location: "people from Boston"'


def test_location_as_topic_keeps_intent_query_pure():
    outcome = check_mode_purity("passionate about Austin music festivals", INTENT)
    assert (outcome.passed, outcome.score) == (True, 100)


def test_b2b_purity_passes_with_company_attributes():
    outcome = check_mode_purity("SaaS companies with 50-200 employees in the fintech industry", B2B)
    assert (outcome.passed, outcome.score) == (True, 100)


def test_b2b_purity_single_forbidden_intent():
    outcome = check_mode_purity("companies looking for new CRM vendors", B2B)
    assert (outcome.passed, outcome.score) == (False, 40)
    assert outcome.details == 'Remove intent language: "looking for"'


def test_b2b_purity_multiple_forbidden_intent():
    outcome = check_mode_purity("startups planning to raise and will hire soon", B2B)
    assert (outcome.passed, outcome.score) == (False, 0)


def test_b2b_purity_requires_company_attributes():
    outcome = check_mode_purity("gardening and cooking recipes", B2B)
    assert (outcome.passed, outcome.score) == (False, 50)
    assert outcome.message == "B2B mode requires company-specific attributes"


def test_same_query_scores_differently_per_mode():
    query = "companies interested in cloud security"
    assert check_mode_purity(query, B2B).score == 40
    assert check_mode_purity(query, INTENT).score == 100


@pytest.mark.parametrize(
    "query, passed, score",
    [
        ("crm", False, 40),
        ("enterprise accounting software buyers", True, 80),
        ("interested in sustainable gardening and zero-waste living", True, 80),
        ("SaaS companies with 50-200 employees in the fintech industry", True, 100),
    ],
)
def test_specificity(query, passed, score):
    outcome = check_specificity(query, INTENT)
    assert (outcome.passed, outcome.score) == (passed, score)


@pytest.mark.parametrize(
    "query, passed, score",
    [
        ("hi", True, 100),
        ("data pipelines and warehouses", True, 100),
        ("data data pipelines", True, 80),
        ("data data data pipelines", False, 50),
        ("Data data DATA data", False, 20),
    ],
)
def test_keyword_density(query, passed, score):
    outcome = check_keyword_density(query, B2B)
    assert (outcome.passed, outcome.score) == (passed, score)


@pytest.mark.parametrize(
    "query, passed, score",
    [
        ("", False, 0),
        ("crm", False, 0),
        ("crm sales tools", True, 70),
        ("crm sales tools for dentists", True, 100),
    ],
)
def test_actionability(query, passed, score):
    outcome = check_actionability(query, INTENT)
    assert (outcome.passed, outcome.score) == (passed, score)


@pytest.mark.parametrize("mode", list(SearchMode))
@pytest.mark.parametrize("query", ["", "   ", "?", "\n\t"])
def test_every_rule_handles_degenerate_input(query, mode):
    for rule in ALL_RULES:
        result = rule.evaluate(query, mode)
        assert 0 <= result.score <= 100
