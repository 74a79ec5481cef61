import pytest

from nutrition_nl2sql.pipeline.classifier import is_aggregation_question


@pytest.mark.parametrize(
    "question",
    [
        "how many times did I have coffee",
        "How much protein did I eat in January?",
        "Count my gin entries",
        "What was my TOTAL calorie intake last week",
        "sum of sugar in 2025",
        "average calories per day",
        "avg fat in March",
        "how often do I eat pizza",
        "frequency of beer",
        "what is the number of days I logged",
        "how many beers did I have in 2025",
    ],
)
def test_aggregation_questions_are_routed_to_sql(question):
    assert is_aggregation_question(question) is True


@pytest.mark.parametrize(
    "question",
    [
        "what should I eat more of",
        "Is my diet balanced?",
        "suggest a healthy breakfast",
        "",
    ],
)
def test_other_questions_fall_back(question):
    assert is_aggregation_question(question) is False
