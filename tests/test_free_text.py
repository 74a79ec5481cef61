from datetime import date

import pytest

from conftest import fixed_today
from nutrition_nl2sql.db.queries import RANGE_STATS_QUERY
from nutrition_nl2sql.pipeline.executor import ExecutionError
from nutrition_nl2sql.pipeline.free_text import DateRange, FreeTextAnswerer
from nutrition_nl2sql.pipeline.generator import GenerationError


def _results() -> list[list[dict]]:
    return [
        [{"days_logged": 12, "avg_calories": 2050.0, "avg_protein": 110.0,
          "avg_carbs": 240.0, "avg_fat": 70.0}],
        [{"date": date(2025, 6, 2), "meal": "lunch", "food_name": "Salad", "calories": 320}],
        [{"food_name": "Salad"}, {"food_name": "Toast"}],
    ]


@pytest.mark.asyncio
async def test_answer_uses_fixed_queries_and_defaults(fake_llm_factory, fake_db_factory):
    llm = fake_llm_factory("  Eat more greens.  ")
    database = fake_db_factory(results=_results())

    answer = await FreeTextAnswerer(llm, database, today=fixed_today).answer(
        "what should I eat more of"
    )

    assert answer.answer == "Eat more greens."
    assert answer.method == "llm"
    assert database.calls[0] == (
        RANGE_STATS_QUERY,
        {"start": date(2021, 1, 1), "end": date(2026, 2, 15)},
    )
    assert len(database.calls) == 3
    prompt = llm.prompts[0]
    assert "Date range: all to now" in prompt
    assert "Days logged: 12" in prompt
    assert "=== UNIQUE FOODS (2 items) ===\nSalad, Toast" in prompt
    assert "2025-06-02: Salad" in prompt
    assert llm.max_tokens == [1024]


@pytest.mark.asyncio
async def test_answer_respects_range_and_detail(fake_llm_factory, fake_db_factory):
    llm = fake_llm_factory("ok")
    database = fake_db_factory(results=_results())
    date_range = DateRange(start=date(2025, 6, 1), end=date(2025, 6, 30))

    await FreeTextAnswerer(llm, database).answer(
        "summarise June", date_range, detail_level="high", with_humour=True
    )

    assert database.calls[1][1] == {"start": date(2025, 6, 1), "end": date(2025, 6, 30)}
    prompt = llm.prompts[0]
    assert "Date range: 2025-06-01 to 2025-06-30" in prompt
    assert "Provide comprehensive analysis with examples." in prompt
    assert "TONE: Add a dash of humour" in prompt


@pytest.mark.asyncio
async def test_llm_failure_is_generation_error(fake_llm_factory, fake_db_factory, llm_error):
    answerer = FreeTextAnswerer(fake_llm_factory(error=llm_error), fake_db_factory(results=_results()))
    with pytest.raises(GenerationError):
        await answerer.answer("is my diet ok")


@pytest.mark.asyncio
async def test_database_failure_is_execution_error(fake_llm_factory, fake_db_factory, query_error):
    llm = fake_llm_factory("unused")
    answerer = FreeTextAnswerer(llm, fake_db_factory(error=query_error))
    with pytest.raises(ExecutionError):
        await answerer.answer("is my diet ok")
    assert llm.prompts == []


@pytest.mark.asyncio
async def test_context_normalizes_rows(fake_llm_factory, fake_db_factory):
    answerer = FreeTextAnswerer(fake_llm_factory("x"), fake_db_factory(results=_results()))

    context = await answerer.load_context()

    assert context.start is None
    assert context.stats["days_logged"] == 12
    assert context.recent_foods[0]["date"] == "2025-06-02"
    assert context.unique_foods == ["Salad", "Toast"]
