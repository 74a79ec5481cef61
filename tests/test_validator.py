import pytest

from nutrition_nl2sql.models.generation import CandidateQuery
from nutrition_nl2sql.schema.descriptor import ColumnInfo, RelationInfo, SchemaDescriptor
from nutrition_nl2sql.sql.rules import BLOCKED_TOKENS
from nutrition_nl2sql.sql.validator import (
    SQLValidationError,
    ensure_valid_sql,
    validate_candidate,
    validate_sql,
)


def test_accepts_count_query_over_food_entries():
    verdict = validate_sql(
        "select count(*) as entries, count(distinct date) as days "
        "from food_entries where food_name ilike '%gin%'"
    )
    assert verdict.accepted
    assert verdict.reason is None


@pytest.mark.parametrize(
    "sql",
    [
        "SELECT SUM(protein_g) AS total_protein FROM daily_nutrition",
        "  select weight_kg from weight order by date desc limit 1  ",
        "SeLeCt date, food_name FROM FOOD_ENTRIES",
    ],
)
def test_accepts_reads_of_allowed_relations(sql):
    assert validate_sql(sql).accepted


@pytest.mark.parametrize(
    "sql",
    [
        "with x as (select 1) select * from food_entries",
        "explain select * from food_entries",
        "",
        "   ",
        "-- comment\nselect * from food_entries",
        "show tables",
    ],
)
def test_rejects_text_not_starting_with_select(sql):
    verdict = validate_sql(sql)
    assert not verdict.accepted
    assert verdict.reason == "only read queries allowed."


@pytest.mark.parametrize("token", [t for t in BLOCKED_TOKENS if t != ";--"])
def test_rejects_each_blocked_keyword_case_insensitively(token):
    sql = f"SELECT date FROM food_entries WHERE x = 1 {token.upper()} y"
    verdict = validate_sql(sql)
    assert not verdict.accepted
    assert verdict.reason == f"blocked keyword: {token}"


def test_rejects_drop_after_select():
    verdict = validate_sql("select 1 from weight; DROP TABLE x")
    assert verdict.reason == "blocked keyword: drop"


def test_rejects_comment_terminator():
    verdict = validate_sql("select date from food_entries;-- and more")
    assert verdict.reason == "blocked keyword: ;--"


def test_first_blocked_token_in_denylist_order_is_reported():
    verdict = validate_sql("select * from weight union select * from food_entries where deleted")
    assert verdict.reason == "blocked keyword: delete"


def test_substring_match_rejects_identifiers_containing_tokens():
    # Known limitation of lexical matching: created_at contains "create".
    verdict = validate_sql("select created_at from food_entries")
    assert verdict.reason == "blocked keyword: create"


def test_rejects_select_without_allowed_relation():
    verdict = validate_sql("select usename, passwd from pg_shadow")
    assert not verdict.accepted
    assert verdict.reason == "must reference an allowed relation."


def test_relation_allow_list_comes_from_schema_descriptor():
    schema = SchemaDescriptor(
        version="test",
        relations=(RelationInfo(name="meals", columns=(ColumnInfo("id", "INTEGER"),)),),
    )
    assert validate_sql("select id from meals", schema).accepted
    assert not validate_sql("select date from food_entries", schema).accepted


def test_validate_candidate_checks_candidate_sql():
    candidate = CandidateQuery(sql="delete from weight", question="how many?")
    verdict = validate_candidate(candidate)
    assert verdict.reason == "only read queries allowed."


def test_ensure_valid_sql_raises_with_reason_and_sql():
    with pytest.raises(SQLValidationError) as excinfo:
        ensure_valid_sql("select 1")
    assert excinfo.value.reason == "must reference an allowed relation."
    assert excinfo.value.sql == "select 1"


def test_validation_is_deterministic():
    sql = "select count(*) as count from weight"
    assert validate_sql(sql) == validate_sql(sql)
