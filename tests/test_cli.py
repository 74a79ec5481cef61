import pytest

from nutrition_nl2sql.cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "POSTGRES_DSN",
        "LLM_PROVIDER",
        "ANTHROPIC_API_KEY",
        "OPENAI_API_KEY",
        "LOG_LEVEL",
        "LLM_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: nutrition-nl2sql" in capsys.readouterr().out


def test_validate_sql_accepts_read_query(capsys):
    exit_code = main(["validate-sql", "SELECT SUM(protein_g) FROM daily_nutrition"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "SQL validation succeeded." in out
    assert "- tables_read: daily_nutrition" in out


def test_validate_sql_reports_reason(capsys):
    exit_code = main(["validate-sql", "SELECT * FROM weight UNION SELECT * FROM weight"])

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "SQL validation failed:" in out
    assert "- blocked keyword: union" in out


def test_classify_routes_questions(capsys):
    main(["classify", "How many times did I eat pizza?"])
    main(["classify", "Is my diet balanced?"])

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "aggregation: answered with generated SQL",
        "fallback: answered with free text",
    ]


def test_show_schema_needs_no_configuration(capsys):
    assert main(["show-schema"]) == 0
    out = capsys.readouterr().out
    assert "- weight: date (DATE), weight_kg (REAL)" in out


def test_build_prompt_rejects_blank_question(capsys):
    assert main(["build-prompt", "   "]) == 1
    assert "Question cannot be empty." in capsys.readouterr().err


def test_config_check_without_dsn_exits_2(capsys):
    assert main(["config-check"]) == 2
    assert "POSTGRES_DSN" in capsys.readouterr().err


def test_config_check_redacts_key(monkeypatch, capsys):
    monkeypatch.setenv("POSTGRES_DSN", "postgresql://reader@localhost/nutrition")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "secret")

    assert main(["config-check"]) == 0
    out = capsys.readouterr().out
    assert "- LLM_API_KEY: ***" in out
    assert "secret" not in out


def test_ask_requires_llm_key(monkeypatch, capsys):
    monkeypatch.setenv("POSTGRES_DSN", "postgresql://reader@localhost/nutrition")

    assert main(["ask", "How many eggs did I eat?"]) == 2
    assert "ANTHROPIC_API_KEY is required" in capsys.readouterr().err


def test_daily_nutrition_needs_both_bounds(monkeypatch, capsys):
    monkeypatch.setenv("POSTGRES_DSN", "postgresql://reader@localhost/nutrition")

    assert main(["daily-nutrition", "--from", "2026-01-01"]) == 2
    assert "--from and --to must be given together." in capsys.readouterr().err


def test_validate_sql_rejects_writes(capsys):
    assert main(["validate-sql", "DELETE FROM weight"]) == 1
    assert "- only read queries allowed." in capsys.readouterr().out


def test_unknown_log_level_exits_2(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--log-level", "chatty", "classify", "how many eggs"])

    assert excinfo.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_log_level_is_case_insensitive(capsys):
    assert main(["--log-level", "debug", "classify", "how many eggs"]) == 0
    assert "aggregation" in capsys.readouterr().out
