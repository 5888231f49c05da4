from __future__ import annotations

import importlib
import json
from pathlib import Path

from typer.testing import CliRunner

import mentorpath.cli.app as cli_module
from mentorpath.cli.app import app
from mentorpath.config import get_settings

runner = CliRunner()


def _invoke(*args: str) -> dict:
    result = runner.invoke(app, list(args))
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def test_classify_reports_domain() -> None:
    payload = _invoke("classify", "java for android")
    assert payload["detected_domain"] == "Mobile App Development"
    assert payload["skill_domain"] == "Mobile Development"


def test_analyze_uses_classified_direction() -> None:
    payload = _invoke("analyze", "I want to master kubernetes and terraform for cloud infrastructure")
    assert payload["skill_direction"] == "DevOps & Cloud"
    assert payload["skill_level"] == "Advanced"


def test_gate_for_anonymous_user() -> None:
    assert _invoke("gate", "--path", "/dashboard")["redirect_to"] == "/auth"


def test_import_repair_and_show(tmp_path: Path) -> None:
    source = tmp_path / "profiles.json"
    source.write_text(
        json.dumps(
            [
                {"id": "jane", "email": "jane.doe@example.com"},
                {"id": "x", "email": "x@example.com"},
            ]
        ),
        encoding="utf-8",
    )
    source_with_responses = tmp_path / "more.json"
    source_with_responses.write_text(
        json.dumps({"id": "jane", "responses": {"learning_direction": "unity game development"}}),
        encoding="utf-8",
    )

    imported = _invoke("profile", "import", "--file", str(source))
    assert [row["id"] for row in imported["imported"]] == ["jane", "x"]
    _invoke("profile", "import", "--file", str(source_with_responses))

    repaired = _invoke("repair", "run")
    assert repaired["summary"]["completed"] == 1
    assert repaired["summary"]["skipped"] == 1

    shown = _invoke("profile", "show", "--user-id", "jane")
    assert shown["profile"]["full_name"] == "Jane Doe"
    assert shown["profile"]["inferred_skill_domain"] == "Game Development"
    assert shown["mentor"]["mentor_name"] == "Ryan Cooper"
    assert shown["curriculum"]["total"] == 4
    assert shown["audit"][0] == {"field": "full_name", "source": "email", "value": "Jane Doe"}


def test_help_uses_configured_app_name(monkeypatch) -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Mentorpath onboarding CLI" in result.output

    monkeypatch.setenv("APP_NAME", "Skillforge")
    get_settings.cache_clear()
    try:
        reloaded = importlib.reload(cli_module)
        result = runner.invoke(reloaded.app, ["--help"])
        assert result.exit_code == 0
        assert "Skillforge onboarding CLI" in result.output
    finally:
        monkeypatch.delenv("APP_NAME")
        get_settings.cache_clear()
        importlib.reload(cli_module)
