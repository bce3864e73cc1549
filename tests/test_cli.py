from __future__ import annotations

import json

import pytest
from rich.prompt import Prompt

from talent_risk.main import main

EXTREME_ARGS = [
    "assess",
    "--firm-size", "large",
    "--bilingual-exposure", "high",
    "--region", "brussels",
    "--hiring-pressure", "aggressive",
]


def test_assess_prints_tier_and_heatmap(capsys) -> None:
    main(EXTREME_ARGS)
    out = capsys.readouterr().out
    assert "Risque structurel" in out
    assert "Recommandations prioritaires" in out
    assert "bruxelloise" in out


def test_assess_json(capsys) -> None:
    main([*EXTREME_ARGS, "--json"])
    out = capsys.readouterr().out
    assert '"tier": "structural"' in out
    assert '"score": 100' in out


def test_assess_html(capsys) -> None:
    main([*EXTREME_ARGS, "--html"])
    out = capsys.readouterr().out
    assert "<li>" in out


def test_assess_invalid_value_exits_2(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["assess", "--firm-size", "huge", "--bilingual-exposure", "low",
              "--region", "other", "--hiring-pressure", "stable"])
    assert exc_info.value.code == 2
    assert "firm_size" in capsys.readouterr().out


def test_assess_missing_option_exits_2(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["assess", "--firm-size", "small"])
    assert exc_info.value.code == 2
    assert "Missing answers" in capsys.readouterr().out


def test_no_command_prints_help() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1


def test_bad_tables_file_exits_1(tmp_path, capsys) -> None:
    path = tmp_path / "tables.json"
    path.write_text(json.dumps({"tiers": {}}), encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        main(["--tables", str(path), "heatmap"])
    assert exc_info.value.code == 1


def test_heatmap_command(capsys) -> None:
    main(["heatmap"])
    out = capsys.readouterr().out
    assert "Tension critique" in out
    assert "liégeoise" in out


def test_wizard_supports_going_back(monkeypatch, capsys) -> None:
    replies = iter(["small", "<", "large", "high", "brussels", "aggressive"])
    monkeypatch.setattr(Prompt, "ask", lambda *args, **kwargs: next(replies))

    main(["wizard"])
    out = capsys.readouterr().out
    assert "Étape 2/4" in out
    assert "Risque structurel" in out


def test_bad_tables_from_environment_exits_1(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setattr("talent_risk.config.TABLES_PATH", str(tmp_path / "missing.json"))
    with pytest.raises(SystemExit) as exc_info:
        main(["heatmap"])
    assert exc_info.value.code == 1
    assert "Cannot load tables" in capsys.readouterr().out


def test_tables_from_environment_are_used(tmp_path, monkeypatch, capsys) -> None:
    path = tmp_path / "tables.json"
    path.write_text(json.dumps({"base_score": 90}), encoding="utf-8")
    monkeypatch.setattr("talent_risk.config.TABLES_PATH", str(path))

    main(["assess", "--firm-size", "medium", "--bilingual-exposure", "medium",
          "--region", "other", "--hiring-pressure", "moderate", "--json"])
    assert '"tier": "structural"' in capsys.readouterr().out


def test_unknown_log_level_exits_1(monkeypatch, capsys) -> None:
    monkeypatch.setattr("talent_risk.main.LOG_LEVEL", "CHATTY")
    with pytest.raises(SystemExit) as exc_info:
        main(["heatmap"])
    assert exc_info.value.code == 1
    assert "CHATTY" in capsys.readouterr().out


def test_bad_port_is_a_usage_error(monkeypatch) -> None:
    monkeypatch.setattr("talent_risk.main.API_PORT", "eighty")
    with pytest.raises(SystemExit) as exc_info:
        main(["serve"])
    assert exc_info.value.code == 2


def test_json_uses_camel_case_indicators(capsys) -> None:
    main([*EXTREME_ARGS, "--json"])
    out = capsys.readouterr().out
    assert '"aiLeverage"' in out
    assert '"ai_leverage"' not in out
