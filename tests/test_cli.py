import json
import logging
import pytest
import pandas as pd
from ev_thermal.cli import main

def test_cli_runs_default(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Liquid Cooling" in out
    assert "1582.03" in out
    assert "nominal" in out

def test_cli_overrides_and_csv(tmp_path, capsys):
    csv_path = tmp_path / "out.csv"
    code = main(["--cooling", "Passive Air", "--duration", "30", "--csv", str(csv_path)])

    assert code == 0
    assert "Passive Air" in capsys.readouterr().out
    assert len(pd.read_csv(csv_path)) == 31

def test_cli_config_file(tmp_path, capsys):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"cRate": 3.0, "coolingType": "Immersion"}))

    assert main(["--config", str(cfg)]) == 0
    assert "Immersion" in capsys.readouterr().out

def test_cli_invalid_cooling(capsys):
    assert main(["--cooling", "Unknown"]) == 2
    err = capsys.readouterr().err
    assert "InvalidCoolingType" in err
    assert err.count("InvalidCoolingType") == 1

def test_cli_advise_without_key(monkeypatch, caplog):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with caplog.at_level(logging.WARNING, logger="ev_thermal.cli"):
        assert main(["--advise"]) == 0

    assert "GEMINI_API_KEY is not set" in caplog.text
    assert any(r.levelno == logging.WARNING and r.name == "ev_thermal.cli" for r in caplog.records)

@pytest.mark.parametrize("content, needle", [
    ('{"soc": 0.8}', "unknown key"),
    ("[1, 2, 3]", "expected a JSON object"),
    ("{not json", "Cannot read config file"),
])
def test_cli_bad_config_file(tmp_path, capsys, content, needle):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(content)

    assert main(["--config", str(cfg)]) == 2
    err = capsys.readouterr().err
    assert needle in err
    assert "Traceback" not in err

def test_cli_missing_config_file(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.json")]) == 2
    assert "Cannot read config file" in capsys.readouterr().err
