import json

from actor_csv.cli import main
from actor_csv.rules import UTF8_BOM


def test_missing_input_prints_usage_and_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert main([]) != 0

    err = capsys.readouterr().err
    assert "input" in err
    assert "output" in err
    assert list(tmp_path.iterdir()) == []


def test_converts_and_reports(tmp_path, capsys):
    src = tmp_path / "actors.json"
    src.write_text(json.dumps([{"uuid": "u1", "name": "Acme"}, {"uuid": "u2"}]), encoding="utf-8")

    assert main([str(src)]) == 0

    out = capsys.readouterr().out
    assert str(src) in out
    assert str(tmp_path / "actors.csv") in out
    assert "(2 data rows + header)" in out
    assert "BOM" in out
    assert (tmp_path / "actors.csv").read_bytes().startswith(UTF8_BOM)


def test_explicit_output_path(tmp_path):
    src = tmp_path / "data"
    src.write_text('[{"uuid": "u1"}]', encoding="utf-8")
    out = tmp_path / "export.csv"

    assert main([str(src), str(out)]) == 0
    assert out.exists()
    assert not (tmp_path / "data.csv").exists()


def test_missing_input_file(tmp_path, capsys):
    src = tmp_path / "missing.json"

    assert main([str(src)]) == 1

    err = capsys.readouterr().err
    assert err.startswith("Error:")
    assert str(src) in err
    assert not (tmp_path / "missing.csv").exists()


def test_invalid_json(tmp_path, capsys):
    src = tmp_path / "broken.json"
    src.write_text("[{", encoding="utf-8")

    assert main([str(src)]) == 1
    assert "broken.json" in capsys.readouterr().err


def test_unwritable_output(tmp_path, capsys):
    src = tmp_path / "actors.json"
    src.write_text("[]", encoding="utf-8")

    assert main([str(src), str(tmp_path / "nope" / "out.csv")]) == 1
    assert "out.csv" in capsys.readouterr().err


def test_lone_surrogate_is_reported_as_parse_error(tmp_path, capsys):
    src = tmp_path / "actors.json"
    src.write_bytes(b'[{"uuid": "u1", "name": "\\ud800"}]')

    assert main([str(src)]) == 1

    err = capsys.readouterr().err
    assert err.startswith("Error:")
    assert "surrogate" in err
    assert not (tmp_path / "actors.csv").exists()


def test_non_utf8_input_is_reported_as_parse_error(tmp_path, capsys):
    src = tmp_path / "actors.json"
    src.write_bytes('[{"uuid": "u1", "cityName": "Zürich"}]'.encode("latin-1"))

    assert main([str(src)]) == 1
    assert "not valid UTF-8" in capsys.readouterr().err
    assert not (tmp_path / "actors.csv").exists()
