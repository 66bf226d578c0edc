import io

import pytest

from proptree.info import InfoParserError
from proptree.settings import main, process_settings, process_settings_without_trick

FULL = "settings\n{\n    setting1 15\n    setting2 9.876\n    setting3 Alice\n}\n"
PARTIAL = "settings\n{\n    setting1 7\n}\n"
NONE = "other\n{\n    value 1\n}\n"


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_fully_existent_settings(tmp_path):
    path = _write(tmp_path, "full.info", FULL)
    out = io.StringIO()
    process_settings(path, out)
    assert out.getvalue() == (
        f"\n    Processing {path}\n"
        "        Setting 1 is 15\n"
        "        Setting 2 is 9.876\n"
        "        Setting 3 is Alice\n"
    )


def test_partially_existent_settings(tmp_path):
    path = _write(tmp_path, "partial.info", PARTIAL)
    out = io.StringIO()
    process_settings(path, out)
    lines = out.getvalue().splitlines()
    assert lines[2] == "        Setting 1 is 7"
    assert lines[3] == "        Setting 2 is 0"
    assert lines[4] == "        Setting 3 is default"


def test_missing_section_uses_defaults(tmp_path):
    path = _write(tmp_path, "none.info", NONE)
    out = io.StringIO()
    process_settings(path, out)
    lines = out.getvalue().splitlines()
    assert lines[2:] == [
        "        Setting 1 is 0",
        "        Setting 2 is 0",
        "        Setting 3 is default",
    ]


def test_unconvertible_value_uses_default(tmp_path):
    path = _write(tmp_path, "bad.info", "settings\n{\n  setting1 abc\n}\n")
    out = io.StringIO()
    process_settings(path, out)
    lines = out.getvalue().splitlines()
    assert lines[2] == "        Setting 1 is 0"


@pytest.mark.parametrize("text", [FULL, PARTIAL, NONE])
def test_both_approaches_agree(tmp_path, text):
    path = _write(tmp_path, "s.info", text)
    with_trick = io.StringIO()
    without_trick = io.StringIO()
    process_settings(path, with_trick)
    process_settings_without_trick(path, without_trick)
    assert with_trick.getvalue() == without_trick.getvalue()
    assert f"Processing {path}" in with_trick.getvalue()


def test_missing_file_raises(tmp_path):
    with pytest.raises(InfoParserError):
        process_settings(tmp_path / "absent.info", io.StringIO())


def test_main_with_default_files(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path, "settings_fully-existent.info", FULL)
    _write(tmp_path, "settings_partially-existent.info", PARTIAL)
    _write(tmp_path, "settings_non-existent.info", NONE)
    assert main([]) == 0
    output = capsys.readouterr().out
    assert output.startswith("Processing settings with empty-ptree-trick:\n")
    assert "\nProcessing settings without empty-ptree-trick:\n" in output
    assert output.count("Processing settings_fully-existent.info") == 2
    assert "Error:" not in output


def test_main_reports_error(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["missing.info"]) == 0
    output = capsys.readouterr().out
    assert "Error: " in output
    assert "cannot open file" in output