"""
Tests for the ``convert`` command.
"""

import json

import pytest

from closure_shift.cli.__main__ import main


@pytest.fixture
def js_file(tmp_path):
  path = tmp_path / "in.js"
  path.write_text("goog.isDef(x);\n", encoding="utf-8")
  return path


def test_convert_to_out_file(js_file, tmp_path, captured_console):
  out = tmp_path / "out" / "res.js"
  assert main(["convert", str(js_file), "-t", "isdef", "--out", str(out)]) == 0
  assert out.read_text(encoding="utf-8") == "x !== undefined;\n"
  assert js_file.read_text(encoding="utf-8") == "goog.isDef(x);\n"
  assert "Migrated:" in captured_console.export_text()


def test_dry_run_prints_to_stdout(js_file, tmp_path, capsys, captured_console):
  out = tmp_path / "res.js"
  assert main(["convert", str(js_file), "-t", "isdef", "--out", str(out), "--dry"]) == 0
  assert capsys.readouterr().out == "x !== undefined;\n"
  assert not out.exists()


def test_no_destination_prints_to_stdout(js_file, capsys, captured_console):
  assert main(["convert", str(js_file), "-t", "isdef"]) == 0
  assert capsys.readouterr().out == "x !== undefined;\n"


def test_in_place(js_file, captured_console):
  assert main(["convert", str(js_file), "-t", "isdef", "--in-place"]) == 0
  assert js_file.read_text(encoding="utf-8") == "x !== undefined;\n"


def test_chained_transforms(tmp_path, capsys, captured_console):
  path = tmp_path / "in.js"
  path.write_text("goog.isDef(a) && goog.isNull(b);\n", encoding="utf-8")
  assert main(["convert", str(path), "-t", "isdef", "-t", "isnull"]) == 0
  assert capsys.readouterr().out == "a !== undefined && b === null;\n"


def test_directory_conversion(tmp_path, captured_console):
  src = tmp_path / "src"
  (src / "sub").mkdir(parents=True)
  (src / "a.js").write_text("goog.isNull(a);\n", encoding="utf-8")
  (src / "sub" / "b.js").write_text("goog.isNull(b);\n", encoding="utf-8")
  (src / "notes.txt").write_text("goog.isNull(c);\n", encoding="utf-8")
  out = tmp_path / "out"

  assert main(["convert", str(src), "-t", "isnull", "--out", str(out)]) == 0
  assert (out / "a.js").read_text(encoding="utf-8") == "a === null;\n"
  assert (out / "sub" / "b.js").read_text(encoding="utf-8") == "b === null;\n"
  assert not (out / "notes.txt").exists()
  assert "Batch Complete: 2/2" in captured_console.export_text()


def test_empty_directory_is_not_an_error(tmp_path, captured_console):
  src = tmp_path / "src"
  src.mkdir()
  assert main(["convert", str(src), "--dry"]) == 0
  assert "No .js files found" in captured_console.export_text()


def test_directory_requires_destination(tmp_path, captured_console):
  src = tmp_path / "src"
  src.mkdir()
  assert main(["convert", str(src)]) == 1


def test_missing_input(tmp_path, captured_console):
  assert main(["convert", str(tmp_path / "missing.js")]) == 1
  assert "Input not found" in captured_console.export_text()


def test_in_place_conflicts_with_out(js_file, tmp_path, captured_console):
  assert main(["convert", str(js_file), "--in-place", "--out", str(tmp_path / "o.js")]) == 1


def test_unknown_transform(js_file, captured_console):
  assert main(["convert", str(js_file), "-t", "nope"]) == 1
  assert "Unknown transform(s): nope" in captured_console.export_text()


def test_parse_error_fails_and_writes_nothing(tmp_path, captured_console):
  bad = tmp_path / "bad.js"
  bad.write_text("var = ;\n", encoding="utf-8")
  out = tmp_path / "out.js"
  assert main(["convert", str(bad), "--out", str(out)]) == 1
  assert not out.exists()
  text = captured_console.export_text()
  assert "Migration Report" in text
  assert "Summary: 0 Clean, 1 with Issues." in text


def test_config_overrides(js_file, capsys, captured_console):
  js_file.write_text("goog.isFunction(f);\n", encoding="utf-8")
  assert main(["convert", str(js_file), "-t", "isfunction", "--config", "quote=double"]) == 0
  assert capsys.readouterr().out == 'typeof f === "function";\n'


def test_json_trace(js_file, tmp_path, capsys, captured_console):
  trace = tmp_path / "trace.json"
  assert main(["convert", str(js_file), "-t", "isdef", "--json-trace", str(trace)]) == 0
  events = json.loads(trace.read_text(encoding="utf-8"))
  assert isinstance(events, list)
  assert events[0]["type"] == "phase_start"
  assert any(e["type"] == "tree_mutation" for e in events)


def test_version(capsys):
  with pytest.raises(SystemExit) as excinfo:
    main(["--version"])
  assert excinfo.value.code == 0
  assert "0.1.0" in capsys.readouterr().out
