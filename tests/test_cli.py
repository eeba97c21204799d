import io
import json
import math
import sys

import pytest
from PIL import Image

from storagecalc import cli


def _run_cli(monkeypatch, argv, stdin_text):
    monkeypatch.setattr(sys, "argv", ["prog", *argv])
    monkeypatch.setattr(sys, "stdin", io.StringIO(stdin_text))
    cli.main()


def test_interactive_session_prints_sizes_and_total(capsys, monkeypatch):
    _run_cli(monkeypatch, [], "BMP 1000 1000\njpg 500 500\ng 1 2\nq\n")
    out = capsys.readouterr().out
    compressed = round(1_375_000 / math.log(5))

    assert out.startswith("Storage calculator\n")
    assert "[BMP] size: 1312500  index: 1" in out
    assert "[JPEG/Baseline] size: 62500  index: 2" in out
    assert "previous size of images: 1375000" in out
    assert out.rstrip().endswith(f"Total size: {compressed} bytes")
    assert "\x1b[" not in out


def test_invalid_command_does_not_consume_index(capsys, monkeypatch):
    _run_cli(monkeypatch, ["--no-banner"], "xyz 10 10\nbmp 10 10\nq\n")
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "[invalid input]"
    assert "[BMP] size: 100  index: 1" in out
    assert "Total size: 100 bytes" in out


def test_end_of_input_prints_total(capsys, monkeypatch):
    _run_cli(monkeypatch, ["--no-banner"], "jpg 0 0\n")
    assert capsys.readouterr().out.rstrip().endswith("Total size: 0 bytes")


def test_no_banner_from_environment(capsys, monkeypatch):
    monkeypatch.setenv("STORAGECALC_NO_BANNER", "1")
    _run_cli(monkeypatch, [], "q\n")
    assert "Storage calculator" not in capsys.readouterr().out


def test_preloaded_files_are_cataloged(tmp_path, capsys, monkeypatch):
    bmp = tmp_path / "scan.bmp"
    Image.new("RGB", (300, 200)).save(bmp)
    png = tmp_path / "icon.png"
    Image.new("RGB", (4, 4)).save(png)

    _run_cli(monkeypatch, ["--no-banner", str(bmp), str(png)], "g 1\nq\n")
    out = capsys.readouterr().out
    assert "scan.bmp (300x200)" in out
    assert "[BMP] size: 60000  index: 1" in out
    assert "[skipped] Unsupported image format 'PNG'" in out
    assert "[1]  size: 60000" in out


def test_report_written_on_exit(tmp_path, capsys, monkeypatch):
    report = tmp_path / "out" / "session.json"
    _run_cli(monkeypatch, ["--no-banner", "--report", str(report)], "bmp 20 20\njp2 20 20\nq\n")
    out = capsys.readouterr().out
    data = json.loads(report.read_text(encoding="utf-8"))
    assert f"Total size: {data['total']} bytes" in out
    assert len(data["images"]) == 2


def test_unwritable_report_fails_with_summary(tmp_path, capsys, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory")
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(monkeypatch, ["--no-banner", "--report", str(blocker / "r.json")], "q\n")
    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert "STOP/BLOCKED" in out
    assert "Unable to write report" in out


def test_max_pixels_out_of_range_rejected(monkeypatch):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(monkeypatch, ["--max-pixels", "10"], "q\n")
    assert excinfo.value.code == 2


def test_out_of_range_dimension_is_not_fatal(capsys, monkeypatch):
    huge = "9" * 160
    _run_cli(monkeypatch, ["--no-banner"], f"jpg {huge} {huge}\nbmp 1 1\nq\n")
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "[invalid input]"
    assert out.rstrip().endswith("Total size: 1 bytes")
