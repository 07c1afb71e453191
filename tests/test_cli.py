from __future__ import annotations

from pathlib import Path

from lumio.cli import main
from lumio.parser.ies_parser import parse_ies_file
from lumio.models.ies import IESFormat


def test_demo_then_info_ies(tmp_path: Path, capsys):
    out = tmp_path / "demo.ies"
    assert main(["demo", str(out)]) == 0
    assert out.read_bytes().startswith(b"IESNA:LM-63-2002\r\n")
    assert main(["info", str(out)]) == 0
    text = capsys.readouterr().out
    assert "Format: IES" in text
    assert "Grid: 2 x 3" in text


def test_demo_ldt_info_and_convert(tmp_path: Path, capsys):
    src = tmp_path / "demo.ldt"
    dst = tmp_path / "out" / "demo.ies"
    assert main(["demo", str(src)]) == 0
    assert main(["info", str(src), "--strict"]) == 0
    text = capsys.readouterr().out
    assert "Symmetry: 1" in text
    assert "Max intensity: 300" in text
    assert main(["convert", str(src), str(dst)]) == 0
    ies = parse_ies_file(dst, strict=True)
    assert ies.keywords["MANUFAC"] == "lumio demo"
    assert ies.candela_values == [[300.0, 150.0, 0.0]]


def test_validate_reports_findings(tmp_path: Path, capsys):
    ok = tmp_path / "ok.ies"
    main(["demo", str(ok)])
    assert main(["validate", str(ok)]) == 0

    bad = tmp_path / "bad.ies"
    bad.write_text(
        "IESNA:LM-63-1995\n[TEST] t\n[_X] y\nTILT=NONE\n1 1000 1 1 1 5 2 0 0 0\n1 1 0\n0\n0\n5\n",
        encoding="ascii",
    )
    assert main(["validate", str(bad)]) == 0
    assert main(["validate", str(bad), "--strict"]) == 1
    assert "IES_HDR_RANGE" in capsys.readouterr().out


def test_upgrade_rewrites_as_2002(tmp_path: Path):
    src = tmp_path / "old.ies"
    src.write_text("IESNA91\n[TEST] t\n[DATE] d\n[MANUFAC] m\nTILT=NONE\n1 1 1 1 1 1 2 0 0 0\n1 1 0\n0\n0\n5\n")
    dst = tmp_path / "new.ies"
    assert main(["upgrade", str(src), str(dst)]) == 0
    doc = parse_ies_file(dst)
    assert doc.format == IESFormat.LM_63_2002
    assert doc.keywords["ISSUEDATE"] == "d"


def test_missing_file(tmp_path: Path, capsys):
    assert main(["info", str(tmp_path / "nope.ies")]) == 2
    assert "[ERROR] File not found" in capsys.readouterr().out


def test_parse_error_is_reported(tmp_path: Path, capsys):
    bad = tmp_path / "broken.ldt"
    bad.write_text("only one line\n", encoding="latin-1")
    assert main(["info", str(bad)]) == 3
    out = capsys.readouterr().out
    assert out.startswith("[ERROR]")
    assert str(bad) in out


def test_unknown_extension(tmp_path: Path, capsys):
    f = tmp_path / "lamp.txt"
    f.write_text("x")
    assert main(["validate", str(f)]) == 3
    assert "extension" in capsys.readouterr().out
