from __future__ import annotations

import argparse
import logging
from pathlib import Path

from lumio.derived.metrics import fwhm, fwtm, max_intensity
from lumio.export.ies_writer import export_ies
from lumio.models.eulumdat import EulumdatDocument
from lumio.parser.errors import PhotometryError
from lumio.parser.ies_parser import parse_ies_file
from lumio.parser.ldt_parser import parse_ldt_file
from lumio.parser.pipeline import load_photometry
from lumio.photometry.conversion import eulumdat_to_ies
from lumio.photometry.upgrade import upgrade_ies


_DEMO_IES_TEXT = """IESNA:LM-63-2002
[TEST] DEMO-0001
[TESTLAB] lumio demo lab
[ISSUEDATE] 2024-01-01
[MANUFAC] lumio demo
[LUMCAT] DEMO-001
TILT=NONE
1 16000 2 3 2 1 2 0.45 0.45 0.10
1 1 32
0 45 90
0 180
0 1 2
3 4 5
"""

_DEMO_LDT_LINES = (
    ["lumio demo", "1", "1", "4", "90", "3", "45", "DEMO-0001", "Demo downlight", "DL-1", "demo.ldt",
     "2024-01-01", "100", "0", "50", "80", "0", "0", "0", "0", "0", "100", "80", "1", "0", "1",
     "1", "LED", "1000", "3000K", "80", "10"]
    + ["0.5"] * 10
    + ["0", "90", "180", "270"]
    + ["0", "45", "90"]
    + ["300", "150", "0"]
)


def _cmd_demo(args: argparse.Namespace) -> int:
    outpath = Path(args.out).expanduser().resolve()
    outpath.parent.mkdir(parents=True, exist_ok=True)
    if outpath.suffix.lower() == ".ldt":
        outpath.write_bytes(("\r\n".join(_DEMO_LDT_LINES) + "\r\n").encode("latin-1"))
    else:
        outpath.write_bytes(_DEMO_IES_TEXT.replace("\n", "\r\n").encode("ascii"))
    print(f"Saved demo file to: {outpath}")
    return 0


def _check_file(path: Path) -> bool:
    if not path.exists():
        print(f"[ERROR] File not found: {path}")
        return False
    if not path.is_file():
        print(f"[ERROR] Not a file: {path}")
        return False
    return True


def _cmd_info(args: argparse.Namespace) -> int:
    path = Path(args.file).expanduser().resolve()
    if not _check_file(path):
        return 2
    res = load_photometry(path, strict=args.strict)
    print(f"  File: {path}")
    print(f"  Format: {res.kind}")
    doc = res.doc
    if isinstance(doc, EulumdatDocument):
        print(f"  Luminaire: {doc.luminaire_name} ({doc.luminaire_number})")
        print(f"  Symmetry: {doc.symmetry}  C-planes: {doc.num_c_planes}  G-angles: {doc.num_g_angles}")
        print(f"  Max intensity: {max_intensity(doc):g} cd/klm")
        half, tenth = fwhm(doc), fwtm(doc)
        if half is not None and tenth is not None:
            print(f"  FWHM: {half:g}°  FWTM: {tenth:g}°")
    else:
        print(f"  Revision: {doc.format.value}")
        print(f"  Luminaire: {doc.keywords.get('LUMINAIRE', '-')}")
        print(f"  Grid: {doc.num_horizontal_angles} x {doc.num_vertical_angles}")
    for note in res.notes:
        print(f"  [WARN] line {note.line_no}: {note.message}")
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    path = Path(args.file).expanduser().resolve()
    if not _check_file(path):
        return 2
    res = load_photometry(path, strict=args.strict)
    for f in res.report.findings:
        print(f"  [{f.severity}] {f.id}: {f.message}")
    s = res.report.summary
    print(f"  Findings: {s['errors']} error(s), {s['warnings']} warning(s), {s['info']} info")
    return 0 if res.report.ok else 1


def _cmd_convert(args: argparse.Namespace) -> int:
    src = Path(args.src).expanduser().resolve()
    if not _check_file(src):
        return 2
    ies = eulumdat_to_ies(parse_ldt_file(src, strict=args.strict))
    out = export_ies(ies, args.dst)
    print(f"Saved: {out}")
    return 0


def _cmd_upgrade(args: argparse.Namespace) -> int:
    src = Path(args.src).expanduser().resolve()
    if not _check_file(src):
        return 2
    ies = upgrade_ies(parse_ies_file(src, strict=args.strict))
    out = export_ies(ies, args.dst)
    print(f"Saved: {out}")
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="lumio", description="IESNA LM-63 and EULUMDAT tools.")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    demo = sub.add_parser("demo", help="Write a small demo .ies (or .ldt) file to disk.")
    demo.add_argument("out", help="Output path; .ldt writes EULUMDAT, anything else IES.")
    demo.set_defaults(func=_cmd_demo)

    for name, func, help_text in (
        ("info", _cmd_info, "Summarize an .ies or .ldt file."),
        ("validate", _cmd_validate, "Run consistency checks on an .ies or .ldt file."),
    ):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("file")
        sp.add_argument("--strict", action="store_true", help="Fail on over-long lines; standards checks.")
        sp.set_defaults(func=func)

    for name, func, help_text in (
        ("convert", _cmd_convert, "Convert an EULUMDAT file to IES LM-63-2002."),
        ("upgrade", _cmd_upgrade, "Rewrite an IES file as LM-63-2002."),
    ):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("src")
        sp.add_argument("dst")
        sp.add_argument("--strict", action="store_true")
        sp.set_defaults(func=func)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return int(args.func(args))
    except (PhotometryError, ValueError) as e:
        print(f"[ERROR] {e}")
        return 3


if __name__ == "__main__":
    raise SystemExit(main())
