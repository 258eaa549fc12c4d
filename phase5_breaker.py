"""
---
version: 0.1.0
created: 2026-10-19
updated: 2026-10-19
---

phase5_breaker.py — One entry point for all three solvers.

The cipher kind is a closed set, so dispatch is a match over CipherKind
rather than a registry of solver classes. Results can be written as JSON,
one file per input when several files are broken in one run.

Usage:
    python3 phase5_breaker.py --cipher caesar --text "KHOOR ZRUOG ..."
    python3 phase5_breaker.py --cipher vigenere --file a.txt b.txt --save-dir results/
    python3 phase5_breaker.py --cipher substitution --file c.txt --json-out c.json --seed 7
"""

from __future__ import annotations

import argparse
import json
from enum import Enum
from pathlib import Path

from freqbreak import (
    LanguageProfile, SolverConfig, SolverResult,
    add_solver_arguments, config_from_args, format_result, profile_from_args,
)
from phase2_caesar import CaesarSolver
from phase3_substitution import SubstitutionSolver
from phase4_vigenere import VigenereSolver


class CipherKind(Enum):
    CAESAR = "caesar"
    SUBSTITUTION = "substitution"
    VIGENERE = "vigenere"

    @classmethod
    def parse(cls, tag: str | CipherKind) -> CipherKind:
        """
        Accept a CipherKind or its tag (case-insensitive).

        Raises:
            ValueError: For an unknown tag.
        """
        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown cipher type '{tag}' "
                f"(expected one of: {', '.join(k.value for k in cls)})"
            ) from None


def break_cipher(
    kind: CipherKind | str,
    ciphertext: str,
    profile: LanguageProfile | None = None,
    config: SolverConfig | None = None,
) -> SolverResult:
    """Run the solver for kind on ciphertext."""
    match CipherKind.parse(kind):
        case CipherKind.CAESAR:
            solver = CaesarSolver(profile, config)
        case CipherKind.SUBSTITUTION:
            solver = SubstitutionSolver(profile, config)
        case CipherKind.VIGENERE:
            solver = VigenereSolver(profile, config)
    return solver.solve(ciphertext)


def save_result_json(result: SolverResult, filepath: str | Path) -> None:
    """Write result.as_dict() as indented JSON."""
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(result.as_dict(), f, indent=2)


def break_files(
    paths: list[str | Path],
    kind: CipherKind | str,
    profile: LanguageProfile | None = None,
    config: SolverConfig | None = None,
    save_dir: str | Path | None = None,
) -> list[tuple[Path, SolverResult]]:
    """
    Break every file in paths with the same solver settings.

    With save_dir, each result is also written to <save_dir>/<stem>.json.
    """
    kind = CipherKind.parse(kind)
    out_dir = Path(save_dir) if save_dir else None
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)

    results: list[tuple[Path, SolverResult]] = []
    for p in paths:
        path = Path(p)
        text = path.read_text(encoding="utf-8", errors="replace")
        result = break_cipher(kind, text, profile, config)
        if out_dir is not None:
            save_result_json(result, out_dir / f"{path.stem}.json")
        results.append((path, result))
    return results


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Break a Caesar, substitution or Vigenere cipher")
    parser.add_argument("--cipher", required=True, choices=[k.value for k in CipherKind],
                        help="Cipher type")
    src = parser.add_mutually_exclusive_group(required=True)
    src.add_argument("--text", type=str, help="Ciphertext string")
    src.add_argument("--file", type=str, nargs="+", help="One or more ciphertext files")
    add_solver_arguments(parser)
    parser.add_argument("--json-out", type=str, default=None,
                        help="Write the result as JSON (single input only)")
    parser.add_argument("--save-dir", type=str, default=None,
                        help="Write one JSON result per input file")
    args = parser.parse_args(argv)

    profile = profile_from_args(args)
    config = config_from_args(args)

    if args.text is not None:
        inputs = [("<text>", break_cipher(args.cipher, args.text, profile, config))]
    else:
        inputs = [(str(path), result) for path, result
                  in break_files(args.file, args.cipher, profile, config, args.save_dir)]

    for name, result in inputs:
        print("=" * 70)
        print(f"{args.cipher.upper()}: {name}")
        print("=" * 70)
        print(format_result(result))
        print()

    if args.json_out:
        if len(inputs) != 1:
            parser.error("--json-out needs a single input; use --save-dir for several files")
        save_result_json(inputs[0][1], args.json_out)
        print(f"Saved: {args.json_out}")

    ok = sum(1 for _, r in inputs if r.ok)
    print(f"{ok}/{len(inputs)} solved with status ok")


if __name__ == "__main__":
    main()
