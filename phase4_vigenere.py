"""
---
version: 0.1.0
created: 2026-10-19
updated: 2026-10-19
---

phase4_vigenere.py — Vigenere cryptanalysis: key length, then per-column Caesar.

Sections:
  1. Kasiski examination — repeated substrings, distances, factor counts
  2. Index of coincidence per key length — mean IC of the key columns
  3. Combined ranking — 0.6 * Kasiski + 0.4 * IC
  4. Solver — per-column Caesar for each candidate length, best full-text fitness

A key length is only a candidate when Kasiski supports it and every column
holds at least min_text_length letters (the Caesar minimum). With no
candidates the solver gives up rather than guessing.

Usage:
    python3 phase4_vigenere.py --file cipher.txt
    python3 phase4_vigenere.py --file cipher.txt --min-key 3 --max-key 12 --candidates 0
    python3 phase4_vigenere.py --text "..." --encrypt LEMON
"""

from __future__ import annotations

import argparse
import time
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

import numpy as np

from freqbreak import (
    MAX_SUBSTRING_LENGTH, LanguageProfile, SolverConfig, SolverResult,
    STATUS_INSUFFICIENT, STATUS_INVALID_INPUT, STATUS_OK,
    add_input_arguments, add_solver_arguments, config_from_args,
    confidence_from_score, elapsed_ms_since, fitness, format_key_length_table,
    format_result, get_profile, index_of_coincidence, is_valid_input,
    make_logger, normalize_text, profile_from_args, read_input_text,
    shift_to_letter, split_by_key_position, vigenere_decrypt, vigenere_encrypt,
)
from phase2_caesar import CaesarSolver


CIPHER_NAME = "vigenere"

KASISKI_WEIGHT = 0.6
IC_WEIGHT = 0.4


# ============================================================================
# 1. KASISKI EXAMINATION
# ============================================================================

def find_repeating_substrings(
    text: str,
    min_length: int = 3,
    max_length: int = MAX_SUBSTRING_LENGTH,
) -> dict[str, list[int]]:
    """
    Substrings of min_length..max_length letters that occur more than once.

    Returns substring -> sorted start positions (normalized-text offsets).
    """
    clean = normalize_text(text)
    positions: dict[str, list[int]] = defaultdict(list)
    for i in range(len(clean) - min_length + 1):
        for length in range(min_length, min(max_length, len(clean) - i) + 1):
            positions[clean[i:i + length]].append(i)
    return {sub: pos for sub, pos in positions.items() if len(pos) >= 2}


def repeat_distances(repeats: dict[str, list[int]], min_distance: int = 1) -> list[int]:
    """Distance from the first occurrence to every later one, kept if >= min_distance."""
    distances: list[int] = []
    for pos in repeats.values():
        first = pos[0]
        distances.extend(p - first for p in pos[1:] if p - first >= min_distance)
    return distances


def kasiski_examination(
    text: str,
    min_key: int = 2,
    max_key: int = 20,
    min_substring: int = 3,
) -> dict[int, float]:
    """
    Kasiski score per key length.

    Every repeat distance votes for each length in [min_key, max_key] that
    divides it. Counts are normalized by the largest count, so the best
    supported length scores 1.0. Lengths with no votes are absent.
    """
    repeats = find_repeating_substrings(text, min_substring)
    distances = repeat_distances(repeats, min_key)

    counts: dict[int, int] = defaultdict(int)
    for d in distances:
        for factor in range(min_key, min(max_key, d) + 1):
            if d % factor == 0:
                counts[factor] += 1

    if not counts:
        return {}
    top = max(counts.values())
    return {length: counts[length] / top for length in sorted(counts)}


# ============================================================================
# 2. INDEX OF COINCIDENCE PER KEY LENGTH
# ============================================================================

def column_ic(text: str, key_length: int) -> float:
    """Mean IC of the key columns; columns with fewer than 2 letters are skipped."""
    columns = [c for c in split_by_key_position(normalize_text(text), key_length) if len(c) >= 2]
    if not columns:
        return 0.0
    return float(np.mean([index_of_coincidence(c) for c in columns]))


def ic_by_key_length(text: str, min_key: int = 2, max_key: int = 20) -> dict[int, float]:
    """Mean column IC for every length in [min_key, max_key]."""
    return {length: column_ic(text, length) for length in range(min_key, max_key + 1)}


# ============================================================================
# 3. COMBINED RANKING
# ============================================================================

def combine_key_length_scores(
    kasiski: dict[int, float],
    ic: dict[int, float],
) -> list[tuple[int, float]]:
    """
    Rank key lengths by 0.6 * Kasiski + 0.4 * IC.

    A length missing from one table contributes 0 for that part. Equal
    scores are ordered shortest first.
    """
    lengths = set(kasiski) | set(ic)
    combined = {
        length: KASISKI_WEIGHT * kasiski.get(length, 0.0) + IC_WEIGHT * ic.get(length, 0.0)
        for length in lengths
    }
    return sorted(combined.items(), key=lambda x: (-x[1], x[0]))


# ============================================================================
# 4. SOLVER
# ============================================================================

class VigenereSolver:
    """Key-length detection plus per-column Caesar key recovery."""

    def __init__(
        self,
        profile: LanguageProfile | None = None,
        config: SolverConfig | None = None,
    ) -> None:
        self.profile = profile or get_profile()
        self.config = (config or SolverConfig()).normalized()
        self.log = make_logger(self.config.verbose)
        self._columns = CaesarSolver(
            self.profile, replace(self.config, verbose=False, max_workers=1)
        )

    def key_length_analysis(self, ciphertext: str) -> dict:
        """
        Full key-length analysis.

        Returns dict with:
            kasiski: {length: normalized factor score}
            ic: {length: mean column IC}
            combined: [(length, combined score)] ranked
            candidates: the combined ranking restricted to usable lengths
        """
        cfg = self.config
        clean = normalize_text(ciphertext)
        # Caesar leaves columns below min_text_length unscored
        min_column = max(2, cfg.min_text_length)
        kasiski = kasiski_examination(clean, cfg.min_key_length, cfg.max_key_length,
                                      cfg.min_substring_length)
        ic = ic_by_key_length(clean, cfg.min_key_length, cfg.max_key_length)
        combined = combine_key_length_scores(kasiski, ic)
        candidates = [(length, score) for length, score in combined
                      if length in kasiski and len(clean) // length >= min_column]

        self.log(f"Kasiski supports {len(kasiski)} lengths; "
                 f"{len(candidates)} usable candidates")
        for length, score in candidates[:5]:
            self.log(f"  length {length:>2}: combined={score:.4f} "
                     f"kasiski={kasiski[length]:.3f} ic={ic.get(length, 0.0):.4f}")

        return {"kasiski": kasiski, "ic": ic, "combined": combined, "candidates": candidates}

    def find_key_lengths(self, ciphertext: str) -> list[tuple[int, float]]:
        """Ranked (length, combined score) candidates; empty when none are usable."""
        return self.key_length_analysis(ciphertext)["candidates"]

    def find_key(self, ciphertext: str, key_length: int) -> str:
        """Recover a key of the given length, one Caesar solve per column."""
        columns = split_by_key_position(normalize_text(ciphertext), key_length)
        key = "".join(
            shift_to_letter(self._columns.best_shift(col)) if col else "A"
            for col in columns
        )
        self.log(f"  length {key_length:>2}: key {key}")
        return key

    def _try_length(self, ciphertext: str, key_length: int) -> dict:
        key = self.find_key(ciphertext, key_length)
        plaintext = vigenere_decrypt(ciphertext, key)
        return {
            "length": key_length,
            "key": key,
            "plaintext": plaintext,
            "score": fitness(plaintext, self.profile),
        }

    def solve(self, ciphertext: str) -> SolverResult:
        """
        Break a Vigenere cipher.

        Tries the top key_length_candidates lengths (all when <= 0) and keeps
        the decryption with the highest fitness; equal scores go to the
        shorter key.
        """
        t0 = time.perf_counter()
        if not is_valid_input(ciphertext):
            self.log("Input rejected: empty or mostly non-alphabetic")
            return SolverResult.empty(CIPHER_NAME, STATUS_INVALID_INPUT, elapsed_ms_since(t0))

        analysis = self.key_length_analysis(ciphertext)
        diagnostics = {
            "kasiski": analysis["kasiski"],
            "ic": analysis["ic"],
            "combined": analysis["combined"],
        }
        candidates = analysis["candidates"]
        if not candidates:
            self.log("No usable key lengths found")
            return SolverResult.empty(CIPHER_NAME, STATUS_INSUFFICIENT,
                                      elapsed_ms_since(t0), diagnostics)

        limit = self.config.key_length_candidates
        lengths = [length for length, _ in (candidates[:limit] if limit > 0 else candidates)]

        if self.config.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as ex:
                trials = list(ex.map(lambda n: self._try_length(ciphertext, n), lengths))
        else:
            trials = [self._try_length(ciphertext, n) for n in lengths]

        ranked = sorted(trials, key=lambda t: (-t["score"], t["length"]))
        best = ranked[0]
        self.log(f"Best key {best['key']} (length {best['length']}, score {best['score']:.4f})")

        diagnostics["trials"] = [
            {"length": t["length"], "key": t["key"], "score": t["score"]} for t in trials
        ]
        return SolverResult(
            cipher=CIPHER_NAME,
            plaintext=best["plaintext"],
            key=best["key"],
            confidence=confidence_from_score(best["score"]),
            score=best["score"],
            elapsed_ms=elapsed_ms_since(t0),
            status=STATUS_OK,
            alternatives=[(t["plaintext"], t["score"]) for t in ranked[: self.config.top_n]],
            diagnostics=diagnostics,
        )


def break_vigenere(
    ciphertext: str,
    profile: LanguageProfile | None = None,
    config: SolverConfig | None = None,
) -> SolverResult:
    return VigenereSolver(profile, config).solve(ciphertext)


# ============================================================================
# CLI
# ============================================================================

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Break a Vigenere cipher (Kasiski + IC)")
    add_input_arguments(parser)
    add_solver_arguments(parser)
    parser.add_argument("--encrypt", type=str, default=None, metavar="KEY",
                        help="Encrypt the input with keyword KEY instead of breaking it")
    args = parser.parse_args(argv)

    text = read_input_text(args)
    if args.encrypt is not None:
        if not normalize_text(args.encrypt):
            parser.error("--encrypt needs a keyword with at least one letter")
        print(vigenere_encrypt(text, args.encrypt))
        return

    result = break_vigenere(text, profile_from_args(args), config_from_args(args))

    print("=" * 70)
    print("VIGENERE CRYPTANALYSIS")
    print("=" * 70)
    if "combined" in result.diagnostics:
        print("\nKey length ranking:")
        print(format_key_length_table(result.diagnostics))
    if result.diagnostics.get("trials"):
        print(f"\n  {'Length':>6}  {'Key':<22}  {'Fitness':>8}")
        print("  " + "-" * 40)
        for trial in result.diagnostics["trials"]:
            print(f"  {trial['length']:>6}  {trial['key']:<22}  {trial['score']:>8.4f}")
    print()
    print(format_result(result))


if __name__ == "__main__":
    main()
