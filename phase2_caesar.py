"""
---
version: 0.1.0
created: 2026-10-19
updated: 2026-10-19
---

phase2_caesar.py — Brute-force Caesar cryptanalysis.

All 26 shifts are decrypted and scored with the combined fitness from
freqbreak. The winner is the top score; confidence comes from the margin over
the runner-up. Texts with fewer than min_text_length letters are not scored
at all (every shift gets 0), so the solver still answers with shift 0 but
flags the result as insufficient evidence.

The same solver is reused by phase4_vigenere.py on each key column.

Usage:
    python3 phase2_caesar.py --text "KHOOR ZRUOG, WKLV LV D WHVW"
    python3 phase2_caesar.py --file cipher.txt --top 10
    python3 phase2_caesar.py --text "..." --encrypt 7
"""

from __future__ import annotations

import argparse
import time
from concurrent.futures import ThreadPoolExecutor

from freqbreak import (
    LanguageProfile, SolverConfig, SolverResult,
    STATUS_INSUFFICIENT, STATUS_INVALID_INPUT, STATUS_OK,
    add_input_arguments, add_solver_arguments, caesar_decrypt, caesar_encrypt,
    config_from_args, confidence_from_margin, elapsed_ms_since, fitness,
    format_result, get_profile, is_valid_input, make_logger, normalize_text,
    profile_from_args, read_input_text,
)


CIPHER_NAME = "caesar"


class CaesarSolver:
    """Ranks every Caesar shift of a ciphertext by fitness."""

    def __init__(
        self,
        profile: LanguageProfile | None = None,
        config: SolverConfig | None = None,
    ) -> None:
        self.profile = profile or get_profile()
        self.config = (config or SolverConfig()).normalized()
        self.log = make_logger(self.config.verbose)

    def score_candidate(self, candidate: str, letter_count: int) -> float:
        """Fitness of one decryption; 0 when the text is below the minimum length."""
        if letter_count < self.config.min_text_length:
            return 0.0
        return fitness(candidate, self.profile)

    def rank_shifts(self, ciphertext: str) -> list[tuple[int, float]]:
        """
        Score all 26 shifts.

        Returns (shift, score) pairs sorted by descending score. The sort is
        stable over shift order, so equal scores keep the lowest shift first.
        """
        letter_count = len(normalize_text(ciphertext))

        def _score(shift: int) -> tuple[int, float]:
            return shift, self.score_candidate(caesar_decrypt(ciphertext, shift), letter_count)

        if self.config.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as ex:
                scored = list(ex.map(_score, range(26)))
        else:
            scored = [_score(s) for s in range(26)]

        return sorted(scored, key=lambda x: -x[1])

    def best_shift(self, ciphertext: str) -> int:
        """Top-ranked shift (0 if nothing can be ranked)."""
        ranked = self.rank_shifts(ciphertext)
        return ranked[0][0] if ranked else 0

    def solve(self, ciphertext: str) -> SolverResult:
        """
        Break a Caesar cipher.

        Returns a SolverResult with key = shift (int). Invalid input gives an
        empty result; too-short text gives shift 0 with confidence 0.
        """
        t0 = time.perf_counter()
        if not is_valid_input(ciphertext):
            self.log("Input rejected: empty or mostly non-alphabetic")
            return SolverResult.empty(CIPHER_NAME, STATUS_INVALID_INPUT, elapsed_ms_since(t0))

        letter_count = len(normalize_text(ciphertext))
        self.log(f"Caesar: scoring 26 shifts over {letter_count} letters")
        ranked = self.rank_shifts(ciphertext)
        best, best_score = ranked[0]

        if letter_count < self.config.min_text_length:
            self.log(f"Only {letter_count} letters (< {self.config.min_text_length}); "
                     f"shifts not scored")
            status = STATUS_INSUFFICIENT
            confidence = 0.0
        else:
            status = STATUS_OK
            confidence = confidence_from_margin(best_score, ranked[1][1])

        alternatives = [
            (caesar_decrypt(ciphertext, shift), score)
            for shift, score in ranked[: self.config.top_n]
        ]
        self.log(f"Best shift {best} (score {best_score:.4f}, confidence {confidence:.1f}%)")

        return SolverResult(
            cipher=CIPHER_NAME,
            plaintext=caesar_decrypt(ciphertext, best),
            key=best,
            confidence=confidence,
            score=best_score,
            elapsed_ms=elapsed_ms_since(t0),
            status=status,
            alternatives=alternatives,
            diagnostics={"ranking": ranked, "letters": letter_count},
        )


def break_caesar(
    ciphertext: str,
    profile: LanguageProfile | None = None,
    config: SolverConfig | None = None,
) -> SolverResult:
    return CaesarSolver(profile, config).solve(ciphertext)


# ============================================================================
# CLI
# ============================================================================

def print_ranking(result: SolverResult, limit: int = 26) -> None:
    ranked = result.diagnostics.get("ranking", [])
    print(f"\n  {'Rank':>4}  {'Shift':>5}  {'Score':>8}  Preview")
    print("  " + "-" * 66)
    for rank, (shift, score) in enumerate(ranked[:limit], 1):
        preview = result.alternatives[rank - 1][0] if rank <= len(result.alternatives) else ""
        preview = preview.replace("\n", " ")[:40]
        print(f"  {rank:>4}  {shift:>5}  {score:>8.4f}  {preview}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Break a Caesar cipher by frequency analysis")
    add_input_arguments(parser)
    add_solver_arguments(parser)
    parser.add_argument("--encrypt", type=int, default=None, metavar="SHIFT",
                        help="Encrypt the input with SHIFT instead of breaking it")
    args = parser.parse_args(argv)

    text = read_input_text(args)
    if args.encrypt is not None:
        print(caesar_encrypt(text, args.encrypt))
        return

    config = config_from_args(args)
    result = break_caesar(text, profile_from_args(args), config)

    print("=" * 70)
    print("CAESAR CRYPTANALYSIS")
    print("=" * 70)
    print(format_result(result))
    if result.status != STATUS_INVALID_INPUT:
        print_ranking(result, config.top_n)


if __name__ == "__main__":
    main()
