"""
---
version: 0.1.0
created: 2026-10-19
updated: 2026-10-19
---

phase3_substitution.py — Mono-alphabetic substitution cryptanalysis.

A mapping is a 26-letter string (position i = plain letter for cipher letter
A+i). Every search step builds a new string, so the strategies never share
mutable state and can run side by side.

Sections:
  1. Seed — pair cipher letters with reference letters by frequency rank
  2. Bigram refinement — rank-matched bigrams, kept when fitness does not drop
  3. Local search — hill-climbing (strict improvements) and simulated annealing
  4. Solver — method dispatch (frequency / hill_climbing / simulated_annealing /
     hybrid / ensemble), alternatives, candidates

Usage:
    python3 phase3_substitution.py --file cipher.txt
    python3 phase3_substitution.py --file cipher.txt --method simulated_annealing --seed 1
    python3 phase3_substitution.py --file cipher.txt --method ensemble --workers 3
    python3 phase3_substitution.py --text "..." --encrypt QWERTYUIOPASDFGHJKLZXCVBNM
"""

from __future__ import annotations

import argparse
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from freqbreak import (
    LanguageProfile, SolverConfig, SolverResult,
    STATUS_INSUFFICIENT, STATUS_INVALID_INPUT, STATUS_OK,
    add_input_arguments, add_solver_arguments, apply_mapping, assign_letter,
    common_ngrams, complete_mapping, config_from_args, confidence_from_score,
    elapsed_ms_since, fitness, format_mapping, format_result, get_profile,
    invert_mapping, is_permutation, is_valid_input, make_logger, normalize_text,
    profile_from_args, read_input_text, swap_targets,
)


CIPHER_NAME = "substitution"

# Hill-climbing budget used by candidates()
CANDIDATE_ITERATIONS = 500


class SubstitutionSolver:
    """
    Frequency seeding plus local search over substitution mappings.

    The solver owns one np.random.Generator seeded from config.seed; the same
    seed and input reproduce the same result.
    """

    def __init__(
        self,
        profile: LanguageProfile | None = None,
        config: SolverConfig | None = None,
    ) -> None:
        self.profile = profile or get_profile()
        self.config = (config or SolverConfig()).normalized()
        self.rng = np.random.default_rng(self.config.seed)
        self.log = make_logger(self.config.verbose)

    # ------------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------------

    def score_mapping(self, mapping: str, ciphertext: str) -> float:
        return fitness(apply_mapping(ciphertext, mapping), self.profile)

    # ------------------------------------------------------------------------
    # 1. Seed
    # ------------------------------------------------------------------------

    def seed_mapping(self, ciphertext: str) -> str:
        """
        Frequency-rank mapping.

        Cipher letters present in the text (most frequent first, ties
        alphabetical) are paired with reference letters by expected frequency.
        Remaining letters are filled in alphabetically.
        """
        counts = Counter(normalize_text(ciphertext))
        cipher_order = sorted(counts, key=lambda c: (-counts[c], c))
        plain_order = self.profile.letters_by_frequency
        return complete_mapping(dict(zip(cipher_order, plain_order)))

    # ------------------------------------------------------------------------
    # 2. Bigram refinement
    # ------------------------------------------------------------------------

    def refine_with_bigrams(self, mapping: str, ciphertext: str) -> str:
        """
        Nudge the mapping towards the reference bigrams.

        The i-th most common cipher bigram is assumed to be the i-th most
        common reference bigram. Each tentative remap is kept only when it
        does not lower fitness. Pairs whose repeated-letter pattern differs
        (e.g. cipher "XX" vs "TH") cannot be honoured and are skipped.
        """
        cipher_bigrams = [bg for bg, _ in common_ngrams(ciphertext, 2, 10)]
        current = mapping
        current_score = self.score_mapping(current, ciphertext)

        for cipher_bg, plain_bg in zip(cipher_bigrams, self.profile.top_bigrams):
            if (cipher_bg[0] == cipher_bg[1]) != (plain_bg[0] == plain_bg[1]):
                continue
            candidate = assign_letter(current, cipher_bg[0], plain_bg[0])
            candidate = assign_letter(candidate, cipher_bg[1], plain_bg[1])
            if candidate == current:
                continue
            score = self.score_mapping(candidate, ciphertext)
            if score >= current_score:
                self.log(f"  bigram {cipher_bg}->{plain_bg}: kept ({score:.4f})")
                current, current_score = candidate, score

        return current

    # ------------------------------------------------------------------------
    # 3. Local search
    # ------------------------------------------------------------------------

    @staticmethod
    def _neighbor(mapping: str, rng: np.random.Generator) -> str:
        """Swap the plain targets of two distinct random cipher letters."""
        i, j = rng.choice(26, size=2, replace=False)
        return swap_targets(mapping, int(i), int(j))

    def hill_climb(
        self,
        mapping: str,
        ciphertext: str,
        iterations: int | None = None,
        rng: np.random.Generator | None = None,
        history: list[tuple[int, float]] | None = None,
    ) -> tuple[str, float]:
        """
        Random-swap hill-climbing; only strictly better neighbours are accepted.

        Returns (best mapping, its fitness). Each accepted step is appended to
        history as (iteration, score).
        """
        if iterations is None:
            iterations = self.config.max_iterations
        if rng is None:
            rng = self.rng

        best = mapping
        best_score = self.score_mapping(best, ciphertext)
        t0 = time.perf_counter()

        for i in range(iterations):
            candidate = self._neighbor(best, rng)
            score = self.score_mapping(candidate, ciphertext)
            if score > best_score:
                best, best_score = candidate, score
                if history is not None:
                    history.append((i + 1, score))

            if (i + 1) % 100 == 0:
                self.log(f"  HC [{i + 1:>5}] best={best_score:.4f} "
                         f"({(i + 1) / max(time.perf_counter() - t0, 1e-9):.0f} iter/s)")

        return best, best_score

    def simulated_annealing(
        self,
        mapping: str,
        ciphertext: str,
        iterations: int | None = None,
        rng: np.random.Generator | None = None,
        history: list[tuple[int, float]] | None = None,
    ) -> tuple[str, float]:
        """
        Simulated annealing with geometric cooling.

        Worse neighbours are accepted with probability exp(delta / T). T falls
        from initial_temperature to min_temperature over the iteration budget.
        Returns the best mapping seen, not the final one.
        """
        if iterations is None:
            iterations = self.config.annealing_iterations
        if rng is None:
            rng = self.rng

        current = mapping
        current_score = self.score_mapping(current, ciphertext)
        best, best_score = current, current_score

        temperature = self.config.initial_temperature
        cooling = 1.0
        if iterations > 0:
            cooling = (self.config.min_temperature / self.config.initial_temperature) ** (1.0 / iterations)

        for i in range(iterations):
            candidate = self._neighbor(current, rng)
            score = self.score_mapping(candidate, ciphertext)
            delta = score - current_score
            if delta >= 0 or rng.random() < np.exp(delta / temperature):
                current, current_score = candidate, score
                if score > best_score:
                    best, best_score = candidate, score
                    if history is not None:
                        history.append((i + 1, score))
            temperature *= cooling

            if (i + 1) % 100 == 0:
                self.log(f"  SA [{i + 1:>5}] T={temperature:.4f} current={current_score:.4f} "
                         f"best={best_score:.4f}")

        return best, best_score

    def _ensemble(
        self,
        seed: str,
        ciphertext: str,
        history: list[tuple[int, float]],
    ) -> tuple[str, float, dict[str, float]]:
        """
        Run bigram-only, hill-climbing and annealing from the same seed mapping.

        Each randomized strategy gets its own child generator. Results are
        taken in submission order, so ties favour the earlier strategy.
        """
        children = np.random.SeedSequence(int(self.rng.integers(2**32))).spawn(2)
        hc_rng, sa_rng = (np.random.default_rng(s) for s in children)
        hc_history: list[tuple[int, float]] = []
        sa_history: list[tuple[int, float]] = []

        def _bigram_only() -> tuple[str, float]:
            refined = self.refine_with_bigrams(seed, ciphertext)
            return refined, self.score_mapping(refined, ciphertext)

        jobs = {
            "bigram": _bigram_only,
            "hill_climbing": lambda: self.hill_climb(seed, ciphertext, rng=hc_rng,
                                                      history=hc_history),
            "simulated_annealing": lambda: self.simulated_annealing(seed, ciphertext,
                                                                    rng=sa_rng,
                                                                    history=sa_history),
        }
        with ThreadPoolExecutor(max_workers=min(self.config.max_workers, len(jobs))) as ex:
            futures = {name: ex.submit(job) for name, job in jobs.items()}
            outcomes = {name: fut.result() for name, fut in futures.items()}

        best_name = max(outcomes, key=lambda name: outcomes[name][1])
        history.extend({"hill_climbing": hc_history,
                        "simulated_annealing": sa_history}.get(best_name, []))
        best_mapping, best_score = outcomes[best_name]
        self.log(f"Ensemble winner: {best_name} ({best_score:.4f})")
        return best_mapping, best_score, {name: score for name, (_, score) in outcomes.items()}

    # ------------------------------------------------------------------------
    # 4. Solver
    # ------------------------------------------------------------------------

    def solve(self, ciphertext: str) -> SolverResult:
        """
        Break a substitution cipher with config.method.

        Returns a SolverResult whose key is the 26-letter cipher->plain mapping.
        """
        t0 = time.perf_counter()
        if not is_valid_input(ciphertext):
            self.log("Input rejected: empty or mostly non-alphabetic")
            return SolverResult.empty(CIPHER_NAME, STATUS_INVALID_INPUT, elapsed_ms_since(t0))

        method = self.config.method
        letter_count = len(normalize_text(ciphertext))
        self.log(f"Substitution: method={method}, {letter_count} letters")

        history: list[tuple[int, float]] = []
        stages: dict[str, tuple[str, float]] = {}

        seed = self.seed_mapping(ciphertext)
        stages["frequency"] = (seed, self.score_mapping(seed, ciphertext))

        if method == "frequency":
            mapping, score = stages["frequency"]
        elif method == "hill_climbing":
            mapping, score = self.hill_climb(seed, ciphertext, history=history)
        elif method == "simulated_annealing":
            mapping, score = self.simulated_annealing(seed, ciphertext, history=history)
        elif method == "hybrid":
            refined = self.refine_with_bigrams(seed, ciphertext)
            stages["bigram"] = (refined, self.score_mapping(refined, ciphertext))
            mapping, score = self.hill_climb(refined, ciphertext,
                                             iterations=self.config.max_iterations // 2,
                                             history=history)
        else:
            mapping, score, ensemble_scores = self._ensemble(seed, ciphertext, history)
            for name, value in ensemble_scores.items():
                self.log(f"  {name:<20} {value:.4f}")
        stages[method] = (mapping, score)

        if letter_count < self.config.min_text_length:
            status, confidence = STATUS_INSUFFICIENT, 0.0
        else:
            status, confidence = STATUS_OK, confidence_from_score(score)

        alternatives = self._rank_plaintexts(ciphertext, [m for m, _ in stages.values()])
        self.log(f"Final score {score:.4f}, confidence {confidence:.1f}%")

        return SolverResult(
            cipher=CIPHER_NAME,
            plaintext=apply_mapping(ciphertext, mapping),
            key=mapping,
            confidence=confidence,
            score=score,
            elapsed_ms=elapsed_ms_since(t0),
            status=status,
            alternatives=alternatives[: self.config.top_n],
            history=history,
            diagnostics={
                "method": method,
                "stages": {name: s for name, (_, s) in stages.items()},
                "letters": letter_count,
            },
        )

    def _rank_plaintexts(self, ciphertext: str, mappings: list[str]) -> list[tuple[str, float]]:
        """Distinct decryptions under mappings, best fitness first."""
        seen: dict[str, float] = {}
        for mapping in mappings:
            plaintext = apply_mapping(ciphertext, mapping)
            if plaintext not in seen:
                seen[plaintext] = fitness(plaintext, self.profile)
        return sorted(seen.items(), key=lambda x: -x[1])

    def candidates(self, ciphertext: str) -> list[tuple[str, float]]:
        """
        Several plausible decryptions, best first.

        Built from the frequency seed, its bigram refinement and a short
        hill-climb from the seed. Empty for invalid input.
        """
        if not is_valid_input(ciphertext):
            return []
        seed = self.seed_mapping(ciphertext)
        refined = self.refine_with_bigrams(seed, ciphertext)
        climbed, _ = self.hill_climb(seed, ciphertext, iterations=CANDIDATE_ITERATIONS)
        return self._rank_plaintexts(ciphertext, [seed, refined, climbed])


def break_substitution(
    ciphertext: str,
    profile: LanguageProfile | None = None,
    config: SolverConfig | None = None,
) -> SolverResult:
    return SubstitutionSolver(profile, config).solve(ciphertext)


# ============================================================================
# CLI
# ============================================================================

def print_history(history: list[tuple[int, float]], limit: int = 15) -> None:
    if not history:
        print("\n  (no improvements recorded)")
        return
    print(f"\n  Optimization history ({len(history)} improvements):")
    step = max(1, len(history) // limit)
    for iteration, score in history[::step]:
        print(f"    iter {iteration:>6}: {score:.4f}")
    if (len(history) - 1) % step:
        iteration, score = history[-1]
        print(f"    iter {iteration:>6}: {score:.4f}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Break a mono-alphabetic substitution cipher")
    add_input_arguments(parser)
    add_solver_arguments(parser)
    parser.add_argument("--encrypt", type=str, default=None, metavar="KEY",
                        help="Encrypt the input with a 26-letter plain->cipher KEY instead")
    parser.add_argument("--show-candidates", action="store_true",
                        help="Also list alternative decryptions")
    args = parser.parse_args(argv)

    text = read_input_text(args)
    if args.encrypt is not None:
        key = args.encrypt.upper()
        if not is_permutation(key):
            parser.error("--encrypt needs a permutation of the 26 letters")
        print(apply_mapping(text, key))
        return

    solver = SubstitutionSolver(profile_from_args(args), config_from_args(args))
    result = solver.solve(text)

    print("=" * 70)
    print(f"SUBSTITUTION CRYPTANALYSIS ({solver.config.method})")
    print("=" * 70)
    print(format_result(result))
    if not result.key:
        return

    print()
    print(format_mapping(result.key))
    print(f"\n  Encryption key (plain A-Z -> cipher): {invert_mapping(result.key)}")
    print_history(result.history)

    if args.show_candidates:
        print("\n  Candidates:")
        for rank, (plaintext, score) in enumerate(solver.candidates(text), 1):
            print(f"    {rank}. [{score:.4f}] {plaintext.replace(chr(10), ' ')[:60]}")


if __name__ == "__main__":
    main()
