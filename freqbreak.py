"""
---
version: 0.1.0
created: 2026-10-19
updated: 2026-10-19
---

freqbreak.py — Shared module for classical-cipher cryptanalysis.

Six sections:
  1. Language profiles (reference tables, registry, JSON load/save)
  2. Codec (normalization, Caesar / Vigenere / substitution transforms)
  3. Stats engine (letter frequency, chi-squared, IC, n-grams, language detection)
  4. Scoring (the combined fitness every solver ranks candidates with)
  5. Solver plumbing (config, result, verbose logging, confidence, CLI flags)
  6. Output utils (formatting, previews, plots)

The solvers themselves live in the phase scripts:
  phase2_caesar.py, phase3_substitution.py, phase4_vigenere.py
"""

from __future__ import annotations

import argparse
import json
import string
import time
import warnings
from collections import Counter
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Mapping, Sequence

import numpy as np

import language_data

# ============================================================================
# 1. LANGUAGE PROFILES
# ============================================================================

ALPHABET = string.ascii_uppercase

# Number of reference bigrams used by rank-matching bigram refinement.
TOP_BIGRAM_COUNT = 10


@dataclass(frozen=True, eq=False)
class LanguageProfile:
    """
    Read-only reference statistics for one language.

    letter_freq holds percentages for all 26 letters; bigrams and trigrams hold
    relative frequencies on a 0-1 scale. Profiles are built once and shared by
    every solver call, so all tables are exposed as read-only mappings.
    """

    name: str
    letter_freq: Mapping[str, float]
    bigrams: Mapping[str, float]
    trigrams: Mapping[str, float]
    common_words: frozenset[str]
    reference_ic: float
    top_bigrams: tuple[str, ...] = ()

    @property
    def letters_by_frequency(self) -> str:
        """Plain letters sorted by descending expected frequency (ties alphabetical)."""
        return "".join(sorted(ALPHABET, key=lambda c: (-self.letter_freq[c], c)))


def build_profile(
    name: str,
    letter_freq: Mapping[str, float],
    bigrams: Mapping[str, float],
    trigrams: Mapping[str, float],
    common_words: Sequence[str],
    reference_ic: float,
) -> LanguageProfile:
    """
    Build a frozen LanguageProfile from plain tables.

    Keys are upper-cased, the letter table is completed with 0 for absent
    letters, and the ranked top-bigram list is derived from the bigram table.

    Raises:
        ValueError: If an n-gram key has the wrong length or a letter key is
            not A-Z.
    """
    letters: dict[str, float] = {c: 0.0 for c in ALPHABET}
    for key, value in letter_freq.items():
        k = key.upper()
        if k not in letters:
            raise ValueError(f"Profile '{name}': invalid letter key '{key}'")
        letters[k] = float(value)

    def _ngrams(table: Mapping[str, float], n: int) -> dict[str, float]:
        out: dict[str, float] = {}
        for key, value in table.items():
            k = key.upper()
            if len(k) != n or any(c not in ALPHABET for c in k):
                raise ValueError(f"Profile '{name}': invalid {n}-gram key '{key}'")
            out[k] = float(value)
        return out

    bigram_table = _ngrams(bigrams, 2)
    trigram_table = _ngrams(trigrams, 3)
    top = sorted(bigram_table, key=lambda bg: -bigram_table[bg])[:TOP_BIGRAM_COUNT]

    return LanguageProfile(
        name=name,
        letter_freq=MappingProxyType(letters),
        bigrams=MappingProxyType(bigram_table),
        trigrams=MappingProxyType(trigram_table),
        common_words=frozenset(w.upper() for w in common_words),
        reference_ic=float(reference_ic),
        top_bigrams=tuple(top),
    )


_PROFILES: dict[str, LanguageProfile] = {}


def register_profile(profile: LanguageProfile) -> LanguageProfile:
    """Add (or replace) a profile in the process-wide registry."""
    _PROFILES[profile.name.lower()] = profile
    return profile


def get_profile(name: str = "english") -> LanguageProfile:
    """
    Look up a registered language profile by name.

    Raises:
        ValueError: If no profile with that name is registered.
    """
    profile = _PROFILES.get(name.lower())
    if profile is None:
        raise ValueError(
            f"Unknown language profile '{name}' "
            f"(available: {', '.join(supported_languages())})"
        )
    return profile


def supported_languages() -> list[str]:
    """Names of all registered profiles."""
    return sorted(_PROFILES)


def profile_from_dict(name: str, data: Mapping) -> LanguageProfile:
    """
    Build a profile from a JSON-style dict.

    Expected keys: letter_freq, bigrams, trigrams, common_words, reference_ic.

    Raises:
        ValueError: If a required key is missing.
    """
    required = ("letter_freq", "bigrams", "trigrams", "common_words", "reference_ic")
    missing = [k for k in required if k not in data]
    if missing:
        raise ValueError(f"Profile '{name}' is missing keys: {', '.join(missing)}")
    return build_profile(
        name,
        data["letter_freq"],
        data["bigrams"],
        data["trigrams"],
        data["common_words"],
        data["reference_ic"],
    )


def load_profile_json(
    filepath: str | Path,
    name: str | None = None,
    register: bool = True,
) -> LanguageProfile:
    """
    Load a language profile from a JSON file.

    The profile name defaults to the "name" field in the file, then to the
    file stem.
    """
    path = Path(filepath)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    profile = profile_from_dict(name or data.get("name") or path.stem, data)
    if register:
        register_profile(profile)
    return profile


def save_profile_json(profile: LanguageProfile, filepath: str | Path) -> None:
    """Write a profile to JSON in the format load_profile_json() reads."""
    data = {
        "name": profile.name,
        "letter_freq": dict(profile.letter_freq),
        "bigrams": dict(profile.bigrams),
        "trigrams": dict(profile.trigrams),
        "common_words": sorted(profile.common_words),
        "reference_ic": profile.reference_ic,
    }
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


for _name, _tables in language_data.BUILTIN_LANGUAGES.items():
    register_profile(profile_from_dict(_name, _tables))


# ============================================================================
# 2. CODEC — Normalization and cipher transforms
# ============================================================================

_LETTERS = frozenset(string.ascii_letters)

# Minimum share of alphabetic characters for a text to be worth analysing.
MIN_ALPHA_RATIO = 0.5


def normalize_text(text: str) -> str:
    """Keep only A-Z letters, upper-cased, in original order."""
    return "".join(c.upper() for c in text if c in _LETTERS)


def alpha_ratio(text: str) -> float:
    """Fraction of characters in text that are A-Z letters (either case)."""
    if not text:
        return 0.0
    return sum(1 for c in text if c in _LETTERS) / len(text)


def is_valid_input(text: str, min_ratio: float = MIN_ALPHA_RATIO) -> bool:
    """Non-empty, at least one letter, and at least min_ratio letters overall."""
    if not text:
        return False
    ratio = alpha_ratio(text)
    return ratio > 0.0 and ratio >= min_ratio


def _shift_char(c: str, shift: int) -> str:
    if "A" <= c <= "Z":
        return chr((ord(c) - 65 + shift) % 26 + 65)
    if "a" <= c <= "z":
        return chr((ord(c) - 97 + shift) % 26 + 97)
    return c


def caesar_encrypt(text: str, shift: int) -> str:
    """Rotate every letter forward by shift, keeping case and non-letters."""
    return "".join(_shift_char(c, shift) for c in text)


def caesar_decrypt(text: str, shift: int) -> str:
    """Rotate every letter back by shift, keeping case and non-letters."""
    return "".join(_shift_char(c, -shift) for c in text)


def shift_to_letter(shift: int) -> str:
    """0 -> 'A', 25 -> 'Z'."""
    return ALPHABET[shift % 26]


def key_to_shifts(key: str) -> list[int]:
    """Letters of a keyword as shifts; non-letters are dropped."""
    return [ord(c) - 65 for c in normalize_text(key)]


def _vigenere(text: str, key: str, sign: int) -> str:
    shifts = key_to_shifts(key)
    if not shifts:
        return text
    result: list[str] = []
    ki = 0
    for c in text:
        if c in _LETTERS:
            result.append(_shift_char(c, sign * shifts[ki % len(shifts)]))
            ki += 1
        else:
            result.append(c)
    return "".join(result)


def vigenere_encrypt(text: str, key: str) -> str:
    """
    Encrypt with a repeating keyword.

    The key advances on letters only, so position i of the normalized text is
    always enciphered with key letter i mod len(key).
    """
    return _vigenere(text, key, 1)


def vigenere_decrypt(text: str, key: str) -> str:
    """Inverse of vigenere_encrypt()."""
    return _vigenere(text, key, -1)


def split_by_key_position(text: str, key_length: int) -> list[str]:
    """Deal characters round-robin into key_length columns (char i -> column i mod L)."""
    if key_length <= 0:
        return []
    return [text[i::key_length] for i in range(key_length)]


# A substitution mapping is a 26-letter string: position i holds the plain
# letter for cipher letter A+i. Strings are immutable, so every search step
# produces a fresh snapshot.
IDENTITY_MAPPING = ALPHABET


def is_permutation(mapping: str) -> bool:
    """True if mapping uses each of A-Z exactly once."""
    return len(mapping) == 26 and set(mapping) == set(ALPHABET)


def complete_mapping(partial: Mapping[str, str]) -> str:
    """
    Turn a partial cipher->plain dict into a full permutation.

    Unmapped cipher letters take the unused plain letters in alphabetical
    order. Duplicate plain targets in the partial map are dropped (first
    cipher letter in alphabetical order keeps it).
    """
    assigned: dict[str, str] = {}
    used: set[str] = set()
    for cipher_letter in ALPHABET:
        plain = partial.get(cipher_letter)
        if plain is not None and plain not in used:
            assigned[cipher_letter] = plain
            used.add(plain)
    free_plain = iter(c for c in ALPHABET if c not in used)
    return "".join(assigned.get(c) or next(free_plain) for c in ALPHABET)


def invert_mapping(mapping: str) -> str:
    """Swap direction: cipher->plain becomes plain->cipher (and vice versa)."""
    inverse = [""] * 26
    for i, plain in enumerate(mapping):
        inverse[ord(plain) - 65] = ALPHABET[i]
    return "".join(inverse)


def swap_targets(mapping: str, i: int, j: int) -> str:
    """New mapping with the plain targets of cipher letters i and j exchanged."""
    if i == j:
        return mapping
    chars = list(mapping)
    chars[i], chars[j] = chars[j], chars[i]
    return "".join(chars)


def assign_letter(mapping: str, cipher_letter: str, plain_letter: str) -> str:
    """Make cipher_letter map to plain_letter by swapping, keeping a permutation."""
    i = ord(cipher_letter) - 65
    j = mapping.index(plain_letter)
    return swap_targets(mapping, i, j)


def apply_mapping(text: str, mapping: str) -> str:
    """Substitute letters through mapping, preserving case and non-letters."""
    table = str.maketrans(ALPHABET + ALPHABET.lower(), mapping + mapping.lower())
    return text.translate(table)


def random_mapping(rng: np.random.Generator | None = None) -> str:
    """Uniformly random permutation of A-Z."""
    if rng is None:
        rng = np.random.default_rng()
    return "".join(rng.permutation(list(ALPHABET)))


# ============================================================================
# 3. STATS ENGINE
# ============================================================================

def letter_counts(text: str) -> Counter:
    """Counter of A-Z letters, case-insensitive."""
    return Counter(normalize_text(text))


def letter_frequency(text: str) -> dict[str, float]:
    """
    Percentage of each letter A-Z among the alphabetic characters of text.

    Always covers the whole alphabet; all zeros when text has no letters.
    """
    counts = letter_counts(text)
    total = sum(counts.values())
    if total == 0:
        return {c: 0.0 for c in ALPHABET}
    return {c: counts.get(c, 0) / total * 100.0 for c in ALPHABET}


def chi_squared(observed: Mapping[str, float], expected: Mapping[str, float]) -> float:
    """
    Sum over A-Z of (observed - expected)^2 / expected.

    Letters whose expected value is 0 contribute nothing. Lower = closer match.
    """
    obs_arr = np.array([observed.get(c, 0.0) for c in ALPHABET], dtype=float)
    exp_arr = np.array([expected.get(c, 0.0) for c in ALPHABET], dtype=float)
    mask = exp_arr > 0.0
    diff = obs_arr[mask] - exp_arr[mask]
    return float(np.sum(diff * diff / exp_arr[mask]))


def chi_squared_pvalue(chi2: float, dof: int = 25) -> float:
    """Upper-tail p-value of a chi-squared statistic (25 dof for A-Z)."""
    from scipy import stats as sp_stats

    return float(sp_stats.chi2.sf(chi2, dof))


def index_of_coincidence(text: str) -> float:
    """
    Compute the index of coincidence for a text.

    English: ~0.0667. Random (uniform 26): ~0.0385.
    """
    counts = letter_counts(text)
    n = sum(counts.values())
    if n <= 1:
        return 0.0
    return sum(c * (c - 1) for c in counts.values()) / (n * (n - 1))


def englishness(text: str, profile: LanguageProfile | None = None) -> float:
    """
    1 / (1 + chi-squared) of the text's letter frequencies against a profile.

    Range (0, 1]; 1 means a perfect match. Despite the name, any registered
    profile can be the reference.
    """
    if profile is None:
        profile = get_profile()
    return 1.0 / (1.0 + chi_squared(letter_frequency(text), profile.letter_freq))


def common_ngrams(text: str, n: int, k: int) -> list[tuple[str, float]]:
    """
    Most frequent n-grams of the normalized text.

    Frequency is occurrences / number of windows * 100. Sorted descending,
    ties in order of first appearance, truncated to k entries.
    """
    clean = normalize_text(text)
    windows = len(clean) - n + 1
    if n <= 0 or windows <= 0:
        return []
    counts = Counter(clean[i:i + n] for i in range(windows))
    ranked = sorted(counts.items(), key=lambda x: -x[1])[:k]
    return [(gram, count * 100.0 / windows) for gram, count in ranked]


def detect_language(
    text: str,
    profiles: Sequence[LanguageProfile] | None = None,
) -> tuple[str, float]:
    """
    Pick the profile whose letter table is closest (minimum chi-squared).

    Returns:
        (language name, confidence) with confidence = 1 / (1 + chi2 / 100).
        ("unknown", 0.0) for text without letters.
    """
    if not normalize_text(text):
        return "unknown", 0.0
    if profiles is None:
        profiles = [get_profile(name) for name in supported_languages()]
    freq = letter_frequency(text)
    best_name = "unknown"
    best_chi2 = float("inf")
    for profile in profiles:
        chi2 = chi_squared(freq, profile.letter_freq)
        if chi2 < best_chi2:
            best_chi2 = chi2
            best_name = profile.name
    if best_name == "unknown":
        return best_name, 0.0
    return best_name, 1.0 / (1.0 + best_chi2 / 100.0)


def letter_goodness_of_fit(text: str, profile: LanguageProfile | None = None) -> dict:
    """
    Count-based goodness of fit of the text's letters against a profile.

    Returns dict with:
        chi2: chi-squared statistic on letter counts
        p_value: p-value (25 dof)
        kl_divergence: KL divergence (bits) from the profile distribution
        n: number of letters
    """
    from scipy import stats as sp_stats

    if profile is None:
        profile = get_profile()
    counts = letter_counts(text)
    total = sum(counts.values())
    if total == 0:
        return {"chi2": float("inf"), "p_value": 0.0, "kl_divergence": float("inf"), "n": 0}

    obs_arr = np.array([counts.get(c, 0) for c in ALPHABET], dtype=float)
    ref_arr = np.array([profile.letter_freq[c] / 100.0 for c in ALPHABET], dtype=float)
    # Floor expected counts, then renormalize to match the observed total
    exp_arr = np.maximum(ref_arr * total, 0.5)
    exp_arr = exp_arr * (obs_arr.sum() / exp_arr.sum())
    chi2, _ = sp_stats.chisquare(obs_arr, exp_arr)

    kl = sp_stats.entropy(obs_arr / total, np.maximum(ref_arr, 1e-6), base=2)

    return {
        "chi2": float(chi2),
        "p_value": chi_squared_pvalue(float(chi2), len(ALPHABET) - 1),
        "kl_divergence": float(kl),
        "n": total,
    }


# ============================================================================
# 4. SCORING — Combined fitness
# ============================================================================

# Every solver compares candidates with exactly these weights.
FITNESS_WEIGHTS: dict[str, float] = {
    "unigram": 0.3,
    "bigram": 0.3,
    "trigram": 0.2,
    "word": 0.2,
}

# Tokens shorter than this are ignored by the word-hit score.
MIN_WORD_LENGTH = 3


def ngram_fit(clean: str, table: Mapping[str, float], n: int) -> float:
    """Mean reference frequency over every n-gram window of an already-normalized text."""
    windows = len(clean) - n + 1
    if windows <= 0:
        return 0.0
    get = table.get
    total = 0.0
    for i in range(windows):
        total += get(clean[i:i + n], 0.0)
    return total / windows


def word_fit(text: str, profile: LanguageProfile) -> float:
    """Fraction of whitespace tokens (>= 3 letters) found in the profile's common words."""
    found = 0
    considered = 0
    for token in text.split():
        word = normalize_text(token)
        if len(word) >= MIN_WORD_LENGTH:
            considered += 1
            if word in profile.common_words:
                found += 1
    return found / considered if considered > 0 else 0.0


def fitness_breakdown(text: str, profile: LanguageProfile | None = None) -> dict[str, float]:
    """
    Score a candidate plaintext.

    Returns dict with:
        unigram: englishness (letter chi-squared, inverted)
        bigram: mean reference bigram frequency
        trigram: mean reference trigram frequency
        word: common-word hit rate
        total: weighted sum (FITNESS_WEIGHTS)
    """
    if profile is None:
        profile = get_profile()
    clean = normalize_text(text)
    parts = {
        "unigram": englishness(clean, profile),
        "bigram": ngram_fit(clean, profile.bigrams, 2),
        "trigram": ngram_fit(clean, profile.trigrams, 3),
        "word": word_fit(text, profile),
    }
    parts["total"] = sum(FITNESS_WEIGHTS[k] * parts[k] for k in FITNESS_WEIGHTS)
    return parts


def fitness(text: str, profile: LanguageProfile | None = None) -> float:
    """Single scalar fitness; higher = more like the profile's language."""
    return fitness_breakdown(text, profile)["total"]


# ============================================================================
# 5. SOLVER PLUMBING — Config, result, logging, confidence
# ============================================================================

STATUS_OK = "ok"
STATUS_INVALID_INPUT = "invalid_input"
STATUS_INSUFFICIENT = "insufficient_evidence"

METHODS = ("frequency", "hill_climbing", "simulated_annealing", "hybrid", "ensemble")

MIN_SUPPORTED_KEY_LENGTH = 2
MAX_SUPPORTED_KEY_LENGTH = 64
MIN_SUBSTRING_LENGTH = 2
MAX_SUBSTRING_LENGTH = 10


@dataclass
class SolverConfig:
    """Tunables shared by all solvers. Call normalized() before use."""

    method: str = "hybrid"
    max_iterations: int = 1000
    annealing_iterations: int = 2000
    initial_temperature: float = 100.0
    min_temperature: float = 0.001
    min_key_length: int = 2
    max_key_length: int = 20
    min_substring_length: int = 3
    min_text_length: int = 20
    key_length_candidates: int = 5
    top_n: int = 5
    max_workers: int = 1
    seed: int | None = None
    verbose: bool = False

    def normalized(self) -> SolverConfig:
        """
        Copy with out-of-range values corrected.

        Key-length bounds are clamped to the supported range and swapped if
        inverted; counts are floored at sensible minimums.

        Raises:
            ValueError: If method is not one of METHODS.
        """
        if self.method not in METHODS:
            raise ValueError(f"Unknown optimization method '{self.method}' "
                             f"(expected one of: {', '.join(METHODS)})")

        def _clamp_len(v: int) -> int:
            return int(min(max(v, MIN_SUPPORTED_KEY_LENGTH), MAX_SUPPORTED_KEY_LENGTH))

        lo = _clamp_len(self.min_key_length)
        hi = _clamp_len(self.max_key_length)
        if lo > hi:
            lo, hi = hi, lo
        initial = self.initial_temperature if self.initial_temperature > 0 else 100.0
        floor = min(max(self.min_temperature, 1e-9), initial)
        return replace(
            self,
            min_key_length=lo,
            max_key_length=hi,
            min_substring_length=int(min(max(self.min_substring_length, MIN_SUBSTRING_LENGTH),
                                         MAX_SUBSTRING_LENGTH)),
            max_iterations=max(0, int(self.max_iterations)),
            annealing_iterations=max(0, int(self.annealing_iterations)),
            initial_temperature=float(initial),
            min_temperature=float(floor),
            min_text_length=max(0, int(self.min_text_length)),
            top_n=max(1, int(self.top_n)),
            max_workers=max(1, int(self.max_workers)),
        )


@dataclass
class SolverResult:
    """
    Outcome of one solver run.

    key is an int shift (Caesar), a 26-letter cipher->plain mapping
    (substitution) or a keyword (Vigenere). confidence is a 0-100 ranking
    signal, not a calibrated probability.
    """

    cipher: str
    plaintext: str = ""
    key: int | str | None = None
    confidence: float = 0.0
    score: float = 0.0
    elapsed_ms: float = 0.0
    status: str = STATUS_OK
    alternatives: list[tuple[str, float]] = field(default_factory=list)
    history: list[tuple[int, float]] = field(default_factory=list)
    diagnostics: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    @classmethod
    def empty(
        cls,
        cipher: str,
        status: str,
        elapsed_ms: float = 0.0,
        diagnostics: dict | None = None,
    ) -> SolverResult:
        """No plaintext, no key, zero confidence."""
        return cls(cipher=cipher, status=status, elapsed_ms=elapsed_ms,
                   diagnostics=diagnostics or {})

    def as_dict(self) -> dict:
        """JSON-friendly dict."""
        return asdict(self)


def clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def confidence_from_margin(best: float, second: float) -> float:
    """Margin-based confidence: (best - second) * 10 + 50, clamped to [0, 100]."""
    return clamp((best - second) * 10.0 + 50.0)


def confidence_from_score(score: float, max_score: float = 1.0) -> float:
    """Score as a percentage of max_score, clamped to [0, 100]."""
    if max_score <= 0:
        return 0.0
    return clamp(score / max_score * 100.0)


def make_logger(
    verbose: bool,
    sink: Callable[[str], None] | None = None,
) -> Callable[[str], None]:
    """
    Verbose-output callable for a solver.

    Messages get a [HH:MM:SS] prefix and go to sink (print by default). When
    verbose is off the returned callable does nothing.
    """
    if not verbose:
        return lambda message: None
    out = sink or print

    def log(message: str) -> None:
        out(f"[{time.strftime('%H:%M:%S')}] {message}")

    return log


def elapsed_ms_since(t0: float) -> float:
    return (time.perf_counter() - t0) * 1000.0


def add_input_arguments(parser: argparse.ArgumentParser) -> None:
    """--text / --file, mutually exclusive and required."""
    src = parser.add_mutually_exclusive_group(required=True)
    src.add_argument("--text", type=str, help="Ciphertext string")
    src.add_argument("--file", type=str, help="Path to a ciphertext file")


def read_input_text(args: argparse.Namespace) -> str:
    """Resolve --text / --file into the input string."""
    if getattr(args, "file", None):
        return Path(args.file).read_text(encoding="utf-8", errors="replace")
    return args.text or ""


def add_solver_arguments(parser: argparse.ArgumentParser) -> None:
    """Flags mirroring SolverConfig fields, plus --language."""
    defaults = SolverConfig()
    parser.add_argument("--language", type=str, default="english",
                        help="Reference language profile (default: english)")
    parser.add_argument("--profile-json", type=str, default=None,
                        help="Load an extra language profile from JSON before solving")
    parser.add_argument("--method", choices=METHODS, default=defaults.method,
                        help="Substitution optimization method (default: hybrid)")
    parser.add_argument("--iterations", type=int, default=defaults.max_iterations,
                        help="Hill-climbing iterations (default: 1000)")
    parser.add_argument("--anneal-iterations", type=int, default=defaults.annealing_iterations,
                        help="Simulated annealing iterations (default: 2000)")
    parser.add_argument("--temperature", type=float, default=defaults.initial_temperature,
                        help="Initial annealing temperature (default: 100.0)")
    parser.add_argument("--min-key", type=int, default=defaults.min_key_length,
                        help="Minimum Vigenere key length (default: 2)")
    parser.add_argument("--max-key", type=int, default=defaults.max_key_length,
                        help="Maximum Vigenere key length (default: 20)")
    parser.add_argument("--min-substring", type=int, default=defaults.min_substring_length,
                        help="Minimum repeated substring length for Kasiski (default: 3)")
    parser.add_argument("--min-length", type=int, default=defaults.min_text_length,
                        help="Minimum letters before a Caesar shift is scored (default: 20)")
    parser.add_argument("--candidates", type=int, default=defaults.key_length_candidates,
                        help="Vigenere key lengths to try, 0 = all (default: 5)")
    parser.add_argument("--top", type=int, default=defaults.top_n,
                        help="Alternative solutions to report (default: 5)")
    parser.add_argument("--workers", type=int, default=defaults.max_workers,
                        help="Worker threads for independent evaluations (default: 1)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Timestamped progress output")


def config_from_args(args: argparse.Namespace) -> SolverConfig:
    """Build a normalized SolverConfig from add_solver_arguments() flags."""
    return SolverConfig(
        method=args.method,
        max_iterations=args.iterations,
        annealing_iterations=args.anneal_iterations,
        initial_temperature=args.temperature,
        min_key_length=args.min_key,
        max_key_length=args.max_key,
        min_substring_length=args.min_substring,
        min_text_length=args.min_length,
        key_length_candidates=args.candidates,
        top_n=args.top,
        max_workers=args.workers,
        seed=args.seed,
        verbose=args.verbose,
    ).normalized()


def profile_from_args(args: argparse.Namespace) -> LanguageProfile:
    """Load --profile-json if given, then resolve --language."""
    if getattr(args, "profile_json", None):
        loaded = load_profile_json(args.profile_json)
        if args.language.lower() == loaded.name.lower():
            return loaded
    return get_profile(args.language)


# ============================================================================
# 6. OUTPUT UTILS — Formatting, previews, plots
# ============================================================================

def format_frequency_table(
    freq: Mapping[str, float],
    reference: Mapping[str, float] | None = None,
    bar_scale: float = 0.5,
) -> str:
    """Letter / observed % / expected % / bar chart, one row per letter."""
    header = f"  {'Char':>4}  {'Observed':>9}"
    if reference is not None:
        header += f"  {'Expected':>9}"
    lines = [header, "  " + "-" * (len(header) + 10)]
    for c in ALPHABET:
        obs = freq.get(c, 0.0)
        row = f"  {c:>4}  {obs:>8.2f}%"
        if reference is not None:
            row += f"  {reference.get(c, 0.0):>8.2f}%"
        row += "  " + "*" * int(obs * bar_scale)
        lines.append(row)
    return "\n".join(lines)


def format_mapping(mapping: str) -> str:
    """Two-line cipher/plain table for a substitution mapping."""
    return ("CIPHER: " + " ".join(ALPHABET) + "\n"
            + "PLAIN : " + " ".join(mapping))


def format_key_length_table(analysis: Mapping, limit: int = 10) -> str:
    """Combined / Kasiski / IC scores for the top-ranked key lengths."""
    kasiski = analysis.get("kasiski", {})
    ic = analysis.get("ic", {})
    lines = [f"  {'Length':>6}  {'Combined':>9}  {'Kasiski':>8}  {'Avg IC':>8}",
             "  " + "-" * 39]
    for length, combined in list(analysis.get("combined", []))[:limit]:
        lines.append(f"  {length:>6}  {combined:>9.4f}  "
                     f"{kasiski.get(length, 0.0):>8.3f}  {ic.get(length, 0.0):>8.4f}")
    return "\n".join(lines)


def format_decode_preview(decoded: str, width: int = 70) -> str:
    """Wrap text into fixed-width lines labelled with their character offset."""
    lines: list[str] = []
    for i in range(0, len(decoded), width):
        chunk = decoded[i : i + width].replace("\n", " ")
        lines.append(f"  {i:4d}: {chunk}")
    return "\n".join(lines)


def format_result(result: SolverResult, preview_width: int = 70) -> str:
    """Summary block for a SolverResult."""
    lines = [
        f"  Cipher:     {result.cipher}",
        f"  Status:     {result.status}",
        f"  Key:        {result.key}",
        f"  Score:      {result.score:.4f}",
        f"  Confidence: {result.confidence:.1f}%",
        f"  Time:       {result.elapsed_ms:.1f} ms",
    ]
    if result.plaintext:
        lines.append("  Plaintext:")
        lines.append(format_decode_preview(result.plaintext, preview_width))
    return "\n".join(lines)


def plot_frequency_comparison(
    freq: Mapping[str, float],
    profile: LanguageProfile | None = None,
    title: str = "Letter frequencies",
    save_path: str | Path | None = None,
) -> None:
    """
    Bar chart of observed vs reference letter frequencies.

    Requires matplotlib (optional dependency).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        warnings.warn("matplotlib not available; skipping plot")
        return

    if profile is None:
        profile = get_profile()
    xs = np.arange(26)
    fig, ax = plt.subplots(figsize=(12, 4))
    ax.bar(xs, [freq.get(c, 0.0) for c in ALPHABET], width=0.4, alpha=0.7,
           label="Observed", align="edge")
    ax.bar(xs + 0.4, [profile.letter_freq[c] for c in ALPHABET], width=0.4, alpha=0.5,
           label=profile.name.capitalize(), align="edge", color="orange")
    ax.set_xticks(xs + 0.4)
    ax.set_xticklabels(list(ALPHABET))
    ax.set_ylabel("Percent")
    ax.set_title(title)
    ax.legend(fontsize=8)

    plt.tight_layout()
    if save_path:
        plt.savefig(str(save_path), dpi=150, bbox_inches="tight")
        print(f"Saved: {save_path}")
        plt.close(fig)
    else:
        plt.show()


# ============================================================================
# SELF-TEST — Run when executed directly
# ============================================================================

_SELF_TEST_TEXT = (
    "It was the best of times, it was the worst of times, it was the age of "
    "wisdom, it was the age of foolishness, it was the epoch of belief, it was "
    "the epoch of incredulity, it was the season of light, it was the season of "
    "darkness, it was the spring of hope, it was the winter of despair."
)


def _self_test() -> None:
    """Check codec round trips and print the stats for a short English sample."""
    print("=== freqbreak.py self-test ===\n")

    assert caesar_decrypt("KHOOR ZRUOG", 3) == "HELLO WORLD"
    assert caesar_decrypt("URYYB JBEYQ", 13) == "HELLO WORLD"
    assert split_by_key_position("ABCDEFGH", 3) == ["ADG", "BEH", "CF"]
    for shift in range(26):
        assert caesar_decrypt(caesar_encrypt(_SELF_TEST_TEXT, shift), shift) == _SELF_TEST_TEXT
    assert vigenere_decrypt(vigenere_encrypt(_SELF_TEST_TEXT, "LEMON"), "LEMON") == _SELF_TEST_TEXT
    print("Codec checks: PASS\n")

    print(f"Profiles: {', '.join(supported_languages())}")
    freq = letter_frequency(_SELF_TEST_TEXT)
    print(f"IC: {index_of_coincidence(_SELF_TEST_TEXT):.4f} "
          f"(english ~{get_profile().reference_ic}, random ~{language_data.RANDOM_IC})")
    print(f"Englishness: {englishness(_SELF_TEST_TEXT):.4f}")
    lang, conf = detect_language(_SELF_TEST_TEXT)
    print(f"Detected language: {lang} ({conf:.3f})")
    parts = fitness_breakdown(_SELF_TEST_TEXT)
    print("Fitness: " + "  ".join(f"{k}={v:.4f}" for k, v in parts.items()))
    print()
    print(format_frequency_table(freq, get_profile().letter_freq))

    print("\n=== Self-test complete ===")


if __name__ == "__main__":
    _self_test()
