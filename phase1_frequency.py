"""
---
version: 0.1.0
created: 2026-10-19
updated: 2026-10-19
---

phase1_frequency.py — Frequency-analysis report for a ciphertext.

Letter table against a reference profile, chi-squared goodness of fit (with
p-value and KL divergence), index of coincidence, language detection and the
most common bigrams and trigrams. Works on plaintext too, which is the easiest
way to sanity-check a language profile.

Usage:
    python3 phase1_frequency.py --file cipher.txt
    python3 phase1_frequency.py --text "..." --language turkish
    python3 phase1_frequency.py --file cipher.txt --plot --save-dir plots/
"""

from __future__ import annotations

import argparse
from pathlib import Path

import language_data
from freqbreak import (
    LanguageProfile,
    add_input_arguments, chi_squared, common_ngrams, detect_language,
    englishness, format_frequency_table, get_profile, index_of_coincidence,
    letter_counts, letter_frequency, letter_goodness_of_fit, load_profile_json,
    plot_frequency_comparison, read_input_text,
)


def interpret_ic(ic: float, profile: LanguageProfile) -> str:
    """Say whether an IC sits nearer the profile's value or uniform random letters."""
    if ic <= 0.0:
        return "not enough letters"
    if abs(ic - profile.reference_ic) <= abs(ic - language_data.RANDOM_IC):
        return f"close to {profile.name} ({profile.reference_ic:.4f})"
    return f"close to random ({language_data.RANDOM_IC:.4f})"


def analyze_text(text: str, profile: LanguageProfile | None = None, top_k: int = 10) -> dict:
    """
    Frequency statistics for one text.

    Returns dict with:
        letters: number of A-Z letters
        counts: letter -> count
        frequency: letter -> percent
        chi2: chi-squared of percentages vs the profile
        englishness: 1 / (1 + chi2)
        goodness: letter_goodness_of_fit() dict (count-based chi2, p-value, KL)
        ic: index of coincidence
        ic_interpretation: short description of where the IC sits
        language: (detected name, confidence)
        bigrams / trigrams: top_k (ngram, percent) lists
    """
    if profile is None:
        profile = get_profile()
    freq = letter_frequency(text)
    counts = letter_counts(text)
    ic = index_of_coincidence(text)
    return {
        "letters": sum(counts.values()),
        "counts": dict(counts),
        "frequency": freq,
        "chi2": chi_squared(freq, profile.letter_freq),
        "englishness": englishness(text, profile),
        "goodness": letter_goodness_of_fit(text, profile),
        "ic": ic,
        "ic_interpretation": interpret_ic(ic, profile),
        "language": detect_language(text),
        "bigrams": common_ngrams(text, 2, top_k),
        "trigrams": common_ngrams(text, 3, top_k),
    }


def print_report(report: dict, profile: LanguageProfile) -> None:
    print("=" * 70)
    print(f"FREQUENCY ANALYSIS (reference: {profile.name})")
    print("=" * 70)

    print(f"\nLetters analysed: {report['letters']}")
    print()
    print(format_frequency_table(report["frequency"], profile.letter_freq))

    gof = report["goodness"]
    print(f"\nChi-squared (percent):  {report['chi2']:.2f}")
    print(f"Englishness:            {report['englishness']:.4f}")
    print(f"Chi-squared (counts):   {gof['chi2']:.2f}  p = {gof['p_value']:.2e}")
    print(f"KL divergence:          {gof['kl_divergence']:.4f} bits")
    print(f"Index of coincidence:   {report['ic']:.4f}  ({report['ic_interpretation']})")
    lang, conf = report["language"]
    print(f"Detected language:      {lang} ({conf:.3f})")

    for title, rows in (("bigrams", report["bigrams"]), ("trigrams", report["trigrams"])):
        print(f"\nTop {title}:")
        if not rows:
            print("  (none)")
        for gram, pct in rows:
            print(f"  {gram:<4} {pct:>6.2f}%")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Letter/n-gram frequency report")
    add_input_arguments(parser)
    parser.add_argument("--language", type=str, default="english",
                        help="Reference language profile (default: english)")
    parser.add_argument("--profile-json", type=str, default=None,
                        help="Load an extra language profile from JSON first")
    parser.add_argument("--top", type=int, default=10,
                        help="How many bigrams/trigrams to list (default: 10)")
    parser.add_argument("--plot", action="store_true",
                        help="Plot observed vs reference letter frequencies")
    parser.add_argument("--save-dir", type=str, default=None,
                        help="Save the plot here instead of showing it")
    args = parser.parse_args(argv)

    if args.profile_json:
        load_profile_json(args.profile_json)
    profile = get_profile(args.language)

    text = read_input_text(args)
    report = analyze_text(text, profile, args.top)
    print_report(report, profile)

    if args.plot:
        save_path = None
        if args.save_dir:
            out = Path(args.save_dir)
            out.mkdir(parents=True, exist_ok=True)
            save_path = out / "letter_frequency.png"
        plot_frequency_comparison(report["frequency"], profile, save_path=save_path)


if __name__ == "__main__":
    main()
