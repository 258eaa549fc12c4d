"""Tests for the frequency-analysis report."""

import pytest

import freqbreak as fb
from phase1_frequency import analyze_text, interpret_ic, main


class TestAnalyzeText:

    def test_report_fields(self, english_text):
        report = analyze_text(english_text)
        assert report["letters"] == len(fb.normalize_text(english_text))
        assert sum(report["counts"].values()) == report["letters"]
        assert report["language"][0] == "english"
        assert len(report["bigrams"]) == 10
        assert report["trigrams"][0][0] == "THE"
        assert report["goodness"]["n"] == report["letters"]

    def test_ic_interpretation(self, english_text, rng):
        profile = fb.get_profile()
        assert "english" in analyze_text(english_text)["ic_interpretation"]
        noise = "".join(rng.choice(list(fb.ALPHABET), size=3000))
        assert "random" in interpret_ic(fb.index_of_coincidence(noise), profile)
        assert interpret_ic(0.0, profile) == "not enough letters"

    def test_caesar_shift_keeps_ic(self, english_text):
        plain = analyze_text(english_text)
        shifted = analyze_text(fb.caesar_encrypt(english_text, 8))
        assert shifted["ic"] == pytest.approx(plain["ic"])
        assert shifted["chi2"] > plain["chi2"]

    def test_empty_text(self):
        report = analyze_text("")
        assert report["letters"] == 0
        assert report["bigrams"] == []
        assert report["language"] == ("unknown", 0.0)


class TestFrequencyCli:

    def test_report_output(self, capsys, english_text):
        main(["--text", english_text, "--top", "5"])
        out = capsys.readouterr().out
        assert "FREQUENCY ANALYSIS (reference: english)" in out
        assert "Index of coincidence" in out
        assert "Top trigrams" in out

    def test_unknown_language(self, english_text):
        with pytest.raises(ValueError):
            main(["--text", english_text, "--language", "klingon"])
