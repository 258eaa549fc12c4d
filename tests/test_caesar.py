"""Tests for the Caesar solver."""

import pytest

import freqbreak as fb
from phase2_caesar import CaesarSolver, break_caesar, main


class TestCaesarSolver:

    @pytest.fixture
    def solver(self):
        return CaesarSolver()

    def test_recovers_every_shift(self, solver, english_text):
        for shift in range(26):
            ciphertext = fb.caesar_encrypt(english_text, shift)
            assert solver.best_shift(ciphertext) == shift

    def test_pangram_shift_7(self, solver, pangram):
        ciphertext = fb.caesar_encrypt(pangram, 7)
        result = solver.solve(ciphertext)
        assert result.status == fb.STATUS_OK
        assert result.key == 7
        assert result.plaintext == pangram
        assert result.confidence > 50

    def test_preserves_case_and_punctuation(self, solver, english_text):
        ciphertext = fb.caesar_encrypt(english_text, 19)
        result = solver.solve(ciphertext)
        assert result.plaintext == english_text

    def test_ranking_covers_all_shifts(self, solver, english_text):
        ranked = solver.rank_shifts(fb.caesar_encrypt(english_text, 4))
        assert sorted(shift for shift, _ in ranked) == list(range(26))
        scores = [score for _, score in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_alternatives_limited_to_top_n(self, english_text):
        solver = CaesarSolver(config=fb.SolverConfig(top_n=3))
        result = solver.solve(fb.caesar_encrypt(english_text, 2))
        assert len(result.alternatives) == 3
        assert result.alternatives[0] == (result.plaintext, result.score)

    def test_short_text_is_insufficient(self, solver):
        result = solver.solve("KHOOR ZRUOG")
        assert result.status == fb.STATUS_INSUFFICIENT
        assert result.key == 0
        assert result.confidence == 0.0
        assert result.score == 0.0
        assert result.plaintext == "KHOOR ZRUOG"

    def test_short_text_ties_keep_shift_order(self, solver):
        ranked = solver.rank_shifts("KHOOR")
        assert [shift for shift, _ in ranked] == list(range(26))

    def test_min_length_is_configurable(self):
        solver = CaesarSolver(config=fb.SolverConfig(min_text_length=5))
        result = solver.solve("KHOOR ZRUOG")
        assert result.status == fb.STATUS_OK
        assert result.score > 0.0

    @pytest.mark.parametrize("text", ["", "1234 !!!", "a........"])
    def test_invalid_input(self, solver, text):
        result = solver.solve(text)
        assert result.status == fb.STATUS_INVALID_INPUT
        assert result.key is None
        assert result.plaintext == ""
        assert result.confidence == 0.0

    def test_thread_pool_matches_serial(self, english_text):
        ciphertext = fb.caesar_encrypt(english_text, 21)
        serial = CaesarSolver(config=fb.SolverConfig(max_workers=1)).rank_shifts(ciphertext)
        pooled = CaesarSolver(config=fb.SolverConfig(max_workers=4)).rank_shifts(ciphertext)
        assert pooled == serial

    def test_turkish_profile_accepted(self, english_text):
        result = break_caesar(fb.caesar_encrypt(english_text, 3), fb.get_profile("turkish"))
        assert result.status == fb.STATUS_OK
        assert 0 <= result.key < 26

    def test_verbose_logging(self, english_text, capsys):
        CaesarSolver(config=fb.SolverConfig(verbose=True)).solve(english_text)
        out = capsys.readouterr().out
        assert "Best shift 0" in out


class TestCaesarCli:

    def test_break(self, capsys, english_text):
        main(["--text", fb.caesar_encrypt(english_text, 9), "--top", "3"])
        out = capsys.readouterr().out
        assert "CAESAR CRYPTANALYSIS" in out
        assert "Key:        9" in out

    def test_encrypt(self, capsys):
        main(["--text", "HELLO WORLD", "--encrypt", "3"])
        assert capsys.readouterr().out.strip() == "KHOOR ZRUOG"

    def test_reads_file(self, capsys, tmp_path, english_text):
        path = tmp_path / "cipher.txt"
        path.write_text(fb.caesar_encrypt(english_text, 14), encoding="utf-8")
        main(["--file", str(path)])
        assert "Key:        14" in capsys.readouterr().out
