"""Tests for the substitution solver."""

import pytest

import freqbreak as fb
from phase3_substitution import SubstitutionSolver, break_substitution, main

KEY = "QWERTYUIOPASDFGHJKLZXCVBNM"  # plain -> cipher


@pytest.fixture
def ciphertext(english_text):
    return fb.apply_mapping(english_text, KEY)


def _solver(**overrides):
    settings = {"max_iterations": 200, "annealing_iterations": 200, "seed": 42}
    settings.update(overrides)
    return SubstitutionSolver(config=fb.SolverConfig(**settings))


class TestSeedAndRefinement:

    def test_seed_pairs_by_frequency(self):
        solver = _solver()
        mapping = solver.seed_mapping("ZZZZ YYY XX W")
        assert fb.is_permutation(mapping)
        decoded = fb.apply_mapping("ZYXW", mapping)
        assert decoded == "ETAO"

    def test_seed_ties_alphabetical(self):
        mapping = _solver().seed_mapping("BA")
        assert mapping[0] == "E"
        assert mapping[1] == "T"

    def test_seed_on_english_is_plausible(self, ciphertext):
        solver = _solver()
        seed = solver.seed_mapping(ciphertext)
        assert fb.is_permutation(seed)
        assert solver.score_mapping(seed, ciphertext) > solver.score_mapping(fb.IDENTITY_MAPPING, ciphertext)

    def test_refinement_never_lowers_fitness(self, ciphertext):
        solver = _solver()
        seed = solver.seed_mapping(ciphertext)
        refined = solver.refine_with_bigrams(seed, ciphertext)
        assert fb.is_permutation(refined)
        assert solver.score_mapping(refined, ciphertext) >= solver.score_mapping(seed, ciphertext)

    def test_refinement_skips_incompatible_pairs(self):
        # only bigram is a doubled letter; "TH" cannot be honoured
        solver = _solver()
        assert solver.refine_with_bigrams(fb.IDENTITY_MAPPING, "XXXXXXXX") == fb.IDENTITY_MAPPING


class TestLocalSearch:

    def test_neighbor_swaps_two_targets(self, rng):
        neighbor = SubstitutionSolver._neighbor(fb.IDENTITY_MAPPING, rng)
        assert fb.is_permutation(neighbor)
        diffs = [i for i in range(26) if neighbor[i] != fb.IDENTITY_MAPPING[i]]
        assert len(diffs) == 2

    def test_hill_climb_history_strictly_increasing(self, ciphertext, rng):
        solver = _solver()
        start = fb.random_mapping(rng)
        start_score = solver.score_mapping(start, ciphertext)
        history = []
        best, score = solver.hill_climb(start, ciphertext, iterations=300, history=history)
        assert history
        scores = [s for _, s in history]
        assert all(b > a for a, b in zip(scores, scores[1:]))
        assert scores[0] > start_score
        assert score == scores[-1]
        assert score == pytest.approx(solver.score_mapping(best, ciphertext))
        iterations = [i for i, _ in history]
        assert iterations == sorted(iterations)

    def test_hill_climb_zero_iterations(self, ciphertext):
        solver = _solver()
        best, score = solver.hill_climb(fb.IDENTITY_MAPPING, ciphertext, iterations=0)
        assert best == fb.IDENTITY_MAPPING

    def test_annealing_returns_best_seen(self, ciphertext):
        solver = _solver()
        seed = solver.seed_mapping(ciphertext)
        seed_score = solver.score_mapping(seed, ciphertext)
        history = []
        best, score = solver.simulated_annealing(seed, ciphertext, iterations=300, history=history)
        assert fb.is_permutation(best)
        assert score >= seed_score
        assert score == pytest.approx(solver.score_mapping(best, ciphertext))
        if history:
            assert history[-1][1] == score


class TestSubstitutionSolver:

    @pytest.mark.parametrize("method", fb.METHODS)
    def test_every_method_returns_permutation(self, ciphertext, method):
        result = _solver(method=method, max_workers=3).solve(ciphertext)
        assert result.status == fb.STATUS_OK
        assert fb.is_permutation(result.key)
        assert result.diagnostics["method"] == method
        assert 0.0 <= result.confidence <= 100.0
        assert result.confidence == pytest.approx(min(100.0, result.score * 100.0))

    def test_frequency_method_is_seed(self, ciphertext):
        solver = _solver(method="frequency")
        assert solver.solve(ciphertext).key == solver.seed_mapping(ciphertext)

    def test_hybrid_not_worse_than_seed(self, ciphertext):
        solver = _solver()
        result = solver.solve(ciphertext)
        assert result.score >= result.diagnostics["stages"]["frequency"]
        assert result.score >= result.diagnostics["stages"]["bigram"]

    def test_ensemble_not_worse_than_seed(self, ciphertext):
        result = _solver(method="ensemble", max_workers=3).solve(ciphertext)
        assert result.score >= result.diagnostics["stages"]["frequency"]

    def test_same_seed_same_result(self, ciphertext):
        a = _solver(method="simulated_annealing", seed=7).solve(ciphertext)
        b = _solver(method="simulated_annealing", seed=7).solve(ciphertext)
        assert a.key == b.key
        assert a.history == b.history

    def test_ensemble_deterministic(self, ciphertext):
        a = _solver(method="ensemble", seed=3, max_workers=3).solve(ciphertext)
        b = _solver(method="ensemble", seed=3, max_workers=1).solve(ciphertext)
        assert a.key == b.key

    def test_preserves_case_and_punctuation(self, english_text, ciphertext):
        result = _solver().solve(ciphertext)
        assert len(result.plaintext) == len(english_text)
        for got, original in zip(result.plaintext, english_text):
            assert got.isalpha() == original.isalpha()
            if not original.isalpha():
                assert got == original
            else:
                assert got.isupper() == original.isupper()

    def test_plaintext_matches_key(self, ciphertext):
        result = _solver().solve(ciphertext)
        assert result.plaintext == fb.apply_mapping(ciphertext, result.key)

    def test_alternatives_ranked(self, ciphertext):
        result = _solver().solve(ciphertext)
        scores = [s for _, s in result.alternatives]
        assert scores == sorted(scores, reverse=True)
        assert result.alternatives[0][1] == pytest.approx(result.score)

    def test_invalid_input(self):
        result = _solver().solve("12345 67890 !!")
        assert result.status == fb.STATUS_INVALID_INPUT
        assert result.key is None

    def test_short_text_flagged(self):
        result = _solver().solve("XLI GEX")
        assert result.status == fb.STATUS_INSUFFICIENT
        assert result.confidence == 0.0
        assert fb.is_permutation(result.key)

    def test_candidates_distinct_and_ranked(self, ciphertext):
        candidates = _solver().candidates(ciphertext)
        texts = [t for t, _ in candidates]
        assert 1 <= len(candidates) <= 3
        assert len(set(texts)) == len(texts)
        scores = [s for _, s in candidates]
        assert scores == sorted(scores, reverse=True)
        assert _solver().candidates("") == []

    def test_candidates_climb_from_frequency_seed(self, ciphertext, monkeypatch):
        solver = _solver()
        starts = []
        climb = solver.hill_climb

        def recording_climb(mapping, text, **kwargs):
            starts.append(mapping)
            return climb(mapping, text, **kwargs)

        monkeypatch.setattr(solver, "hill_climb", recording_climb)
        solver.candidates(ciphertext)
        assert starts == [solver.seed_mapping(ciphertext)]

    def test_break_substitution_helper(self, ciphertext):
        result = break_substitution(ciphertext, config=fb.SolverConfig(method="frequency"))
        assert result.cipher == "substitution"


class TestSubstitutionCli:

    def test_break(self, capsys, ciphertext):
        main(["--text", ciphertext, "--iterations", "50", "--seed", "1"])
        out = capsys.readouterr().out
        assert "SUBSTITUTION CRYPTANALYSIS (hybrid)" in out
        assert "CIPHER: A B C" in out
        line = next(l for l in out.splitlines() if "Encryption key" in l)
        printed = line.split(":")[-1].strip()
        assert fb.is_permutation(printed)
        plain = fb.apply_mapping(ciphertext, fb.invert_mapping(printed))
        assert fb.apply_mapping(plain, printed) == ciphertext

    def test_encrypt(self, capsys):
        main(["--text", "abc", "--encrypt", KEY])
        assert capsys.readouterr().out.strip() == "qwe"

    def test_encrypt_rejects_bad_key(self):
        with pytest.raises(SystemExit):
            main(["--text", "abc", "--encrypt", "ABC"])
