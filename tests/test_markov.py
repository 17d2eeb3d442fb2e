"""
Tests for the Markov Engine
===========================
Tests for training, sampling and persistence in
passkit/generators/markov_generator.py.
"""

import pytest

from passkit.errors import GenerationFailure, InvalidConfig
from passkit.generators import RandomSource
from passkit.generators.markov_generator import (
    MarkovChain,
    MarkovModel,
    MarkovTrainer,
    load_model,
    save_model,
)


@pytest.fixture(scope="module")
def chain(corpus):
    return MarkovChain.from_words(corpus)


class TestMarkovTrainer:
    def test_counts_windows(self):
        model = MarkovTrainer(order=2).train(["abab", "abc"])
        assert dict(model.transitions["ab"]) == {"a": 1, "c": 1}
        assert dict(model.transitions["ba"]) == {"b": 1}
        assert dict(model.start_states) == {"ab": 2}

    def test_serialized_tables(self):
        model = MarkovTrainer().train(["abc", "cab"])
        assert set(model.to_dict()) == {"order", "transitions", "start_states"}
        assert model.to_dict()["start_states"] == {"ab": 1, "ca": 1}

    def test_short_words_skipped(self):
        model = MarkovTrainer(order=2).train(["ab", "x", "", "abc"])
        assert dict(model.start_states) == {"ab": 1}
        assert set(model.transitions) == {"ab"}

    def test_lowercases_and_strips_non_letters(self):
        model = MarkovTrainer().train(["Ab-C"])
        assert model.to_dict()["transitions"] == {"ab": {"c": 1}}

    def test_deterministic(self, corpus):
        a = MarkovTrainer().train(corpus).to_dict()
        b = MarkovTrainer().train(corpus).to_dict()
        assert a == b

    def test_model_is_read_only(self):
        model = MarkovTrainer().train(["abc"])
        with pytest.raises(TypeError):
            model.transitions["zz"] = {}

    def test_invalid_order(self):
        with pytest.raises(InvalidConfig):
            MarkovTrainer(order=0)

    def test_empty_corpus(self):
        model = MarkovTrainer().train([])
        assert not model.transitions
        assert not model.start_states


class TestMarkovChain:
    @pytest.mark.parametrize("length", [1, 2, 3, 5, 8, 12, 20, 40])
    def test_exact_length(self, chain, length):
        sample = chain.sample(length, RandomSource.seeded(length))
        assert len(sample.text) == length
        assert sample.text.isalpha()
        assert sample.text.islower()

    def test_starts_with_word_start(self, chain, rng):
        for _ in range(20):
            text = chain.sample(6, rng).text
            assert text[:2] in chain.starts

    def test_choices_recorded(self, chain, rng):
        sample = chain.sample(12, rng)
        assert sample.choices[0] == len(chain.starts)
        assert all(c >= 1 for c in sample.choices)

    def test_restarts_on_dead_end(self, chain):
        # Contexts ending in 's' never continue in the synthetic corpus
        assert chain.branching("as") == 0
        restarted = [
            chain.sample(30, RandomSource.seeded(seed)).restarts
            for seed in range(30)
        ]
        assert any(r > 0 for r in restarted)

    def test_too_many_dead_ends(self):
        chain = MarkovChain.from_words(["abc"])
        with pytest.raises(GenerationFailure):
            chain.sample(20, RandomSource.seeded(1), max_restarts=2)

    def test_dead_ends_within_budget(self):
        chain = MarkovChain.from_words(["abc"])
        sample = chain.sample(9, RandomSource.seeded(1), max_restarts=10)
        assert sample.text == "abcabcabc"
        assert sample.restarts == 2

    def test_no_start_contexts(self, rng):
        chain = MarkovChain(MarkovTrainer().train(["a", "bc"]))
        with pytest.raises(GenerationFailure):
            chain.sample(8, rng)

    def test_invalid_length(self, chain, rng):
        with pytest.raises(InvalidConfig):
            chain.sample(0, rng)

    def test_reproducible(self, chain):
        a = chain.sample(16, RandomSource.seeded(99)).text
        b = chain.sample(16, RandomSource.seeded(99)).text
        assert a == b

    def test_model_unchanged_by_sampling(self, chain, rng):
        before = chain.model.to_dict()
        for _ in range(10):
            chain.sample(15, rng)
        assert chain.model.to_dict() == before


class TestPersistence:
    def test_save_load(self, tmp_path, corpus):
        model = MarkovTrainer().train(corpus[:500])
        path = tmp_path / "model.json"
        save_model(model, str(path))

        loaded = load_model(str(path))
        assert isinstance(loaded, MarkovModel)
        assert loaded.order == model.order
        assert loaded.to_dict() == model.to_dict()


class TestWeightedIndex:
    def test_zero_weight_never_chosen(self):
        rng = RandomSource.seeded(3)
        picks = {rng.weighted_index([0, 5, 0, 1]) for _ in range(200)}
        assert picks <= {1, 3}

    def test_proportional(self):
        rng = RandomSource.seeded(5)
        picks = [rng.weighted_index([9, 1]) for _ in range(2000)]
        assert 0.85 < picks.count(0) / len(picks) < 0.95

    def test_all_zero(self):
        with pytest.raises(ValueError):
            RandomSource.seeded(1).weighted_index([0, 0])
