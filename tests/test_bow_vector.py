"""Unit tests for the sparse BoW vector container."""

import numpy as np
import pytest

from pyBowScore.BowVector import WORD_VALUE_TYPE, BowVector, as_bow_vector


class TestBowVector:
    """Test ordering, lookup and normalization."""

    def test_iterates_in_ascending_word_order(self):
        bv = BowVector()
        for word_id in (9, 2, 5, 1):
            bv.add_weight(word_id, 1.0)

        assert list(bv) == [1, 2, 5, 9]
        assert list(bv.keys()) == [1, 2, 5, 9]
        assert bv.word_ids == [1, 2, 5, 9]

    def test_add_weight_accumulates(self):
        bv = BowVector()
        bv.add_weight(3, 0.25)
        bv.add_weight(3, 0.5)

        assert len(bv) == 1
        assert bv[3] == pytest.approx(0.75)

    def test_add_if_not_exist_keeps_existing_weight(self):
        bv = BowVector({3: 0.25})
        bv.add_if_not_exist(3, 0.9)
        bv.add_if_not_exist(1, 0.1)

        assert bv[3] == 0.25
        assert list(bv.items()) == [(1, 0.1), (3, 0.25)]

    def test_pairs_with_repeated_words_accumulate(self):
        bv = BowVector([(4, 1.0), (2, 1.0), (4, 2.0)])

        assert list(bv.items()) == [(2, 1.0), (4, 3.0)]

    def test_weights_use_word_value_type(self):
        bv = BowVector({1: 1})

        assert isinstance(bv[1], WORD_VALUE_TYPE)

    def test_lower_bound(self):
        bv = BowVector({2: 0.1, 5: 0.2, 9: 0.7})

        assert bv.lower_bound(0) == 0
        assert bv.lower_bound(2) == 0
        assert bv.lower_bound(5) == 1
        assert bv.lower_bound(6) == 2
        assert bv.lower_bound(10) == 3
        assert bv.lower_bound(2, lo=1) == 1

    def test_point_lookup(self):
        bv = BowVector({2: 0.1, 5: 0.9})

        assert 5 in bv
        assert 3 not in bv
        assert bv.get(5) == pytest.approx(0.9)
        assert bv.get(3) is None
        assert bv.get(3, 0.0) == 0.0
        with pytest.raises(KeyError):
            bv[3]

    def test_normalize_l1(self):
        bv = BowVector({1: 1.0, 2: 3.0})
        bv.normalize("L1")

        assert sum(bv.values()) == pytest.approx(1.0)
        assert bv[2] == pytest.approx(0.75)

    def test_normalize_l2(self):
        bv = BowVector({1: 3.0, 2: 4.0})
        bv.normalize("L2")

        assert np.sqrt(sum(w ** 2 for w in bv.values())) == pytest.approx(1.0)
        assert bv[1] == pytest.approx(0.6)

    def test_normalize_zero_vector_is_untouched(self):
        bv = BowVector({1: 0.0})
        bv.normalize("L1")

        assert bv[1] == 0.0

    def test_normalize_rejects_unknown_norm(self):
        with pytest.raises(ValueError):
            BowVector({1: 1.0}).normalize("L3")

    def test_repr(self):
        assert repr(BowVector({5: 0.5, 2: 0.25})) == "<2, 0.25>, <5, 0.5>"

    def test_equality(self):
        assert BowVector({1: 0.5, 2: 0.5}) == BowVector([(2, 0.5), (1, 0.5)])
        assert BowVector({1: 0.5}) != BowVector({1: 0.25})

    def test_word_weights_is_read_only(self):
        bv = BowVector({1: 0.5})

        with pytest.raises(TypeError):
            bv.word_weights[2] = 0.5
        assert dict(bv.word_weights) == {1: 0.5}
        assert bv.word_ids == [1]

    def test_as_bow_vector(self):
        bv = BowVector({1: 1.0})

        assert as_bow_vector(bv) is bv
        assert as_bow_vector({7: 0.5, 3: 0.5}).word_ids == [3, 7]
