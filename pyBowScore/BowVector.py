from bisect import bisect_left, insort
from types import MappingProxyType

import numpy as np

# If you change the type of WordValue, LOG_EPS in ScoringObject follows it
WORD_VALUE_TYPE = np.float64


class BowVector:
    """Sparse word_id -> weight histogram, always iterated by ascending word id."""

    def __init__(self, word_weights=None):
        self._word_weights = {}
        self._word_ids = []

        if word_weights is None:
            return
        if hasattr(word_weights, "items"):
            word_weights = word_weights.items()
        for word_id, weight in word_weights:
            self.add_weight(word_id, weight)

    def add_weight(self, word_id, weight):
        """Add or increment the weight of a word."""
        if word_id in self._word_weights:
            self._word_weights[word_id] += WORD_VALUE_TYPE(weight)
        else:
            self._word_weights[word_id] = WORD_VALUE_TYPE(weight)
            insort(self._word_ids, word_id)

    def add_if_not_exist(self, word_id, weight):
        """Add the word only if it doesn't already exist."""
        if word_id not in self._word_weights:
            self._word_weights[word_id] = WORD_VALUE_TYPE(weight)
            insort(self._word_ids, word_id)

    def normalize(self, norm_type="L1"):
        """Normalize the vector using L1 or L2 norm."""
        if norm_type == "L1":
            total_weight = sum(abs(w) for w in self._word_weights.values())
        elif norm_type == "L2":
            total_weight = np.sqrt(sum(w ** 2 for w in self._word_weights.values()))
        else:
            raise ValueError("Unsupported normalization type. Use 'L1' or 'L2'.")

        if total_weight > 0:
            for word_id in self._word_weights:
                self._word_weights[word_id] /= total_weight

    @property
    def word_weights(self):
        """Read-only word_id -> weight view. Use add_weight to change weights."""
        return MappingProxyType(self._word_weights)

    @property
    def word_ids(self):
        """Word ids in ascending order. Callers must not modify the list."""
        return self._word_ids

    def lower_bound(self, word_id, lo=0):
        """
        Position of the first entry whose word id is >= word_id.
        :param word_id: Word id to search for.
        :param lo: Position to start searching from.
        :return: Index into word_ids, len(self) if there is no such entry.
        """
        return bisect_left(self._word_ids, word_id, lo)

    def get(self, word_id, default=None):
        return self._word_weights.get(word_id, default)

    def items(self):
        for word_id in self._word_ids:
            yield word_id, self._word_weights[word_id]

    def keys(self):
        return iter(self._word_ids)

    def values(self):
        for word_id in self._word_ids:
            yield self._word_weights[word_id]

    def __getitem__(self, word_id):
        return self._word_weights[word_id]

    def __contains__(self, word_id):
        return word_id in self._word_weights

    def __iter__(self):
        return iter(self._word_ids)

    def __len__(self):
        return len(self._word_ids)

    def __eq__(self, other):
        if isinstance(other, BowVector):
            return self._word_weights == other._word_weights
        return NotImplemented

    def __repr__(self):
        return ", ".join(f"<{word_id}, {weight}>" for word_id, weight in self.items())


def as_bow_vector(v):
    """Return v as a BowVector, wrapping plain word_id -> weight dicts."""
    if isinstance(v, BowVector):
        return v
    return BowVector(v)
