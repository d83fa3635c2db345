import logging
import threading

import numpy as np

from .BowVector import WORD_VALUE_TYPE, as_bow_vector

logger = logging.getLogger(__name__)

# Must be re-derived if WORD_VALUE_TYPE changes (needed by the KL method)
LOG_EPS = float(np.log(np.finfo(WORD_VALUE_TYPE).eps))

L1_NORM = "L1_NORM"
L2_NORM = "L2_NORM"
CHI_SQUARE = "CHI_SQUARE"
KL = "KL"
BHATTACHARYYA = "BHATTACHARYYA"
DOT_PRODUCT = "DOT_PRODUCT"

# Numeric codes as written in DBoW2 vocabulary headers
SCORING_TYPES = [L1_NORM, L2_NORM, CHI_SQUARE, KL, BHATTACHARYYA, DOT_PRODUCT]


class GeneralScoring:
    """Base class of the BowVector scoring methods.

    Inputs may be BowVectors or plain word_id -> weight dicts. Keys must be
    unique and weights non-negative; none of this is checked.
    """

    scoring_type = None
    norm_type = None

    def score(self, v1, v2):
        raise NotImplementedError

    def must_normalize(self):
        """
        Tells whether the vectors must be normalized before scoring.
        :return: (must_normalize, norm_type) where norm_type is "L1", "L2" or None.
        """
        return self.norm_type is not None, self.norm_type

    def __call__(self, v1, v2):
        return self.score(v1, v2)

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class L1Scoring(GeneralScoring):
    scoring_type = L1_NORM
    norm_type = "L1"

    def score(self, v1, v2):
        """
        Computes the L1 norm similarity score between two vectors.
        :param v1: First BowVector.
        :param v2: Second BowVector.
        :return: L1 similarity score, in [0, 1] for L1-normalized vectors.
        """
        v1, v2 = as_bow_vector(v1), as_bow_vector(v2)
        ids1, ids2 = v1.word_ids, v2.word_ids
        n1, n2 = len(ids1), len(ids2)
        i = j = 0
        score = 0.0

        # Double-pointer traversal reduces the lookup overhead
        while i < n1 and j < n2:
            if ids1[i] == ids2[j]:
                vi = v1[ids1[i]]
                wi = v2[ids2[j]]
                score += abs(vi - wi) - abs(vi) - abs(wi)
                i += 1
                j += 1
            elif ids1[i] < ids2[j]:
                i += 1
            else:
                j += 1

        score = -score / 2.0
        return float(score)


class L2Scoring(GeneralScoring):
    """L2 scoring with a fork-join probe of v1's entries into v2.

    Accumulates the same per-word term as L1Scoring, skipping only words
    where both weights are zero.
    """

    scoring_type = L2_NORM
    norm_type = "L2"

    def __init__(self, workers=4, min_parallel_size=1024):
        if workers < 1:
            raise ValueError(f"L2 scoring needs at least one worker, got {workers}")
        if min_parallel_size < 0:
            raise ValueError(f"min_parallel_size must be >= 0, got {min_parallel_size}")
        self.workers = workers
        self.min_parallel_size = min_parallel_size

    def _probe(self, items, v2, out):
        for word_id, vi in items:
            wi = v2.get(word_id)
            if wi is None:
                continue
            # skips pure zero-valued elements
            if vi != 0.0 or wi != 0.0:
                out.append(abs(vi - wi) - abs(vi) - abs(wi))

    def _probe_worker(self, items, v2, out, errors, k):
        try:
            self._probe(items, v2, out)
        except Exception as e:
            errors[k] = e

    def score(self, v1, v2):
        v1, v2 = as_bow_vector(v1), as_bow_vector(v2)
        items = list(v1.items())

        if self.workers == 1 or len(items) < max(self.min_parallel_size, 2):
            partial_scores = [[]]
            self._probe(items, v2, partial_scores[0])
        else:
            n_workers = min(self.workers, len(items))
            chunk = -(-len(items) // n_workers)
            partial_scores = [[] for _ in range(n_workers)]
            errors = [None] * n_workers
            threads = []
            logger.debug("L2 scoring %d words on %d workers", len(items), n_workers)

            for k in range(n_workers):
                t = threading.Thread(target=self._probe_worker,
                                     args=(items[k * chunk:(k + 1) * chunk], v2, partial_scores[k], errors, k))
                t.start()
                threads.append(t)

            for t in threads:
                t.join()

            # a failed worker leaves its partial buffer incomplete
            for error in errors:
                if error is not None:
                    raise error

        score = 0.0
        for partial in partial_scores:
            for val in partial:
                score += val

        return float(-score / 2.0)

    def __repr__(self):
        return f"L2Scoring(workers={self.workers}, min_parallel_size={self.min_parallel_size})"


class ChiSquareScoring(GeneralScoring):
    scoring_type = CHI_SQUARE
    norm_type = "L1"

    def score(self, v1, v2):
        """
        Computes the Chi-Square similarity score between two vectors.
        :param v1: First BowVector.
        :param v2: Second BowVector.
        :return: Chi-Square similarity score.
        """
        v1, v2 = as_bow_vector(v1), as_bow_vector(v2)
        ids1, ids2 = v1.word_ids, v2.word_ids
        n1, n2 = len(ids1), len(ids2)
        i = j = 0
        score = 0.0

        while i < n1 and j < n2:
            if ids1[i] == ids2[j]:
                vi = v1[ids1[i]]
                wi = v2[ids2[j]]
                # (v-w)^2/(v+w) - v - w = -4 vw/(v+w), the -4 is moved out
                if vi + wi != 0.0:
                    score += vi * wi / (vi + wi)
                i += 1
                j += 1
            elif ids1[i] < ids2[j]:
                i = v1.lower_bound(ids2[j], i)
            else:
                j = v2.lower_bound(ids1[i], j)

        # this takes the -4 into account
        score = 2.0 * score
        return float(score)


class KLScoring(GeneralScoring):
    """Kullback-Leibler divergence of v1 with respect to v2.

    Not symmetric and not scaled: 0 for equal distributions, larger means
    more divergent. Words missing from v2 are charged against LOG_EPS.
    """

    scoring_type = KL
    norm_type = "L1"

    def score(self, v1, v2):
        v1, v2 = as_bow_vector(v1), as_bow_vector(v2)
        ids1, ids2 = v1.word_ids, v2.word_ids
        n1, n2 = len(ids1), len(ids2)
        i = j = 0
        score = 0.0

        while i < n1 and j < n2:
            vi = v1[ids1[i]]
            if ids1[i] == ids2[j]:
                wi = v2[ids2[j]]
                if vi != 0 and wi != 0:
                    score += vi * np.log(vi / wi)
                i += 1
                j += 1
            elif ids1[i] < ids2[j]:
                if vi != 0:
                    score += vi * (np.log(vi) - LOG_EPS)
                i += 1
            else:
                # v2 only words add nothing
                j = v2.lower_bound(ids1[i], j)

        # sum rest of items of v1
        for word_id in ids1[i:]:
            vi = v1[word_id]
            if vi != 0:
                score += vi * (np.log(vi) - LOG_EPS)

        return float(score)


class BhattacharyyaScoring(GeneralScoring):
    scoring_type = BHATTACHARYYA
    norm_type = "L1"

    def score(self, v1, v2):
        """Computes the Bhattacharyya similarity score."""
        v1, v2 = as_bow_vector(v1), as_bow_vector(v2)
        ids1, ids2 = v1.word_ids, v2.word_ids
        n1, n2 = len(ids1), len(ids2)
        i = j = 0
        score = 0.0

        while i < n1 and j < n2:
            if ids1[i] == ids2[j]:
                score += np.sqrt(v1[ids1[i]] * v2[ids2[j]])
                i += 1
                j += 1
            elif ids1[i] < ids2[j]:
                i = v1.lower_bound(ids2[j], i)
            else:
                j = v2.lower_bound(ids1[i], j)

        return float(score)


class DotProductScoring(GeneralScoring):
    scoring_type = DOT_PRODUCT

    def score(self, v1, v2):
        """Computes the dot product similarity score."""
        v1, v2 = as_bow_vector(v1), as_bow_vector(v2)
        ids1, ids2 = v1.word_ids, v2.word_ids
        n1, n2 = len(ids1), len(ids2)
        i = j = 0
        score = 0.0

        while i < n1 and j < n2:
            if ids1[i] == ids2[j]:
                score += v1[ids1[i]] * v2[ids2[j]]
                i += 1
                j += 1
            elif ids1[i] < ids2[j]:
                i = v1.lower_bound(ids2[j], i)
            else:
                j = v2.lower_bound(ids1[i], j)

        return float(score)


SCORING_CLASSES = {
    L1_NORM: L1Scoring,
    L2_NORM: L2Scoring,
    CHI_SQUARE: ChiSquareScoring,
    KL: KLScoring,
    BHATTACHARYYA: BhattacharyyaScoring,
    DOT_PRODUCT: DotProductScoring,
}


def create_scoring_object(scoring=L1_NORM, **options):
    """
    Creates the scoring object based on the scoring type.
    :param scoring: Scoring name ("L1_NORM", "L2_NORM", ...), its DBoW2 code (0-5)
                    or an already built scoring object.
    :param options: Constructor options, only L2_NORM takes any.
    :return: GeneralScoring instance.
    """
    if isinstance(scoring, GeneralScoring):
        return scoring

    if isinstance(scoring, (int, np.integer)) and not isinstance(scoring, bool):
        if not 0 <= scoring < len(SCORING_TYPES):
            raise ValueError(f"Unknown scoring code: {scoring}")
        scoring = SCORING_TYPES[scoring]

    if not isinstance(scoring, str) or scoring.upper() not in SCORING_CLASSES:
        raise ValueError(f"Unknown scoring type: {scoring!r}. Use one of {', '.join(SCORING_TYPES)}.")

    scoring = scoring.upper()
    if scoring != L2_NORM and options:
        raise ValueError(f"{scoring} scoring takes no options, got {sorted(options)}")

    scoring_object = SCORING_CLASSES[scoring](**options)
    logger.debug("Created scoring object %r", scoring_object)
    return scoring_object
