"""pyBowScore - similarity scores between sparse bag-of-words vectors."""

from .BowVector import BowVector, WORD_VALUE_TYPE, as_bow_vector
from .ScoringObject import (
    LOG_EPS,
    L1_NORM,
    L2_NORM,
    CHI_SQUARE,
    KL,
    BHATTACHARYYA,
    DOT_PRODUCT,
    SCORING_TYPES,
    GeneralScoring,
    L1Scoring,
    L2Scoring,
    ChiSquareScoring,
    KLScoring,
    BhattacharyyaScoring,
    DotProductScoring,
    create_scoring_object,
)
from .Settings import load_settings, scoring_from_settings

__all__ = [
    "BowVector",
    "WORD_VALUE_TYPE",
    "as_bow_vector",
    "LOG_EPS",
    "L1_NORM",
    "L2_NORM",
    "CHI_SQUARE",
    "KL",
    "BHATTACHARYYA",
    "DOT_PRODUCT",
    "SCORING_TYPES",
    "GeneralScoring",
    "L1Scoring",
    "L2Scoring",
    "ChiSquareScoring",
    "KLScoring",
    "BhattacharyyaScoring",
    "DotProductScoring",
    "create_scoring_object",
    "load_settings",
    "scoring_from_settings",
]
