"""
Dimension scorers

- heuristic: deterministic pattern scoring for all fifteen dimensions
- semantic: model-backed scoring for the dimensions that need judgment
"""

from .heuristic import HEURISTIC_SCORERS, score_heuristic, agency_ratio
from .semantic import SEMANTIC_DIMENSIONS, SemanticScorer, score_semantic, validate_semantic_result

__all__ = [
    'HEURISTIC_SCORERS',
    'score_heuristic',
    'agency_ratio',
    'SEMANTIC_DIMENSIONS',
    'SemanticScorer',
    'score_semantic',
    'validate_semantic_result',
]
