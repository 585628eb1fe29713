"""
Essay Diagnostic Package v1.0

Multi-dimensional diagnostics for personal insight essays.

Pipeline:
- Heuristic and semantic dimension scorers (15 dimensions)
- Prompt-category routing and weight profiles
- Concurrent orchestration into a DiagnosticReport
- Holistic cross-reference against the applicant profile
- Revision focus recommendations and generation prompts

Usage:
    from essay_diagnostic import EssayOrchestrator, recommend_focus

    orchestrator = EssayOrchestrator()
    report = orchestrator.analyze_sync(essay_text, "piq5_challenge")

    print(report.metadata.weighted_score)
    for focus in recommend_focus(report):
        print(focus.priority, focus.focus_area.value, focus.strategy)
"""

from .config import Settings, get_settings
from .errors import (
    EssayDiagnosticError,
    AnalyzerFailure,
    HolisticFailure,
    MalformedModelOutput,
    ConfigurationGap,
)
from .models import (
    QualityTier,
    DimensionScore,
    ScorerError,
    DiagnosticReport,
    HolisticAnalysis,
    FocusArea,
    RecommendedFocus,
    StyleVariant,
    GlobalContext,
    GenerationRequest,
    GenerationPrompt,
    StudentProfile,
)
from .routing import PromptType, route, UNIVERSAL_DIMENSIONS, ALL_DIMENSIONS
from .weights import WEIGHT_PROFILES, get_weight_profile, weighted_score
from .scorers import score_heuristic, score_semantic
from .llm_client import LLMClient
from .orchestrator import EssayOrchestrator, analyze_essay
from .holistic import analyze_holistic, global_context_from
from .recommender import recommend_focus
from .prompt_builder import build_generation_prompt, generate_revision

__version__ = '1.0.0'

__all__ = [
    'Settings',
    'get_settings',
    'EssayDiagnosticError',
    'AnalyzerFailure',
    'HolisticFailure',
    'MalformedModelOutput',
    'ConfigurationGap',
    'QualityTier',
    'DimensionScore',
    'ScorerError',
    'DiagnosticReport',
    'HolisticAnalysis',
    'FocusArea',
    'RecommendedFocus',
    'StyleVariant',
    'GlobalContext',
    'GenerationRequest',
    'GenerationPrompt',
    'StudentProfile',
    'PromptType',
    'route',
    'UNIVERSAL_DIMENSIONS',
    'ALL_DIMENSIONS',
    'WEIGHT_PROFILES',
    'get_weight_profile',
    'weighted_score',
    'score_heuristic',
    'score_semantic',
    'LLMClient',
    'EssayOrchestrator',
    'analyze_essay',
    'analyze_holistic',
    'global_context_from',
    'recommend_focus',
    'build_generation_prompt',
    'generate_revision',
]
