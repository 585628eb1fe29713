"""
Focus Recommender - map a diagnostic report to ordered revision foci

Rules are independent and evaluated in a fixed order; each tags its own
priority. A rule whose input dimension is missing or failed does not fire.
The final list is stably sorted by priority, so equal priorities keep rule
order.
"""

from typing import Callable, List, Optional

from .logging_helper import get_logger
from .models import DiagnosticReport, FocusArea, RecommendedFocus
from .routing import NARRATIVE_ARC, OPENING_HOOK, THEMATIC_COHERENCE, VOICE

log = get_logger(__name__)

HOOK_THRESHOLD = 7.0
VOICE_THRESHOLD = 5.0
COHERENCE_THRESHOLD = 6.5
PRIMARY_MEAN_THRESHOLD = 6.0

WEAK_CLIMAX = ('weak', 'summary', 'absent')
GENERIC_VOICE_LABELS = ('essay_speak', 'ai_generated')


def _hook_rule(report: DiagnosticReport) -> Optional[RecommendedFocus]:
    score = report.score_of(OPENING_HOOK)
    if score is None or score >= HOOK_THRESHOLD:
        return None
    return RecommendedFocus(
        focus_area=FocusArea.HOOK,
        reason=f"Opening hook scores {score}/10; the first lines do not earn attention",
        strategy='Open in medias res or with a paradox: a line of dialogue, an action, '
                 'or a concrete sensory detail in under 40 words',
        priority=1,
    )


def _pivot_rule(report: DiagnosticReport) -> Optional[RecommendedFocus]:
    climax = report.detail_of(NARRATIVE_ARC, 'climax_quality')
    if climax not in WEAK_CLIMAX:
        return None
    return RecommendedFocus(
        focus_area=FocusArea.PIVOT_MOMENT,
        reason=f"Climax quality is '{climax}'; the turning point is told, not shown",
        strategy='Rewrite the turning point as a scene in real time with dialogue, '
                 'action and one sensory detail',
        priority=2,
    )


def _voice_rule(report: DiagnosticReport) -> Optional[RecommendedFocus]:
    voice = report.score_for(VOICE)
    if voice is None or voice.score >= VOICE_THRESHOLD:
        return None

    generic = voice.quality_label in GENERIC_VOICE_LABELS
    if generic:
        strategy = ('Pivot the content: keep the background, but build the essay around a '
                    'different, specific moment only this writer could tell')
    else:
        strategy = 'Rewrite for voice: strip stock phrasing and let the writer\'s natural cadence through'
    return RecommendedFocus(
        focus_area=FocusArea.FULL_REWRITE,
        reason=f"Voice scores {voice.score}/10 ({voice.quality_label})",
        strategy=strategy,
        priority=1,
        content_pivot_suggested=generic,
    )


def _reflection_rule(report: DiagnosticReport) -> Optional[RecommendedFocus]:
    score = report.score_of(THEMATIC_COHERENCE)
    if score is None or score >= COHERENCE_THRESHOLD:
        return None
    return RecommendedFocus(
        focus_area=FocusArea.REFLECTION,
        reason=f"Thematic coherence scores {score}/10; events are not tied to one insight",
        strategy='Rewrite the reflection to name a deeper, specific insight that connects '
                 'the opening image to the ending',
        priority=3,
    )


def _growth_rule(report: DiagnosticReport) -> Optional[RecommendedFocus]:
    mean = report.primary_mean()
    if mean is None or mean >= PRIMARY_MEAN_THRESHOLD:
        return None
    return RecommendedFocus(
        focus_area=FocusArea.GROWTH_DEVELOPMENT,
        reason=f"Prompt-specific dimensions average {mean:.1f}/10",
        strategy='Show the messy middle: setbacks, wrong turns and what changed in your behavior',
        priority=3,
    )


RULES: List[Callable[[DiagnosticReport], Optional[RecommendedFocus]]] = [
    _hook_rule,
    _pivot_rule,
    _voice_rule,
    _reflection_rule,
    _growth_rule,
]


def recommend_focus(report: DiagnosticReport) -> List[RecommendedFocus]:
    """Ordered revision foci for a report (priority 1 first)"""
    recommendations = [rec for rec in (rule(report) for rule in RULES) if rec is not None]
    recommendations.sort(key=lambda rec: rec.priority)

    if recommendations:
        log.info(f"✓ Recommended foci: {', '.join(r.focus_area.value for r in recommendations)}")
    else:
        log.info("✓ No revision focus triggered")
    return recommendations
