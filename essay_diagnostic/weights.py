"""
Dimension Weights

Prompt-specific weight configuration for all fifteen dimensions across the
eight prompt categories. A dimension is visible for a category exactly when
the router runs it; hidden dimensions carry zero weight. Visible weights of
every profile sum to 1.0.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from .errors import ConfigurationGap
from .logging_helper import get_logger
from .models import DiagnosticReport, DimensionScore
from .routing import (
    ALL_DIMENSIONS, PromptType, ROUTING_TABLE, UNIVERSAL_DIMENSIONS,
    OPENING_HOOK, VOICE, CRAFT, SPECIFICITY, NARRATIVE_ARC, THEMATIC_COHERENCE,
    VULNERABILITY, INITIATIVE_LEADERSHIP, ROLE_CLARITY, COMMUNITY_IMPACT,
    INTELLECTUAL_VITALITY, IDENTITY, PERSONAL_GROWTH, CONTEXT_CIRCUMSTANCES,
    FIT_TRAJECTORY,
)

log = get_logger(__name__)

WEIGHT_TOLERANCE = 0.01


@dataclass(frozen=True)
class DimensionWeight:
    weight: float  # 0-1
    visible: bool
    emphasis: str  # high | medium | low


@dataclass(frozen=True)
class WeightProfile:
    prompt_type: PromptType
    display_name: str
    dimensions: Dict[str, DimensionWeight]

    @property
    def total_visible_weight(self) -> float:
        return sum(dw.weight for dw in self.dimensions.values() if dw.visible)

    def weight_of(self, dimension: str) -> float:
        config = self.dimensions.get(dimension)
        return config.weight if config and config.visible else 0.0


# ==================== PROFILE TABLE ====================

# (display name, {dimension: (weight, emphasis)}) - listed dimensions are visible
_PROFILE_DATA = {
    PromptType.LEADERSHIP: ('Leadership & Influence', {
        OPENING_HOOK: (0.08, 'medium'),
        VOICE: (0.08, 'medium'),
        CRAFT: (0.06, 'low'),
        SPECIFICITY: (0.10, 'medium'),
        NARRATIVE_ARC: (0.08, 'medium'),
        THEMATIC_COHERENCE: (0.08, 'medium'),
        VULNERABILITY: (0.08, 'medium'),
        INITIATIVE_LEADERSHIP: (0.18, 'high'),  # core to the prompt
        ROLE_CLARITY: (0.16, 'high'),  # "I" vs "we"
        COMMUNITY_IMPACT: (0.10, 'medium'),
    }),
    PromptType.CREATIVE_EXPRESSION: ('Creative Expression', {
        OPENING_HOOK: (0.12, 'high'),
        VOICE: (0.12, 'high'),
        CRAFT: (0.14, 'high'),
        SPECIFICITY: (0.10, 'medium'),
        NARRATIVE_ARC: (0.08, 'medium'),
        THEMATIC_COHERENCE: (0.08, 'medium'),
        VULNERABILITY: (0.08, 'medium'),
        INTELLECTUAL_VITALITY: (0.14, 'high'),
        IDENTITY: (0.14, 'high'),
    }),
    PromptType.TALENT: ('Talent or Skill', {
        OPENING_HOOK: (0.10, 'medium'),
        VOICE: (0.08, 'medium'),
        CRAFT: (0.07, 'medium'),
        SPECIFICITY: (0.13, 'high'),  # concrete evidence of the skill
        NARRATIVE_ARC: (0.08, 'medium'),
        THEMATIC_COHERENCE: (0.08, 'medium'),
        VULNERABILITY: (0.07, 'medium'),
        IDENTITY: (0.14, 'high'),
        PERSONAL_GROWTH: (0.15, 'high'),
        INTELLECTUAL_VITALITY: (0.10, 'medium'),
    }),
    PromptType.EDUCATIONAL_OPPORTUNITY: ('Educational Opportunity/Barrier', {
        OPENING_HOOK: (0.09, 'medium'),
        VOICE: (0.08, 'medium'),
        CRAFT: (0.06, 'low'),
        SPECIFICITY: (0.11, 'medium'),
        NARRATIVE_ARC: (0.10, 'medium'),
        THEMATIC_COHERENCE: (0.08, 'medium'),
        VULNERABILITY: (0.12, 'high'),
        CONTEXT_CIRCUMSTANCES: (0.20, 'high'),
        PERSONAL_GROWTH: (0.16, 'high'),
    }),
    PromptType.CHALLENGE: ('Significant Challenge', {
        OPENING_HOOK: (0.10, 'medium'),
        VOICE: (0.08, 'medium'),
        CRAFT: (0.05, 'low'),
        SPECIFICITY: (0.09, 'medium'),
        NARRATIVE_ARC: (0.12, 'high'),
        THEMATIC_COHERENCE: (0.07, 'medium'),
        VULNERABILITY: (0.14, 'high'),  # emotional honesty
        PERSONAL_GROWTH: (0.19, 'high'),
        CONTEXT_CIRCUMSTANCES: (0.16, 'high'),
    }),
    PromptType.ACADEMIC_PASSION: ('Academic Passion', {
        OPENING_HOOK: (0.08, 'medium'),
        VOICE: (0.07, 'medium'),
        CRAFT: (0.06, 'low'),
        SPECIFICITY: (0.12, 'high'),
        NARRATIVE_ARC: (0.06, 'low'),
        THEMATIC_COHERENCE: (0.08, 'medium'),
        VULNERABILITY: (0.06, 'low'),
        FIT_TRAJECTORY: (0.18, 'high'),  # connects to major/field
        INTELLECTUAL_VITALITY: (0.19, 'high'),
        INITIATIVE_LEADERSHIP: (0.10, 'medium'),
    }),
    PromptType.COMMUNITY_CONTRIBUTION: ('Community Contribution', {
        OPENING_HOOK: (0.08, 'medium'),
        VOICE: (0.07, 'medium'),
        CRAFT: (0.06, 'low'),
        SPECIFICITY: (0.12, 'high'),
        NARRATIVE_ARC: (0.07, 'low'),
        THEMATIC_COHERENCE: (0.07, 'medium'),
        VULNERABILITY: (0.07, 'low'),
        COMMUNITY_IMPACT: (0.20, 'high'),
        ROLE_CLARITY: (0.16, 'high'),
        IDENTITY: (0.10, 'medium'),
    }),
    PromptType.OPEN_ENDED: ('Open-Ended Distinction', {
        OPENING_HOOK: (0.12, 'medium'),
        VOICE: (0.12, 'medium'),
        CRAFT: (0.10, 'medium'),
        SPECIFICITY: (0.12, 'medium'),
        NARRATIVE_ARC: (0.10, 'medium'),
        THEMATIC_COHERENCE: (0.14, 'high'),
        VULNERABILITY: (0.12, 'medium'),
        IDENTITY: (0.18, 'high'),  # "who are you"
    }),
}


def _build_profiles() -> Dict[PromptType, WeightProfile]:
    profiles = {}
    for prompt_type, (display_name, visible) in _PROFILE_DATA.items():
        dimensions = {}
        for dimension in ALL_DIMENSIONS:
            if dimension in visible:
                weight, emphasis = visible[dimension]
                dimensions[dimension] = DimensionWeight(weight=weight, visible=True, emphasis=emphasis)
            else:
                dimensions[dimension] = DimensionWeight(weight=0.0, visible=False, emphasis='low')
        profiles[prompt_type] = WeightProfile(
            prompt_type=prompt_type,
            display_name=display_name,
            dimensions=dimensions,
        )
    return profiles


WEIGHT_PROFILES: Dict[PromptType, WeightProfile] = _build_profiles()


def validate_profiles(profiles: Optional[Dict[PromptType, WeightProfile]] = None) -> List[str]:
    """
    Check every profile against the routing table and the weight-sum rule.

    Returns a list of problems (empty when the configuration is sound).
    """
    profiles = WEIGHT_PROFILES if profiles is None else profiles
    problems = []

    for prompt_type in PromptType:
        profile = profiles.get(prompt_type)
        if profile is None:
            problems.append(f"{prompt_type.value}: no weight profile")
            continue

        total = profile.total_visible_weight
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            problems.append(f"{prompt_type.value}: visible weights sum to {total:.3f}, not 1.0")

        primary, secondary = ROUTING_TABLE[prompt_type]
        routed = set(UNIVERSAL_DIMENSIONS) | set(primary) | set(secondary)
        visible = {d for d, dw in profile.dimensions.items() if dw.visible}
        if routed != visible:
            problems.append(
                f"{prompt_type.value}: visible dimensions {sorted(visible)} "
                f"differ from routed dimensions {sorted(routed)}"
            )

    return problems


for _problem in validate_profiles():
    log.warning(f"⚠ {_problem}")


# ==================== HELPER FUNCTIONS ====================

def get_weight_profile(prompt_type: Union[PromptType, str]) -> WeightProfile:
    """Weight configuration for a prompt category (raises ConfigurationGap)"""
    resolved = PromptType.parse(prompt_type)
    if resolved is None or resolved not in WEIGHT_PROFILES:
        raise ConfigurationGap(prompt_type)
    return WEIGHT_PROFILES[resolved]


def get_dimension_weight(prompt_type: Union[PromptType, str], dimension: str) -> float:
    return get_weight_profile(prompt_type).weight_of(dimension)


def visible_dimensions(prompt_type: Union[PromptType, str]) -> List[str]:
    profile = get_weight_profile(prompt_type)
    return [d for d, dw in profile.dimensions.items() if dw.visible]


def high_emphasis_dimensions(prompt_type: Union[PromptType, str]) -> List[str]:
    profile = get_weight_profile(prompt_type)
    return [d for d, dw in profile.dimensions.items() if dw.visible and dw.emphasis == 'high']


def format_weight(weight: float) -> str:
    """Weight as a percentage string"""
    return f"{weight * 100:.0f}%"


def weighted_score(report: DiagnosticReport) -> Optional[float]:
    """
    Weighted 0-10 score over the visible dimensions that produced a score.

    Failed dimensions are dropped and the remaining weights renormalised.
    Returns None for unknown categories or when nothing was scored.
    """
    try:
        profile = get_weight_profile(report.metadata.prompt_type)
    except ConfigurationGap:
        return None

    total_weight = 0.0
    total = 0.0
    for dimension, result in report.all_results().items():
        if not isinstance(result, DimensionScore):
            continue
        weight = profile.weight_of(dimension)
        if weight <= 0:
            continue
        total += weight * result.score
        total_weight += weight

    if total_weight == 0:
        return None
    return round(total / total_weight, 2)
