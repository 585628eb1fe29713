"""
Prompt-Type Router

Static lookup from prompt category to the scorer sets that run for it.
Universal dimensions run for every essay; primary and secondary sets depend
on the category. Unknown categories degrade to the universal set.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from .logging_helper import get_logger

log = get_logger(__name__)


# ==================== DIMENSIONS ====================

OPENING_HOOK = 'opening_hook'
VOICE = 'voice'
CRAFT = 'craft'
SPECIFICITY = 'specificity'
NARRATIVE_ARC = 'narrative_arc'
THEMATIC_COHERENCE = 'thematic_coherence'
VULNERABILITY = 'vulnerability'

INITIATIVE_LEADERSHIP = 'initiative_leadership'
ROLE_CLARITY = 'role_clarity'
COMMUNITY_IMPACT = 'community_impact'
INTELLECTUAL_VITALITY = 'intellectual_vitality'
IDENTITY = 'identity'
PERSONAL_GROWTH = 'personal_growth'
CONTEXT_CIRCUMSTANCES = 'context_circumstances'
FIT_TRAJECTORY = 'fit_trajectory'

UNIVERSAL_DIMENSIONS: Tuple[str, ...] = (
    VOICE,
    CRAFT,
    SPECIFICITY,
    NARRATIVE_ARC,
    THEMATIC_COHERENCE,
    OPENING_HOOK,
    VULNERABILITY,
)

SPECIFIC_DIMENSIONS: Tuple[str, ...] = (
    INITIATIVE_LEADERSHIP,
    ROLE_CLARITY,
    COMMUNITY_IMPACT,
    INTELLECTUAL_VITALITY,
    IDENTITY,
    PERSONAL_GROWTH,
    CONTEXT_CIRCUMSTANCES,
    FIT_TRAJECTORY,
)

ALL_DIMENSIONS: Tuple[str, ...] = UNIVERSAL_DIMENSIONS + SPECIFIC_DIMENSIONS


# ==================== PROMPT TYPES ====================

class PromptType(str, Enum):
    LEADERSHIP = 'piq1_leadership'
    CREATIVE_EXPRESSION = 'piq2_creative'
    TALENT = 'piq3_talent'
    EDUCATIONAL_OPPORTUNITY = 'piq4_educational'
    CHALLENGE = 'piq5_challenge'
    ACADEMIC_PASSION = 'piq6_academic'
    COMMUNITY_CONTRIBUTION = 'piq7_community'
    OPEN_ENDED = 'piq8_open_ended'

    @classmethod
    def parse(cls, value: Union["PromptType", str, None]) -> Optional["PromptType"]:
        """
        Resolve a prompt category from its value ("piq1_leadership"), member
        name ("LEADERSHIP") or short name ("leadership", "creative-expression").

        Returns None for anything outside the taxonomy.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip()
        for member in cls:
            if key == member.value:
                return member
        normalized = key.lower().replace('-', '_').replace(' ', '_')
        for member in cls:
            if normalized == member.name.lower():
                return member
        return _SHORT_NAMES.get(normalized)


_SHORT_NAMES: Dict[str, PromptType] = {
    'leadership': PromptType.LEADERSHIP,
    'creative': PromptType.CREATIVE_EXPRESSION,
    'creative_expression': PromptType.CREATIVE_EXPRESSION,
    'talent': PromptType.TALENT,
    'educational': PromptType.EDUCATIONAL_OPPORTUNITY,
    'educational_opportunity': PromptType.EDUCATIONAL_OPPORTUNITY,
    'challenge': PromptType.CHALLENGE,
    'academic': PromptType.ACADEMIC_PASSION,
    'academic_passion': PromptType.ACADEMIC_PASSION,
    'community': PromptType.COMMUNITY_CONTRIBUTION,
    'community_contribution': PromptType.COMMUNITY_CONTRIBUTION,
    'open_ended': PromptType.OPEN_ENDED,
    'open': PromptType.OPEN_ENDED,
}


# ==================== ROUTING TABLE ====================

# prompt type -> (primary, secondary)
ROUTING_TABLE: Dict[PromptType, Tuple[Tuple[str, ...], Tuple[str, ...]]] = {
    PromptType.LEADERSHIP: (
        (INITIATIVE_LEADERSHIP, ROLE_CLARITY),
        (COMMUNITY_IMPACT,),
    ),
    PromptType.CREATIVE_EXPRESSION: (
        (INTELLECTUAL_VITALITY, IDENTITY),
        (),
    ),
    PromptType.TALENT: (
        (IDENTITY, PERSONAL_GROWTH),
        (INTELLECTUAL_VITALITY,),
    ),
    PromptType.EDUCATIONAL_OPPORTUNITY: (
        (CONTEXT_CIRCUMSTANCES, PERSONAL_GROWTH),
        (),
    ),
    PromptType.CHALLENGE: (
        (PERSONAL_GROWTH, CONTEXT_CIRCUMSTANCES),
        (),
    ),
    PromptType.ACADEMIC_PASSION: (
        (FIT_TRAJECTORY, INTELLECTUAL_VITALITY),
        (INITIATIVE_LEADERSHIP,),
    ),
    PromptType.COMMUNITY_CONTRIBUTION: (
        (COMMUNITY_IMPACT, ROLE_CLARITY),
        (IDENTITY,),
    ),
    PromptType.OPEN_ENDED: (
        (IDENTITY,),
        (),
    ),
}

# Essay type the opening-hook rubric calibrates against
HOOK_ESSAY_TYPES: Dict[PromptType, str] = {
    PromptType.LEADERSHIP: 'leadership',
    PromptType.CREATIVE_EXPRESSION: 'creative',
    PromptType.TALENT: 'creative',
    PromptType.EDUCATIONAL_OPPORTUNITY: 'challenge',
    PromptType.CHALLENGE: 'challenge',
    PromptType.ACADEMIC_PASSION: 'academic',
    PromptType.COMMUNITY_CONTRIBUTION: 'leadership',
    PromptType.OPEN_ENDED: 'creative',
}


@dataclass(frozen=True)
class Route:
    """Scorer sets chosen for one prompt category"""
    prompt_type: Optional[PromptType]
    universal: Tuple[str, ...]
    primary: Tuple[str, ...]
    secondary: Tuple[str, ...]
    fallback: bool = False

    @property
    def dimensions(self) -> Tuple[str, ...]:
        return self.universal + self.primary + self.secondary


def route(prompt_type: Union[PromptType, str, None]) -> Route:
    """Return the universal/primary/secondary scorer sets for a prompt category"""

    resolved = PromptType.parse(prompt_type)
    if resolved is None:
        log.warning(f"⚠ Unknown prompt type: '{prompt_type}'. Running only universal analyzers.")
        return Route(
            prompt_type=None,
            universal=UNIVERSAL_DIMENSIONS,
            primary=(),
            secondary=(),
            fallback=True,
        )

    primary, secondary = ROUTING_TABLE[resolved]
    return Route(
        prompt_type=resolved,
        universal=UNIVERSAL_DIMENSIONS,
        primary=primary,
        secondary=secondary,
    )


def hook_essay_type(prompt_type: Union[PromptType, str, None]) -> str:
    resolved = PromptType.parse(prompt_type)
    if resolved is None:
        return 'leadership'
    return HOOK_ESSAY_TYPES[resolved]
