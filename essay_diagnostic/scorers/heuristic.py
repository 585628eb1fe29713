"""
Heuristic Dimension Scorers - deterministic, rule-based scoring

Every scorer is a pure function: essay text -> DimensionScore. Scores start
from a baseline below the midpoint and move only on detected evidence.
These scorers never raise; they are the pipeline's reliability anchor and
the pre-pass for the semantic scorers.
"""

import re
import statistics
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..models import DimensionScore, QualityTier
from ..routing import (
    OPENING_HOOK, VOICE, CRAFT, SPECIFICITY, NARRATIVE_ARC, THEMATIC_COHERENCE,
    VULNERABILITY, INITIATIVE_LEADERSHIP, ROLE_CLARITY, COMMUNITY_IMPACT,
    INTELLECTUAL_VITALITY, IDENTITY, PERSONAL_GROWTH, CONTEXT_CIRCUMSTANCES,
    FIT_TRAJECTORY,
)
from .taxonomies import (
    DIMENSION_TAXONOMIES, HOOK_TYPES, HOOK_MODIFIERS, BOLD_STATEMENT_SCORE,
    NO_HOOK_PENALTY, MIN_WORDS, MAX_EVIDENCE, AI_TELLS, DIALOGUE, SENSORY_DETAIL,
    TURNING_POINT, SUMMARY_TELLING, FIRST_PERSON_SINGULAR, FIRST_PERSON_PLURAL,
)

HOOK_TYPE_VALUES = (
    'dialogue', 'in_medias_res', 'question', 'sensory_scene',
    'bold_statement', 'generic_statement', 'none',
)
CLIMAX_QUALITY_VALUES = ('vivid', 'scene', 'summary', 'weak', 'absent')

CLIMAX_ADJUSTMENTS = {
    'vivid': 1.5,
    'scene': 0.8,
    'summary': 0.0,
    'weak': -0.5,
    'absent': 0.0,  # already penalised through the missing turning point
}

AGENCY_RATIO = {
    'high': 0.8,
    'low': 0.5,
    'bonus': 4.0,
    'penalty': -2.5,
}

SENTENCE_VARIETY = {
    'min_sentences': 3,
    'varied': 0.5,  # coefficient of variation of sentence length
    'monotone': 0.25,
    'bonus': 1.0,
    'penalty': -0.5,
}

AI_GENERATED_THRESHOLD = 3


# ==================== TEXT HELPERS ====================

def _split_sentences(text: str) -> List[str]:
    return [s.strip() for s in re.split(r'(?<=[.!?])\s+|\n+', text) if s.strip()]


def _word_count(text: str) -> int:
    return len(text.split())


def _snippet(text: str, match: re.Match) -> str:
    """Sentence surrounding a match, trimmed for display"""
    start = max(text.rfind(c, 0, match.start()) for c in '.!?\n') + 1
    ends = [i for i in (text.find(c, match.end()) for c in '.!?\n') if i != -1]
    end = min(ends) + 1 if ends else len(text)
    snippet = text[start:end].strip()
    if len(snippet) > 160:
        snippet = snippet[:157] + '...'
    return snippet


def _find_matches(patterns: List[str], text: str, case_sensitive: bool = False) -> Tuple[int, List[str]]:
    """Count every match of every pattern and collect the surrounding snippets"""
    flags = 0 if case_sensitive else re.IGNORECASE
    count = 0
    snippets = []
    for pattern in patterns:
        for match in re.finditer(pattern, text, flags):
            count += 1
            snippets.append(_snippet(text, match))
    return count, snippets


def _step_delta(count: int, steps: List[Tuple[int, float]]) -> float:
    """Highest tier reached by the match count"""
    delta = 0.0
    for min_count, step in steps:
        if count >= min_count:
            delta = step
    return delta


def _sentence_variety(sentences: List[str]) -> Optional[float]:
    lengths = [_word_count(s) for s in sentences]
    if len(lengths) < SENTENCE_VARIETY['min_sentences']:
        return None
    mean = statistics.mean(lengths)
    if mean == 0:
        return None
    return statistics.pstdev(lengths) / mean


def quality_label_for(dimension: str, score: float) -> str:
    """Dimension-specific named level for a score"""
    labels = DIMENSION_TAXONOMIES[dimension]['labels']
    for threshold, label in labels:
        if score >= threshold:
            return label
    return labels[-1][1]


# ==================== SCORING ENGINE ====================

@dataclass
class _Tally:
    """Running score and feedback for one dimension"""
    dimension: str
    score: float
    evidence: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    quick_wins: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)
    signal_counts: Dict[str, int] = field(default_factory=dict)

    def adjust(self, delta: float, strength: str = '', weakness: str = '', quick_win: str = ''):
        self.score += delta
        if delta > 0 and strength:
            self.strengths.append(strength)
        if delta < 0:
            if weakness:
                self.weaknesses.append(weakness)
            if quick_win:
                self.quick_wins.append(quick_win)

    def add_evidence(self, snippets: List[str]):
        for snippet in snippets:
            if snippet and snippet not in self.evidence:
                self.evidence.append(snippet)


def _apply_signals(tally: _Tally, text: str):
    """Run every taxonomy signal of the dimension against the text"""
    signals = DIMENSION_TAXONOMIES[tally.dimension]['signals']

    for name, signal in signals.items():
        count, snippets = _find_matches(signal['patterns'], text, signal.get('case_sensitive', False))
        tally.signal_counts[name] = count

        if count == 0:
            if 'missing' in signal:
                tally.adjust(
                    signal['missing'],
                    weakness=signal.get('weakness', ''),
                    quick_win=signal.get('quick_win', ''),
                )
            continue

        delta = _step_delta(count, signal['steps'])
        if delta > 0:
            tally.add_evidence(snippets)
        tally.adjust(
            delta,
            strength=signal.get('strength', ''),
            weakness=signal.get('weakness', ''),
            quick_win=signal.get('quick_win', ''),
        )


def _finish(tally: _Tally) -> DimensionScore:
    score = round(min(10.0, max(0.0, tally.score)), 2)
    details = dict(tally.details)
    details.setdefault('quality_label', quality_label_for(tally.dimension, score))
    details['signals'] = dict(tally.signal_counts)

    return DimensionScore(
        dimension=tally.dimension,
        score=score,
        quality_tier=QualityTier.from_score(score),
        quality_label=details['quality_label'],
        evidence=tally.evidence[:MAX_EVIDENCE],
        strengths=tally.strengths,
        weaknesses=tally.weaknesses,
        quick_wins=tally.quick_wins,
        details=details,
    )


def _too_short(dimension: str, details: Optional[Dict[str, Any]] = None) -> DimensionScore:
    """Baseline result for empty or near-empty input"""
    taxonomy = DIMENSION_TAXONOMIES[dimension]
    label = taxonomy['labels'][-1][1]
    result_details = dict(details or {})
    result_details['quality_label'] = label
    return DimensionScore(
        dimension=dimension,
        score=taxonomy['baseline'],
        quality_tier=QualityTier.ABSENT_WEAK,
        quality_label=label,
        weaknesses=[f"Essay is too short to assess (fewer than {MIN_WORDS} words)"],
        quick_wins=['Write a full draft before requesting diagnostics'],
        details=result_details,
    )


def _score_with_taxonomy(dimension: str, text: str) -> DimensionScore:
    text = text or ''
    if _word_count(text) < MIN_WORDS:
        return _too_short(dimension)

    tally = _Tally(dimension=dimension, score=DIMENSION_TAXONOMIES[dimension]['baseline'])
    _apply_signals(tally, text)
    return _finish(tally)


def _apply_sentence_variety(tally: _Tally, text: str):
    variety = _sentence_variety(_split_sentences(text))
    tally.details['sentence_variety'] = round(variety, 2) if variety is not None else None
    if variety is None:
        return
    if variety >= SENTENCE_VARIETY['varied']:
        tally.adjust(SENTENCE_VARIETY['bonus'], strength='Sentence lengths vary, giving the prose rhythm')
    elif variety < SENTENCE_VARIETY['monotone']:
        tally.adjust(
            SENTENCE_VARIETY['penalty'],
            weakness='Sentences share the same length and rhythm',
            quick_win='Follow a long sentence with a very short one',
        )


# ==================== UNIVERSAL DIMENSIONS ====================

def _classify_hook(first_sentence: str) -> Tuple[str, Dict]:
    """Priority-ordered classification of the opening sentence"""
    for hook_type, family in HOOK_TYPES:
        for pattern in family['patterns']:
            if re.search(pattern, first_sentence, re.IGNORECASE):
                return hook_type, family
    if _word_count(first_sentence) <= HOOK_MODIFIERS['short_opening']['max_words']:
        return 'bold_statement', {
            'score': BOLD_STATEMENT_SCORE,
            'strength': 'Opens with a short declarative statement',
        }
    return 'none', {
        'score': NO_HOOK_PENALTY,
        'weakness': 'No recognizable hook technique in the opening sentence',
    }


def score_opening_hook(text: str) -> DimensionScore:
    text = text or ''
    if _word_count(text) < MIN_WORDS:
        return _too_short(OPENING_HOOK, {'hook_type': 'none'})

    sentences = _split_sentences(text)
    first = sentences[0]
    opening = ' '.join(sentences[:2])

    tally = _Tally(dimension=OPENING_HOOK, score=DIMENSION_TAXONOMIES[OPENING_HOOK]['baseline'])
    hook_type, family = _classify_hook(first)
    tally.details['hook_type'] = hook_type
    tally.add_evidence([first if len(first) <= 160 else first[:157] + '...'])
    tally.adjust(
        family['score'],
        strength=family.get('strength', ''),
        weakness=family.get('weakness', ''),
        quick_win='Open in the middle of a moment: a line of dialogue, an action or a sensory detail',
    )

    first_words = _word_count(first)
    if first_words <= HOOK_MODIFIERS['short_opening']['max_words']:
        tally.adjust(HOOK_MODIFIERS['short_opening']['delta'], strength=HOOK_MODIFIERS['short_opening']['strength'])
    elif first_words >= HOOK_MODIFIERS['long_opening']['min_words']:
        tally.adjust(
            HOOK_MODIFIERS['long_opening']['delta'],
            weakness=HOOK_MODIFIERS['long_opening']['weakness'],
            quick_win='Cut the first sentence to under fifteen words',
        )

    concrete, _ = _find_matches(HOOK_MODIFIERS['concrete_opening']['patterns'], opening)
    tally.signal_counts['concrete_opening'] = concrete
    if concrete:
        tally.adjust(HOOK_MODIFIERS['concrete_opening']['delta'], strength=HOOK_MODIFIERS['concrete_opening']['strength'])

    return _finish(tally)


def score_voice(text: str) -> DimensionScore:
    text = text or ''
    if _word_count(text) < MIN_WORDS:
        return _too_short(VOICE)

    tally = _Tally(dimension=VOICE, score=DIMENSION_TAXONOMIES[VOICE]['baseline'])
    _apply_signals(tally, text)
    _apply_sentence_variety(tally, text)

    ai_tells, _ = _find_matches(AI_TELLS, text)
    if ai_tells >= AI_GENERATED_THRESHOLD:
        tally.details['quality_label'] = 'ai_generated'

    return _finish(tally)


def score_craft(text: str) -> DimensionScore:
    text = text or ''
    if _word_count(text) < MIN_WORDS:
        return _too_short(CRAFT)

    tally = _Tally(dimension=CRAFT, score=DIMENSION_TAXONOMIES[CRAFT]['baseline'])
    _apply_signals(tally, text)
    _apply_sentence_variety(tally, text)
    return _finish(tally)


def score_specificity(text: str) -> DimensionScore:
    return _score_with_taxonomy(SPECIFICITY, text)


def _climax_quality(text: str) -> str:
    """How the turning point is rendered: vivid > scene > summary > weak > absent"""
    turning, _ = _find_matches(TURNING_POINT, text)
    dialogue, _ = _find_matches(DIALOGUE, text)
    sensory, _ = _find_matches(SENSORY_DETAIL, text)
    summary, _ = _find_matches(SUMMARY_TELLING, text)

    if turning and dialogue and sensory:
        return 'vivid'
    if turning and (dialogue or sensory):
        return 'scene'
    if turning:
        return 'summary'
    if summary:
        return 'weak'
    return 'absent'


def score_narrative_arc(text: str) -> DimensionScore:
    text = text or ''
    if _word_count(text) < MIN_WORDS:
        return _too_short(NARRATIVE_ARC, {'climax_quality': 'absent'})

    tally = _Tally(dimension=NARRATIVE_ARC, score=DIMENSION_TAXONOMIES[NARRATIVE_ARC]['baseline'])
    _apply_signals(tally, text)

    climax = _climax_quality(text)
    tally.details['climax_quality'] = climax
    if climax in ('vivid', 'scene'):
        tally.adjust(CLIMAX_ADJUSTMENTS[climax], strength='The climax is dramatized as a scene')
    elif climax in ('summary', 'weak'):
        tally.adjust(CLIMAX_ADJUSTMENTS[climax])
        tally.weaknesses.append('The climax is summarized rather than shown')
        tally.quick_wins.append('Rewrite the turning point as a scene with dialogue and sensory detail')

    return _finish(tally)


def score_thematic_coherence(text: str) -> DimensionScore:
    return _score_with_taxonomy(THEMATIC_COHERENCE, text)


def score_vulnerability(text: str) -> DimensionScore:
    return _score_with_taxonomy(VULNERABILITY, text)


# ==================== DIMENSION-SPECIFIC ====================

def score_initiative_leadership(text: str) -> DimensionScore:
    return _score_with_taxonomy(INITIATIVE_LEADERSHIP, text)


def agency_ratio(text: str) -> Tuple[float, int, int]:
    """Share of first-person pronouns that are singular: (ratio, singular, plural)"""
    singular, _ = _find_matches([FIRST_PERSON_SINGULAR], text or '')
    plural, _ = _find_matches([FIRST_PERSON_PLURAL], text or '')
    total = singular + plural
    if total == 0:
        return 0.0, 0, 0
    return round(singular / total, 2), singular, plural


def score_role_clarity(text: str) -> DimensionScore:
    text = text or ''
    if _word_count(text) < MIN_WORDS:
        return _too_short(ROLE_CLARITY, {'agency_ratio': 0.0})

    tally = _Tally(dimension=ROLE_CLARITY, score=DIMENSION_TAXONOMIES[ROLE_CLARITY]['baseline'])
    _apply_signals(tally, text)

    ratio, singular, plural = agency_ratio(text)
    tally.details['agency_ratio'] = ratio
    tally.details['pronouns'] = {'singular': singular, 'plural': plural}
    if singular + plural:
        if ratio >= AGENCY_RATIO['high']:
            tally.adjust(AGENCY_RATIO['bonus'], strength=f"Individual agency is clear ({ratio:.0%} first-person singular)")
        elif ratio < AGENCY_RATIO['low']:
            tally.adjust(
                AGENCY_RATIO['penalty'],
                weakness=f"Team credit dominates ({ratio:.0%} first-person singular)",
                quick_win='Separate what "we" did from what "I" did in at least two sentences',
            )

    return _finish(tally)


def score_community_impact(text: str) -> DimensionScore:
    return _score_with_taxonomy(COMMUNITY_IMPACT, text)


def score_intellectual_vitality(text: str) -> DimensionScore:
    return _score_with_taxonomy(INTELLECTUAL_VITALITY, text)


def score_identity(text: str) -> DimensionScore:
    return _score_with_taxonomy(IDENTITY, text)


def score_personal_growth(text: str) -> DimensionScore:
    return _score_with_taxonomy(PERSONAL_GROWTH, text)


def score_context_circumstances(text: str) -> DimensionScore:
    return _score_with_taxonomy(CONTEXT_CIRCUMSTANCES, text)


def score_fit_trajectory(text: str) -> DimensionScore:
    return _score_with_taxonomy(FIT_TRAJECTORY, text)


# ==================== REGISTRY ====================

HEURISTIC_SCORERS: Dict[str, Callable[[str], DimensionScore]] = {
    OPENING_HOOK: score_opening_hook,
    VOICE: score_voice,
    CRAFT: score_craft,
    SPECIFICITY: score_specificity,
    NARRATIVE_ARC: score_narrative_arc,
    THEMATIC_COHERENCE: score_thematic_coherence,
    VULNERABILITY: score_vulnerability,
    INITIATIVE_LEADERSHIP: score_initiative_leadership,
    ROLE_CLARITY: score_role_clarity,
    COMMUNITY_IMPACT: score_community_impact,
    INTELLECTUAL_VITALITY: score_intellectual_vitality,
    IDENTITY: score_identity,
    PERSONAL_GROWTH: score_personal_growth,
    CONTEXT_CIRCUMSTANCES: score_context_circumstances,
    FIT_TRAJECTORY: score_fit_trajectory,
}


def score_heuristic(dimension: str, text: str) -> DimensionScore:
    """Run the rule-based scorer registered for a dimension"""
    try:
        scorer = HEURISTIC_SCORERS[dimension]
    except KeyError:
        raise ValueError(f"No heuristic scorer for dimension '{dimension}'")
    return scorer(text)
