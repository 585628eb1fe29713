"""
Data model for the essay diagnostic pipeline

Contains:
- Dimension results (DimensionScore, ScorerError)
- The per-request DiagnosticReport
- Holistic cross-reference types (rich text, candidates, risk flags)
- Revision focus and generation request types
- The read-only StudentProfile snapshot
"""

from dataclasses import dataclass, field, asdict
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Union


# ==================== DIMENSION RESULTS ====================

class QualityTier(IntEnum):
    """Ordinal quality level shared by every dimension"""
    ABSENT_WEAK = 0
    DEVELOPING = 1
    COMPETENT = 2
    STRONG = 3
    EXCEPTIONAL = 4

    @classmethod
    def from_score(cls, score: float) -> "QualityTier":
        if score >= 8.5:
            return cls.EXCEPTIONAL
        if score >= 7.0:
            return cls.STRONG
        if score >= 5.0:
            return cls.COMPETENT
        if score >= 3.5:
            return cls.DEVELOPING
        return cls.ABSENT_WEAK

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class TierProgression:
    """Where the essay sits on a dimension's ladder and how to climb it"""
    current_tier: str
    next_tier: str
    how_to_advance: str


@dataclass(frozen=True)
class DimensionScore:
    """Result of one scorer invocation"""

    dimension: str
    score: float  # 0-10
    quality_tier: QualityTier
    quality_label: str  # dimension-specific level name, e.g. "essay_speak"
    evidence: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    quick_wins: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)
    source: str = "heuristic"  # heuristic | semantic | heuristic_fallback

    # Semantic-only fields (empty for heuristic results)
    reasoning: Dict[str, str] = field(default_factory=dict)
    evidence_quotes: List[str] = field(default_factory=list)
    progression: Optional[TierProgression] = None
    confidence: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['quality_tier'] = self.quality_tier.label
        return data


@dataclass(frozen=True)
class ScorerError:
    """Inline placeholder for a dimension whose scorer failed"""
    error: str
    details: str

    def to_dict(self) -> Dict[str, Any]:
        return {'error': self.error, 'details': self.details}


DimensionResult = Union[DimensionScore, ScorerError]


# ==================== HOLISTIC ANALYSIS ====================

@dataclass
class EvidenceSpan:
    """Highlighted phrase backed by supporting evidence strings"""
    text: str
    evidence: List[str] = field(default_factory=list)


RichText = List[Union[str, EvidenceSpan]]


def rich_text_plain(segments: RichText) -> str:
    """Flatten rich text to a plain string"""
    return ''.join(seg if isinstance(seg, str) else seg.text for seg in segments)


def rich_text_evidence(segments: RichText) -> List[str]:
    """All evidence strings attached to the highlighted spans"""
    evidence = []
    for seg in segments:
        if isinstance(seg, EvidenceSpan):
            evidence.extend(seg.evidence)
    return evidence


@dataclass
class InsightCandidate:
    """One ranked alternative insight (spine, spike, lift or blind spot)"""
    id: str
    rich_text: RichText
    score: float
    reasoning: str

    def plain_text(self) -> str:
        return rich_text_plain(self.rich_text)


@dataclass
class ArchetypeCandidate:
    id: str
    archetype: str
    narrative: RichText
    score: float
    reasoning: str
    tags: List[str] = field(default_factory=list)


@dataclass
class Contradiction:
    severity: str  # critical | warning | minor
    issue: str
    essay_quote: str
    profile_fact: str
    fix_suggestion: str


@dataclass
class ConsistencyCheck:
    status: str  # consistent | inconsistent | gap_detected | not_assessed
    score: float
    contradictions: List[Contradiction] = field(default_factory=list)


@dataclass
class StrategicFit:
    status: str  # aligned | stretch | misaligned | not_assessed
    score: float  # 0-10
    major_alignment_analysis: str
    gaps: List[str] = field(default_factory=list)


@dataclass
class NarrativeQuality:
    coherence_score: float  # 0-100
    recurring_motifs: List[str] = field(default_factory=list)
    spine: List[InsightCandidate] = field(default_factory=list)
    spike: List[InsightCandidate] = field(default_factory=list)
    lift: List[InsightCandidate] = field(default_factory=list)
    blind_spots: List[InsightCandidate] = field(default_factory=list)


@dataclass
class RiskFlag:
    type: str  # tone | integrity | maturity | topic
    description: str
    severity: str  # high | medium | low


@dataclass
class RiskFlags:
    has_red_flags: bool
    flags: List[RiskFlag] = field(default_factory=list)


@dataclass
class HolisticAnalysis:
    """Cross-reference of one essay against one applicant profile"""

    consistency_check: ConsistencyCheck
    strategic_fit: StrategicFit
    narrative_quality: NarrativeQuality
    archetype_candidates: List[ArchetypeCandidate]
    risk_flags: RiskFlags
    degraded: bool = False

    @classmethod
    def neutral(cls) -> "HolisticAnalysis":
        """Fully populated, meaningfully empty analysis used on failure"""
        return cls(
            consistency_check=ConsistencyCheck(status='not_assessed', score=0.0),
            strategic_fit=StrategicFit(
                status='not_assessed', score=0.0, major_alignment_analysis=''
            ),
            narrative_quality=NarrativeQuality(coherence_score=0.0),
            archetype_candidates=[],
            risk_flags=RiskFlags(has_red_flags=False),
            degraded=True,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ==================== DIAGNOSTIC REPORT ====================

@dataclass
class ReportMetadata:
    prompt_type: str
    timestamp: str
    word_count: int
    duration_ms: int = 0
    weighted_score: Optional[float] = None
    failed_dimensions: List[str] = field(default_factory=list)
    routing_fallback: bool = False


@dataclass
class DiagnosticReport:
    """Aggregate of all dimension results for one analysis run"""

    universal_scores: Dict[str, DimensionResult]
    primary_dimensions: Dict[str, DimensionResult]
    secondary_dimensions: Dict[str, DimensionResult]
    metadata: ReportMetadata
    holistic_context: Optional[HolisticAnalysis] = None

    def all_results(self) -> Dict[str, DimensionResult]:
        merged = {}
        merged.update(self.secondary_dimensions)
        merged.update(self.primary_dimensions)
        merged.update(self.universal_scores)
        return merged

    def result_for(self, dimension: str) -> Optional[DimensionResult]:
        for group in (self.universal_scores, self.primary_dimensions, self.secondary_dimensions):
            if dimension in group:
                return group[dimension]
        return None

    def score_for(self, dimension: str) -> Optional[DimensionScore]:
        """Scored result for a dimension, or None when absent or failed"""
        result = self.result_for(dimension)
        return result if isinstance(result, DimensionScore) else None

    def score_of(self, dimension: str) -> Optional[float]:
        result = self.score_for(dimension)
        return result.score if result is not None else None

    def detail_of(self, dimension: str, key: str) -> Any:
        result = self.score_for(dimension)
        if result is None:
            return None
        return result.details.get(key)

    def primary_mean(self) -> Optional[float]:
        scores = [r.score for r in self.primary_dimensions.values() if isinstance(r, DimensionScore)]
        if not scores:
            return None
        return sum(scores) / len(scores)

    def to_dict(self) -> Dict[str, Any]:
        def _group(group):
            return {name: result.to_dict() for name, result in group.items()}

        return {
            'metadata': asdict(self.metadata),
            'universal_scores': _group(self.universal_scores),
            'primary_dimensions': _group(self.primary_dimensions),
            'secondary_dimensions': _group(self.secondary_dimensions),
            'holistic_context': self.holistic_context.to_dict() if self.holistic_context else None,
        }


# ==================== REVISION FOCUS & GENERATION ====================

class FocusArea(str, Enum):
    HOOK = 'hook'
    PIVOT_MOMENT = 'pivot_moment'
    GROWTH_DEVELOPMENT = 'growth_development'
    REFLECTION = 'reflection'
    FULL_REWRITE = 'full_rewrite'


@dataclass(frozen=True)
class RecommendedFocus:
    focus_area: FocusArea
    reason: str
    strategy: str
    priority: int  # 1 = highest
    content_pivot_suggested: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['focus_area'] = self.focus_area.value
        return data


class StyleVariant(str, Enum):
    JOURNALIST = 'journalist'
    PHILOSOPHER = 'philosopher'
    CINEMATOGRAPHER = 'cinematographer'
    NOVELIST = 'novelist'
    STANDARD = 'standard'


@dataclass
class GlobalContext:
    """Continuity constraints shared by every revised segment of one essay"""
    theme: Optional[str] = None
    recurring_motifs: List[str] = field(default_factory=list)
    ending_insight: Optional[str] = None


@dataclass
class GenerationRequest:
    original_text_excerpt: str
    focus_area: Union[FocusArea, str]
    diagnostic_context: Optional[DiagnosticReport] = None
    style_variant: Union[StyleVariant, str, None] = StyleVariant.STANDARD
    target_archetype: Optional[str] = None
    global_context: Optional[GlobalContext] = None
    content_pivot: Optional[str] = None
    specific_directive: Optional[str] = None


@dataclass(frozen=True)
class GenerationPrompt:
    system_instruction: str
    user_instruction: str


# ==================== STUDENT PROFILE ====================

@dataclass(frozen=True)
class Academics:
    gpa: Optional[float] = None
    gpa_trend: str = 'consistent'  # upward | consistent | downward | varied
    intended_major: str = ''
    course_rigor: str = 'average'
    test_scores: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Activity:
    name: str
    role: str
    category: str = 'other'
    hours_per_week: float = 0.0
    weeks_per_year: float = 0.0
    grades: List[int] = field(default_factory=list)
    description: str = ''
    achievements: List[str] = field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return self.hours_per_week * self.weeks_per_year * max(len(self.grades), 1)


@dataclass(frozen=True)
class Award:
    name: str
    level: str = 'school'  # international | national | state | regional | school
    year: str = ''


@dataclass(frozen=True)
class StudentProfile:
    """Read-only applicant snapshot supplied by the profile provider"""

    name: str = ''
    academics: Academics = field(default_factory=Academics)
    activities: List[Activity] = field(default_factory=list)
    awards: List[Award] = field(default_factory=list)
    circumstances: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StudentProfile":
        academics_data = data.get('academics') or {}
        gpa = academics_data.get('gpa')
        trend = academics_data.get('gpa_trend', 'consistent')
        if isinstance(gpa, dict):  # {"unweighted": 3.9, "trend": "upward"}
            trend = gpa.get('trend', trend)
            gpa = gpa.get('unweighted', gpa.get('weighted'))

        academics = Academics(
            gpa=float(gpa) if gpa is not None else None,
            gpa_trend=trend,
            intended_major=academics_data.get('intended_major', academics_data.get('intendedMajor', '')),
            course_rigor=academics_data.get('course_rigor', academics_data.get('courseRigor', 'average')),
            test_scores=dict(academics_data.get('test_scores', academics_data.get('testScores', {})) or {}),
        )

        activities = []
        for item in data.get('activities', []) or []:
            time_commitment = item.get('time_commitment') or item.get('timeCommitment') or {}
            activities.append(Activity(
                name=item.get('name', ''),
                role=item.get('role', ''),
                category=item.get('category', 'other'),
                hours_per_week=float(item.get('hours_per_week', time_commitment.get('hoursPerWeek', 0)) or 0),
                weeks_per_year=float(item.get('weeks_per_year', time_commitment.get('weeksPerYear', 0)) or 0),
                grades=list(item.get('grades', []) or []),
                description=item.get('description', ''),
                achievements=list(item.get('achievements', []) or []),
            ))

        awards = [
            Award(name=a.get('name', ''), level=a.get('level', 'school'), year=str(a.get('year', '')))
            for a in data.get('awards', []) or []
        ]

        identity = data.get('identity') or {}
        return cls(
            name=data.get('name', identity.get('name', '')),
            academics=academics,
            activities=activities,
            awards=awards,
            circumstances=list(data.get('circumstances', identity.get('circumstances', [])) or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
