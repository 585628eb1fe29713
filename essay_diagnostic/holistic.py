"""
Holistic Analyzer - cross-reference one essay against the applicant profile

One consolidated model call returns:
1. Consistency check (essay claims vs. profile facts)
2. Strategic fit (stated intent vs. evidenced activity)
3. Narrative-quality candidates (spine, spike, lift, blind spots) + motifs
4. Archetype candidates (1-2)
5. Risk flags

Every sub-object is validated and backfilled. Any failure returns the
neutral analysis (degraded=True) instead of raising.
"""

import json
from typing import Any, Dict, List, Optional

from .config import Settings, get_settings
from .errors import HolisticFailure
from .logging_helper import get_logger
from .models import (
    ArchetypeCandidate, ConsistencyCheck, Contradiction, DiagnosticReport,
    EvidenceSpan, GlobalContext, HolisticAnalysis, InsightCandidate,
    NarrativeQuality, RichText, RiskFlag, RiskFlags, StrategicFit, StudentProfile,
)
from .routing import NARRATIVE_ARC, OPENING_HOOK, THEMATIC_COHERENCE, VOICE

log = get_logger(__name__)

CONSISTENCY_STATUSES = ('consistent', 'inconsistent', 'gap_detected')
FIT_STATUSES = ('aligned', 'stretch', 'misaligned')
SEVERITIES = ('critical', 'warning', 'minor')
RISK_TYPES = ('tone', 'integrity', 'maturity', 'topic')
RISK_SEVERITIES = ('high', 'medium', 'low')
INSIGHT_CATEGORIES = ('spine', 'spike', 'lift', 'blind_spots')
MAX_ARCHETYPES = 2
MAX_MOTIFS = 5


SYSTEM_INSTRUCTION = """You are a senior admissions officer at a highly selective university.
You read the essay alongside the student's whole file (grades, activities, awards,
circumstances). Your job is to VALIDATE the application package and provide
STRATEGIC INSIGHTS.

# TASKS

1. VALIDATE (consistency check)
   - Cross-reference essay claims with the activity list and academics.
   - Flag discrepancies (e.g. essay says "founder", list says "member").
   - Tag each contradiction critical | warning | minor, quote the essay,
     state the conflicting profile fact and suggest a fix.

2. FIT (strategic fit)
   - Score 0-10 how well stated intent (intended major, goals) is backed by
     evidenced activity. Name the gaps.

3. SPINE - the thread connecting the essay to the rest of the file.
   Give 2 ranked candidates, each a full paragraph.

4. SPIKE - the strongest differentiator. Give 2 ranked candidates.

5. MOTIFS - 3-5 recurring sensory details or images that appear (or could
   appear) across the essay, e.g. "burnt sugar", "muddy cleats".

6. LIFT - the critical gap to address. Give 2 actionable candidates.

7. BLIND SPOTS - what the student may be signalling without realising it.
   Give 2 candidates.

8. ARCHETYPE - 1-2 positioning archetypes (e.g. "Civic-Tech Builder") with
   narrative, score and tags.

9. RISK - tone, integrity, maturity or topic concerns, severity-tagged.

# RICH TEXT
Every candidate text is an array of plain strings and evidence objects:
  ["Your file is anchored by ",
   {"text": "entrepreneurial grit", "evidence": ["Launched a repair shop in 10th grade", "$5k revenue"]},
   ", unusual for this major."]
Every candidate needs at least one evidence object drawn from the profile or essay.

# OUTPUT
Respond ONLY with valid JSON in this exact format:
{
  "consistency_check": {
    "status": "consistent" | "inconsistent" | "gap_detected",
    "score": <0-10>,
    "contradictions": [
      {"severity": "critical" | "warning" | "minor", "issue": "...",
       "essay_quote": "...", "profile_fact": "...", "fix_suggestion": "..."}
    ]
  },
  "strategic_fit": {
    "status": "aligned" | "stretch" | "misaligned",
    "score": <0-10>,
    "major_alignment_analysis": "...",
    "gaps": ["..."]
  },
  "narrative_quality": {
    "coherence_score": <0-100>,
    "recurring_motifs": ["..."],
    "spine": [{"id": "spine_1", "text": [<rich text>], "score": <0-10>, "reasoning": "..."}],
    "spike": [{"id": "spike_1", "text": [<rich text>], "score": <0-10>, "reasoning": "..."}],
    "lift": [{"id": "lift_1", "text": [<rich text>], "score": <0-10>, "reasoning": "..."}],
    "blind_spots": [{"id": "blind_spot_1", "text": [<rich text>], "score": <0-10>, "reasoning": "..."}]
  },
  "archetype_candidates": [
    {"id": "archetype_1", "archetype": "...", "narrative": [<rich text>],
     "score": <0-10>, "reasoning": "...", "tags": ["..."]}
  ],
  "risk_flags": {
    "has_red_flags": true | false,
    "flags": [{"type": "tone" | "integrity" | "maturity" | "topic",
               "description": "...", "severity": "high" | "medium" | "low"}]
  }
}"""

USER_PROMPT = """STUDENT PROFILE:
{profile}

ESSAY TEXT:
\"\"\"
{essay}
\"\"\"

DIAGNOSTIC SUMMARY (for context):
{summary}

TASK:
Perform the holistic analysis. Generate ranked candidates for spine, spike,
lift and blind spots, and 1-2 archetypes. Use the rich text format with
specific evidence. Return JSON only."""


def summarize_report(report: DiagnosticReport) -> str:
    """Summary diagnostic fields handed to the holistic call"""
    lines = [f"- Prompt type: {report.metadata.prompt_type}"]

    if report.metadata.weighted_score is not None:
        lines.append(f"- Weighted score: {report.metadata.weighted_score}/10")

    voice = report.score_for(VOICE)
    if voice:
        lines.append(f"- Voice: {voice.score}/10 ({voice.quality_tier.label}, {voice.quality_label})")

    hook = report.score_for(OPENING_HOOK)
    if hook:
        lines.append(f"- Opening hook: {hook.details.get('hook_type', 'N/A')} ({hook.score}/10)")

    climax = report.detail_of(NARRATIVE_ARC, 'climax_quality')
    if climax:
        lines.append(f"- Climax quality: {climax}")

    coherence = report.score_of(THEMATIC_COHERENCE)
    if coherence is not None:
        lines.append(f"- Thematic coherence: {coherence}/10")

    if report.metadata.failed_dimensions:
        lines.append(f"- Not assessed: {', '.join(report.metadata.failed_dimensions)}")

    return '\n'.join(lines)


def build_holistic_prompt(essay_text: str, profile: StudentProfile, report: DiagnosticReport) -> str:
    return USER_PROMPT.format(
        profile=json.dumps(profile.to_dict(), indent=2),
        essay=essay_text,
        summary=summarize_report(report),
    )


# ==================== PARSING ====================

def _string(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ''


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _score(value: Any, high: float) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number:
        return 0.0
    return round(min(high, max(0.0, number)), 2)


def _member(value: Any, allowed, default: str) -> str:
    value = _string(value).lower()
    return value if value in allowed else default


def parse_rich_text(value: Any) -> RichText:
    """Keep strings and {text, evidence|details} objects; drop anything else"""
    if isinstance(value, str):
        return [value] if value else []
    if not isinstance(value, list):
        return []

    segments: RichText = []
    for segment in value:
        if isinstance(segment, str):
            if segment:
                segments.append(segment)
        elif isinstance(segment, dict) and isinstance(segment.get('text'), str):
            evidence = _string_list(segment.get('evidence', segment.get('details')))
            segments.append(EvidenceSpan(text=segment['text'], evidence=evidence))
    return segments


def _parse_candidates(items: Any, prefix: str) -> List[InsightCandidate]:
    if not isinstance(items, list):
        return []
    candidates = []
    for i, item in enumerate(items, 1):
        if not isinstance(item, dict):
            continue
        rich_text = parse_rich_text(item.get('text', item.get('rich_text')))
        if not rich_text:
            continue
        candidates.append(InsightCandidate(
            id=_string(item.get('id')) or f"{prefix}_{i}",
            rich_text=rich_text,
            score=_score(item.get('score'), 10.0),
            reasoning=_string(item.get('reasoning')),
        ))
    # stable: ties keep model order
    return sorted(candidates, key=lambda c: -c.score)


def _parse_consistency(data: Any) -> ConsistencyCheck:
    if not isinstance(data, dict):
        return ConsistencyCheck(status='not_assessed', score=0.0)

    contradictions = []
    raw_contradictions = data.get('contradictions')
    for item in raw_contradictions if isinstance(raw_contradictions, list) else []:
        if not isinstance(item, dict) or not _string(item.get('issue')):
            continue
        contradictions.append(Contradiction(
            severity=_member(item.get('severity'), SEVERITIES, 'minor'),
            issue=_string(item.get('issue')),
            essay_quote=_string(item.get('essay_quote', item.get('essay_evidence'))),
            profile_fact=_string(item.get('profile_fact', item.get('profile_evidence'))),
            fix_suggestion=_string(item.get('fix_suggestion', item.get('fix_recommendation'))),
        ))

    return ConsistencyCheck(
        status=_member(data.get('status'), CONSISTENCY_STATUSES, 'not_assessed'),
        score=_score(data.get('score'), 10.0),
        contradictions=contradictions,
    )


def _parse_strategic_fit(data: Any) -> StrategicFit:
    if not isinstance(data, dict):
        return StrategicFit(status='not_assessed', score=0.0, major_alignment_analysis='')
    return StrategicFit(
        status=_member(data.get('status'), FIT_STATUSES, 'not_assessed'),
        score=_score(data.get('score'), 10.0),
        major_alignment_analysis=_string(data.get('major_alignment_analysis')),
        gaps=_string_list(data.get('gaps')),
    )


def _parse_narrative_quality(data: Any) -> NarrativeQuality:
    if not isinstance(data, dict):
        return NarrativeQuality(coherence_score=0.0)
    return NarrativeQuality(
        coherence_score=_score(data.get('coherence_score'), 100.0),
        recurring_motifs=_string_list(data.get('recurring_motifs'))[:MAX_MOTIFS],
        spine=_parse_candidates(data.get('spine'), 'spine'),
        spike=_parse_candidates(data.get('spike'), 'spike'),
        lift=_parse_candidates(data.get('lift'), 'lift'),
        blind_spots=_parse_candidates(data.get('blind_spots'), 'blind_spot'),
    )


def _parse_archetypes(data: Any) -> List[ArchetypeCandidate]:
    if isinstance(data, dict):  # {"candidates": [...]}
        data = data.get('candidates')
    if not isinstance(data, list):
        return []

    archetypes = []
    for i, item in enumerate(data, 1):
        if not isinstance(item, dict) or not _string(item.get('archetype')):
            continue
        archetypes.append(ArchetypeCandidate(
            id=_string(item.get('id')) or f"archetype_{i}",
            archetype=_string(item.get('archetype')),
            narrative=parse_rich_text(item.get('narrative')),
            score=_score(item.get('score'), 10.0),
            reasoning=_string(item.get('reasoning')),
            tags=_string_list(item.get('tags')),
        ))
    return sorted(archetypes, key=lambda a: -a.score)[:MAX_ARCHETYPES]


def _parse_risk_flags(data: Any) -> RiskFlags:
    if not isinstance(data, dict):
        return RiskFlags(has_red_flags=False)

    flags = []
    raw_flags = data.get('flags')
    for item in raw_flags if isinstance(raw_flags, list) else []:
        if not isinstance(item, dict) or not _string(item.get('description')):
            continue
        flags.append(RiskFlag(
            type=_member(item.get('type'), RISK_TYPES, 'topic'),
            description=_string(item.get('description')),
            severity=_member(item.get('severity'), RISK_SEVERITIES, 'low'),
        ))

    has_red_flags = data.get('has_red_flags') is True or bool(flags)
    return RiskFlags(has_red_flags=has_red_flags, flags=flags)


def parse_holistic_result(result: Any) -> HolisticAnalysis:
    """
    Validate a raw structured response into a complete HolisticAnalysis.

    Raises HolisticFailure when the response is not an object or carries
    none of the expected sections.
    """
    if not isinstance(result, dict):
        raise HolisticFailure("Holistic response is not a JSON object")

    sections = ('consistency_check', 'strategic_fit', 'narrative_quality',
                'archetype_candidates', 'brand_archetype', 'risk_flags', 'risk_analysis')
    if not any(key in result for key in sections):
        raise HolisticFailure(f"Holistic response has none of the expected sections: {sorted(result)[:10]}")

    archetypes = result.get('archetype_candidates', result.get('brand_archetype'))
    risks = result.get('risk_flags', result.get('risk_analysis'))

    return HolisticAnalysis(
        consistency_check=_parse_consistency(result.get('consistency_check')),
        strategic_fit=_parse_strategic_fit(result.get('strategic_fit')),
        narrative_quality=_parse_narrative_quality(result.get('narrative_quality')),
        archetype_candidates=_parse_archetypes(archetypes),
        risk_flags=_parse_risk_flags(risks),
    )


# ==================== ANALYSIS ====================

async def analyze_holistic(
    essay_text: str,
    profile: StudentProfile,
    report: DiagnosticReport,
    client,
    settings: Optional[Settings] = None,
) -> HolisticAnalysis:
    """
    Cross-reference the essay with the profile in one model call.

    Never raises: any failure returns HolisticAnalysis.neutral().
    """
    settings = settings or get_settings()
    log.info("Running holistic cross-reference analysis...")

    try:
        result = await client.generate(
            build_holistic_prompt(essay_text, profile, report),
            system_instruction=SYSTEM_INSTRUCTION,
            temperature=settings.holistic_temperature,
            max_output_tokens=settings.holistic_max_tokens,
            structured_output=True,
        )
        analysis = parse_holistic_result(result)
    except Exception as e:
        log.error(f"⚠ Holistic analysis failed: {e}")
        return HolisticAnalysis.neutral()

    log.info(
        f"✓ Holistic analysis: consistency {analysis.consistency_check.status}, "
        f"fit {analysis.strategic_fit.status}, "
        f"{len(analysis.archetype_candidates)} archetype(s)"
    )
    return analysis


def global_context_from(holistic: Optional[HolisticAnalysis]) -> GlobalContext:
    """Continuity constraints for revision prompts: top spine as theme, recurring motifs"""
    if holistic is None or holistic.degraded:
        return GlobalContext()

    narrative = holistic.narrative_quality
    theme = narrative.spine[0].plain_text() if narrative.spine else None
    return GlobalContext(
        theme=theme,
        recurring_motifs=list(narrative.recurring_motifs),
    )
