"""
Semantic Dimension Scorers - model-backed scoring with heuristic pre-pass

Flow per dimension:
1. Run the heuristic scorer (fast pre-pass, signals handed to the model)
2. One structured call to the language model with the dimension rubric
3. Validate and backfill the result against the essay and the pre-pass

Results are non-deterministic across runs; callers should rely on shape,
not values.
"""

import re
from dataclasses import replace
from typing import Any, Dict, List, Optional

from ..config import Settings, get_settings
from ..errors import AnalyzerFailure, MalformedModelOutput
from ..logging_helper import get_logger
from ..models import DimensionScore, QualityTier, TierProgression
from ..routing import OPENING_HOOK, PromptType, hook_essay_type
from .heuristic import quality_label_for, score_heuristic
from .rubrics import RUBRICS, format_rubric

log = get_logger(__name__)

SEMANTIC_DIMENSIONS = tuple(RUBRICS)

FALLBACK_CONFIDENCE = 0.5

SYSTEM_INSTRUCTION = (
    "You are an experienced college admissions reader evaluating one dimension "
    "of a personal insight essay. Be specific, quote the essay exactly, and "
    "respond ONLY with valid JSON (no markdown, no commentary)."
)

SEMANTIC_PROMPT = """Evaluate this essay on a single dimension.

{rubric}

HEURISTIC PRE-PASS (pattern signals; treat as hints, not verdicts):
- Pattern score: {heuristic_score}/10 ({heuristic_label})
- Matched evidence: {heuristic_evidence}
- Detected weaknesses: {heuristic_weaknesses}{extras_hint}

ESSAY:
\"\"\"
{essay}
\"\"\"

Rules:
- evidence_quotes must be copied word-for-word from the essay
- quick_wins must be concrete edits the student can make today
- score uses the tier ranges above (decimals allowed)

Respond ONLY with valid JSON in this exact format:
{{
  "score": <0-10>,
  "quality_label": "<one of: {labels}>",
  "tier_evaluation": {{
    "current_tier": "<tier name>",
    "next_tier": "<tier name or max_tier>",
    "how_to_advance": "<one specific step to reach the next tier>"
  }},
  "reasoning": {{
{reasoning_fields}
  }},
  "evidence_quotes": ["<exact quote>", "..."],
  "strengths": ["<strength>", "..."],
  "weaknesses": ["<weakness>", "..."],
  "quick_wins": ["<edit>", "..."],
  "confidence": <0-1>{extras_schema}
}}
"""


def build_semantic_prompt(dimension: str, text: str, prepass: DimensionScore, essay_type: str = '') -> str:
    """Fill the evaluation prompt for one dimension"""
    rubric = RUBRICS[dimension]

    extras_hint = ''
    extras_schema = ''
    for name, values in rubric['extras'].items():
        detected = prepass.details.get(name)
        extras_hint += f"\n- Pattern {name}: {detected}"
        extras_schema += f',\n  "{name}": "<one of: {", ".join(values)}>"'

    reasoning_fields = ',\n'.join(
        f'    "{name}": "<analysis>"' for name in rubric['reasoning_fields']
    )

    return SEMANTIC_PROMPT.format(
        rubric=format_rubric(dimension, essay_type),
        heuristic_score=prepass.score,
        heuristic_label=prepass.quality_label,
        heuristic_evidence='; '.join(prepass.evidence[:3]) if prepass.evidence else 'None detected',
        heuristic_weaknesses='; '.join(prepass.weaknesses[:3]) if prepass.weaknesses else 'None detected',
        extras_hint=extras_hint,
        essay=text,
        labels=', '.join(rubric['quality_labels']),
        reasoning_fields=reasoning_fields,
        extras_schema=extras_schema,
    )


# ==================== VALIDATION & BACKFILL ====================

def _normalize(text: str) -> str:
    text = text.replace('“', '"').replace('”', '"').replace('’', "'").replace('‘', "'")
    return re.sub(r'\s+', ' ', text).strip().lower()


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _string(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ''


def _clamped_float(value: Any, low: float, high: float) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number:  # NaN
        return None
    return min(high, max(low, number))


def validate_semantic_result(
    dimension: str,
    result: Dict[str, Any],
    essay_text: str,
    prepass: DimensionScore,
) -> DimensionScore:
    """
    Turn a raw structured response into a complete DimensionScore.

    Missing or malformed fields get safe defaults (zero score, empty lists,
    empty strings). Quotes that do not appear in the essay are dropped and
    closed-set extras outside their set fall back to the pre-pass value.
    """
    rubric = RUBRICS[dimension]
    corrections = []

    score = _clamped_float(result.get('score'), 0.0, 10.0)
    if score is None:
        corrections.append(f"score {result.get('score')!r} unusable, defaulting to 0.0")
        score = 0.0
    score = round(score, 2)

    quality_label = _string(result.get('quality_label'))
    if quality_label not in rubric['quality_labels']:
        fixed = quality_label_for(dimension, score)
        if quality_label:
            corrections.append(f"quality_label '{quality_label}' not recognised, using '{fixed}'")
        quality_label = fixed

    tier = result.get('tier_evaluation')
    tier = tier if isinstance(tier, dict) else {}
    progression = TierProgression(
        current_tier=_string(tier.get('current_tier')),
        next_tier=_string(tier.get('next_tier')),
        how_to_advance=_string(tier.get('how_to_advance') or tier.get('tier_reasoning')),
    )

    reasoning = result.get('reasoning')
    reasoning = {
        str(key): value.strip()
        for key, value in (reasoning.items() if isinstance(reasoning, dict) else [])
        if isinstance(value, str)
    }

    essay_normalized = _normalize(essay_text)
    quotes = []
    dropped = 0
    for quote in _string_list(result.get('evidence_quotes')):
        if _normalize(quote.strip('"“”')) in essay_normalized:
            quotes.append(quote)
        else:
            dropped += 1
    if dropped:
        corrections.append(f"dropped {dropped} evidence quote(s) not found in the essay")

    confidence = _clamped_float(result.get('confidence'), 0.0, 1.0)
    if confidence is None:
        confidence = 0.0

    details = dict(prepass.details)
    details['heuristic_score'] = prepass.score
    for name, values in rubric['extras'].items():
        value = _string(result.get(name))
        if value in values:
            details[name] = value
        elif name in prepass.details:
            corrections.append(f"{name} '{value}' outside {list(values)}, keeping pattern value '{prepass.details[name]}'")
    details['quality_label'] = quality_label

    for correction in corrections:
        log.warning(f"  ⚠ {dimension}: {correction}")

    return DimensionScore(
        dimension=dimension,
        score=score,
        quality_tier=QualityTier.from_score(score),
        quality_label=quality_label,
        evidence=quotes or list(prepass.evidence),
        strengths=_string_list(result.get('strengths')),
        weaknesses=_string_list(result.get('weaknesses')),
        quick_wins=_string_list(result.get('quick_wins')),
        details=details,
        source='semantic',
        reasoning=reasoning,
        evidence_quotes=quotes,
        progression=progression,
        confidence=round(confidence, 2),
    )


# ==================== SCORING ====================

async def score_semantic(
    dimension: str,
    text: str,
    client,
    *,
    settings: Optional[Settings] = None,
    prompt_type: Optional[PromptType] = None,
    fallback: Optional[bool] = None,
) -> DimensionScore:
    """
    Score one dimension with the language model.

    Raises AnalyzerFailure when the call fails, unless heuristic fallback is
    enabled (explicitly or through settings), in which case the pre-pass is
    returned tagged 'heuristic_fallback'.
    """
    if dimension not in RUBRICS:
        raise ValueError(f"No semantic rubric for dimension '{dimension}'")

    settings = settings or get_settings()
    prepass = score_heuristic(dimension, text)
    essay_type = hook_essay_type(prompt_type) if dimension == OPENING_HOOK else ''
    prompt = build_semantic_prompt(dimension, text, prepass, essay_type)

    try:
        result = await client.generate(
            prompt,
            system_instruction=SYSTEM_INSTRUCTION,
            temperature=settings.analyzer_temperature,
            max_output_tokens=settings.analyzer_max_tokens,
            structured_output=True,
        )
        if not isinstance(result, dict):
            raise MalformedModelOutput("Structured call did not return an object", raw=str(result))
    except Exception as e:
        use_fallback = settings.heuristic_fallback if fallback is None else fallback
        if use_fallback:
            log.warning(f"  ⚠ {dimension}: model call failed ({e}), using pattern score")
            return replace(prepass, source='heuristic_fallback', confidence=FALLBACK_CONFIDENCE)
        raise AnalyzerFailure(dimension, e) from e

    return validate_semantic_result(dimension, result, text, prepass)


class SemanticScorer:
    """Semantic scorer bound to one dimension and one client"""

    def __init__(self, dimension: str, client, settings: Optional[Settings] = None,
                 prompt_type: Optional[PromptType] = None):
        if dimension not in RUBRICS:
            raise ValueError(f"No semantic rubric for dimension '{dimension}'")
        self.dimension = dimension
        self.client = client
        self.settings = settings
        self.prompt_type = prompt_type

    async def __call__(self, text: str) -> DimensionScore:
        return await score_semantic(
            self.dimension,
            text,
            self.client,
            settings=self.settings,
            prompt_type=self.prompt_type,
        )
