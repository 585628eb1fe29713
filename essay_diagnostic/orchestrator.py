"""
Essay Orchestrator - fan-out/fan-in controller for one essay analysis

Coordinates:
- Routing (prompt category -> universal/primary/secondary dimensions)
- Concurrent scoring, one isolated branch per dimension
- Report assembly and weighted score
- Optional holistic pass once the report has resolved

The orchestrator always resolves with a best-effort report; a failing
scorer becomes an inline {error, details} placeholder in its slot.
"""

import asyncio
import inspect
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from .config import Settings, get_settings
from .errors import AnalyzerFailure
from .holistic import analyze_holistic
from .llm_client import LLMClient
from .logging_helper import get_logger
from .models import (
    DiagnosticReport, DimensionResult, DimensionScore, ReportMetadata,
    ScorerError, StudentProfile,
)
from .routing import PromptType, route
from .scorers.heuristic import HEURISTIC_SCORERS
from .scorers.semantic import SEMANTIC_DIMENSIONS, SemanticScorer
from .weights import weighted_score

log = get_logger(__name__)

ANALYSIS_FAILED = 'Analysis failed'

Scorer = Callable[[str], Union[DimensionScore, Awaitable[DimensionScore]]]


@dataclass
class BranchResult:
    """Outcome of one scorer branch, captured before the join"""
    dimension: str
    ok: bool
    value: Optional[DimensionScore] = None
    error: str = ''
    details: str = ''

    def to_result(self) -> DimensionResult:
        if self.ok:
            return self.value
        return ScorerError(error=self.error, details=self.details)


async def run_branch(dimension: str, scorer: Scorer, text: str) -> BranchResult:
    """Run one scorer, converting any exception into a failed BranchResult"""
    try:
        value = scorer(text)
        if inspect.isawaitable(value):
            value = await value
        if not isinstance(value, DimensionScore):
            raise TypeError(f"scorer returned {type(value).__name__}, expected DimensionScore")
    except Exception as e:
        cause = e.cause if isinstance(e, AnalyzerFailure) and e.cause is not None else e
        log.error(f"  ⚠ {dimension}: {cause}")
        return BranchResult(dimension=dimension, ok=False, error=ANALYSIS_FAILED, details=str(cause))
    return BranchResult(dimension=dimension, ok=True, value=value)


class EssayOrchestrator:
    """
    Main entry point for essay diagnostics

    Usage:
        orchestrator = EssayOrchestrator()
        report = orchestrator.analyze_sync(essay_text, "piq1_leadership")
        print(report.metadata.weighted_score)
        print(report.universal_scores["voice"].quality_label)
    """

    def __init__(
        self,
        client=None,
        settings: Optional[Settings] = None,
        use_api: bool = True,
        scorer_overrides: Optional[Dict[str, Scorer]] = None,
    ):
        self.settings = settings or get_settings()
        self.scorer_overrides = dict(scorer_overrides or {})

        if client is None and use_api and self.settings.api_key:
            client = LLMClient(self.settings)
        self.client = client
        self.use_api = use_api and client is not None

        if use_api and client is None:
            log.warning("⚠ ANTHROPIC_API_KEY not set - using rule-based scoring only")

    def scorer_for(self, dimension: str, prompt_type: Optional[PromptType] = None) -> Scorer:
        if dimension in self.scorer_overrides:
            return self.scorer_overrides[dimension]
        if self.use_api and dimension in SEMANTIC_DIMENSIONS:
            return SemanticScorer(dimension, self.client, self.settings, prompt_type)
        return HEURISTIC_SCORERS[dimension]

    async def close(self):
        """Release the model client's connection pool, if one was opened."""
        close = getattr(self.client, 'close', None)
        if close is not None:
            await close()

    async def analyze(
        self,
        text: Union[str, Dict[str, Any]],
        prompt_type: Union[PromptType, str, None],
        profile: Union[StudentProfile, Dict[str, Any], None] = None,
    ) -> DiagnosticReport:
        """
        Score every routed dimension concurrently and assemble the report.

        Args:
            text: Essay text (string) or dict with a 'text' key
            prompt_type: Prompt category (value, member name or short name)
            profile: Optional applicant profile; enables the holistic pass

        Returns:
            DiagnosticReport (never raises for scorer or holistic failures)
        """
        started = time.perf_counter()

        if isinstance(text, dict):
            text = text.get('text', '')
        text = text or ''
        word_count = len(text.split())

        routing = route(prompt_type)
        mode = 'semantic' if self.use_api else 'rule-based'
        log.info(
            f"Analyzing essay ({word_count} words) as "
            f"{routing.prompt_type.value if routing.prompt_type else prompt_type}: "
            f"{len(routing.dimensions)} dimensions, {mode}"
        )

        branches = [
            run_branch(dimension, self.scorer_for(dimension, routing.prompt_type), text)
            for dimension in routing.dimensions
        ]
        outcomes = await asyncio.gather(*branches)
        results = {outcome.dimension: outcome.to_result() for outcome in outcomes}

        report = DiagnosticReport(
            universal_scores={d: results[d] for d in routing.universal},
            primary_dimensions={d: results[d] for d in routing.primary},
            secondary_dimensions={d: results[d] for d in routing.secondary},
            metadata=ReportMetadata(
                prompt_type=routing.prompt_type.value if routing.prompt_type else str(prompt_type),
                timestamp=datetime.now(timezone.utc).isoformat(),
                word_count=word_count,
                failed_dimensions=[o.dimension for o in outcomes if not o.ok],
                routing_fallback=routing.fallback,
            ),
        )
        report.metadata.weighted_score = weighted_score(report)

        failed = len(report.metadata.failed_dimensions)
        log.info(f"✓ Scored {len(outcomes) - failed}/{len(outcomes)} dimensions")

        if profile is not None:
            await self._attach_holistic(report, text, profile)

        report.metadata.duration_ms = int((time.perf_counter() - started) * 1000)
        return report

    async def _attach_holistic(self, report: DiagnosticReport, text: str, profile):
        if self.client is None:
            log.info("Holistic analysis skipped (no model client)")
            return
        if isinstance(profile, dict):
            profile = StudentProfile.from_dict(profile)

        holistic = await analyze_holistic(text, profile, report, self.client, self.settings)
        if holistic.degraded:
            log.warning("⚠ Holistic context omitted from report")
            return
        report.holistic_context = holistic

    def analyze_sync(
        self,
        text: Union[str, Dict[str, Any]],
        prompt_type: Union[PromptType, str, None],
        profile: Union[StudentProfile, Dict[str, Any], None] = None,
    ) -> DiagnosticReport:
        return asyncio.run(self.analyze(text, prompt_type, profile))


async def analyze_essay(
    text: str,
    prompt_type: Union[PromptType, str, None],
    profile: Union[StudentProfile, Dict[str, Any], None] = None,
    client=None,
    settings: Optional[Settings] = None,
    use_api: bool = True,
) -> DiagnosticReport:
    """Convenience wrapper: one-off orchestrator for a single essay"""
    orchestrator = EssayOrchestrator(client=client, settings=settings, use_api=use_api)
    return await orchestrator.analyze(text, prompt_type, profile)
