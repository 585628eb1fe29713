"""
Test suite for the essay orchestrator

Tests:
1. Branch isolation (failing scorers become inline errors)
2. Rule-based and semantic scorer selection
3. Report shape per prompt category
4. Holistic pass attached or omitted
"""

import asyncio

from conftest import FailingHolisticClient, FakeLLMClient
from essay_diagnostic.models import DimensionScore, ScorerError
from essay_diagnostic.orchestrator import (
    ANALYSIS_FAILED, EssayOrchestrator, analyze_essay, run_branch,
)
from essay_diagnostic.routing import ROUTING_TABLE, UNIVERSAL_DIMENSIONS, PromptType
from essay_diagnostic.scorers.heuristic import score_voice


def _boom(text):
    raise RuntimeError('scorer exploded')


async def _async_boom(text):
    raise ConnectionError('socket closed')


def _not_a_score(text):
    return {'score': 5}


class TestRunBranch:
    """Each branch resolves to a BranchResult, never an exception"""

    def test_sync_scorer(self, strong_essay):
        outcome = asyncio.run(run_branch('voice', score_voice, strong_essay))
        assert outcome.ok
        assert isinstance(outcome.to_result(), DimensionScore)

    def test_raising_scorer(self, strong_essay):
        outcome = asyncio.run(run_branch('voice', _boom, strong_essay))
        assert not outcome.ok
        assert outcome.to_result() == ScorerError(error=ANALYSIS_FAILED, details='scorer exploded')

    def test_raising_async_scorer(self, strong_essay):
        outcome = asyncio.run(run_branch('craft', _async_boom, strong_essay))
        assert not outcome.ok
        assert outcome.details == 'socket closed'

    def test_wrong_return_type(self, strong_essay):
        outcome = asyncio.run(run_branch('craft', _not_a_score, strong_essay))
        assert not outcome.ok
        assert 'expected DimensionScore' in outcome.details


class TestRuleBasedAnalysis:
    """Heuristic-only runs (no model client)"""

    def test_failing_scorer_isolated(self, strong_essay, settings):
        orchestrator = EssayOrchestrator(settings=settings, use_api=False, scorer_overrides={'voice': _boom})
        report = asyncio.run(orchestrator.analyze(strong_essay, 'piq1_leadership'))

        assert report.universal_scores['voice'] == ScorerError(error='Analysis failed', details='scorer exploded')
        assert report.metadata.failed_dimensions == ['voice']
        for dimension, result in report.all_results().items():
            if dimension != 'voice':
                assert isinstance(result, DimensionScore)
        assert report.metadata.weighted_score is not None

    def test_all_scorers_fail(self, strong_essay, settings):
        overrides = {d: _boom for d in UNIVERSAL_DIMENSIONS}
        orchestrator = EssayOrchestrator(settings=settings, use_api=False, scorer_overrides=overrides)
        report = asyncio.run(orchestrator.analyze(strong_essay, 'piq9_poetry'))
        assert all(isinstance(r, ScorerError) for r in report.universal_scores.values())
        assert report.metadata.weighted_score is None

    def test_heuristic_sources(self, strong_essay, settings):
        orchestrator = EssayOrchestrator(settings=settings, use_api=False)
        report = asyncio.run(orchestrator.analyze(strong_essay, 'piq5_challenge'))
        for result in report.all_results().values():
            assert result.source == 'heuristic'

    def test_missing_key_degrades_to_rule_based(self, strong_essay, settings):
        orchestrator = EssayOrchestrator(settings=settings, use_api=True)
        assert orchestrator.client is None
        assert not orchestrator.use_api
        report = orchestrator.analyze_sync(strong_essay, 'challenge')
        assert report.universal_scores['voice'].source == 'heuristic'

    def test_report_groups_match_routing(self, strong_essay, settings):
        orchestrator = EssayOrchestrator(settings=settings, use_api=False)
        for prompt_type in PromptType:
            report = asyncio.run(orchestrator.analyze(strong_essay, prompt_type))
            primary, secondary = ROUTING_TABLE[prompt_type]
            assert tuple(report.universal_scores) == UNIVERSAL_DIMENSIONS
            assert tuple(report.primary_dimensions) == primary
            assert tuple(report.secondary_dimensions) == secondary
            assert report.metadata.prompt_type == prompt_type.value
            assert not report.metadata.routing_fallback

    def test_unknown_prompt_type(self, strong_essay, settings):
        orchestrator = EssayOrchestrator(settings=settings, use_api=False)
        report = asyncio.run(orchestrator.analyze(strong_essay, 'piq9_poetry'))
        assert report.metadata.routing_fallback
        assert report.metadata.prompt_type == 'piq9_poetry'
        assert report.primary_dimensions == {}
        assert report.secondary_dimensions == {}
        assert tuple(report.universal_scores) == UNIVERSAL_DIMENSIONS
        assert report.metadata.weighted_score is None

    def test_dict_input_and_metadata(self, strong_essay, settings):
        orchestrator = EssayOrchestrator(settings=settings, use_api=False)
        report = asyncio.run(orchestrator.analyze({'text': strong_essay}, 'piq3_talent'))
        assert report.metadata.word_count == len(strong_essay.split())
        assert report.metadata.duration_ms >= 0
        assert report.metadata.timestamp

    def test_empty_essay(self, settings):
        orchestrator = EssayOrchestrator(settings=settings, use_api=False)
        report = asyncio.run(orchestrator.analyze('', 'piq1_leadership'))
        assert report.metadata.failed_dimensions == []
        assert all(0.0 <= r.score <= 10.0 for r in report.all_results().values())

    def test_profile_without_client_skips_holistic(self, strong_essay, settings, profile_data):
        orchestrator = EssayOrchestrator(settings=settings, use_api=False)
        report = asyncio.run(orchestrator.analyze(strong_essay, 'piq5_challenge', profile_data))
        assert report.holistic_context is None

    def test_to_dict(self, strong_essay, settings):
        orchestrator = EssayOrchestrator(settings=settings, use_api=False, scorer_overrides={'craft': _boom})
        data = asyncio.run(orchestrator.analyze(strong_essay, 'piq1_leadership')).to_dict()
        assert data['universal_scores']['craft'] == {'error': 'Analysis failed', 'details': 'scorer exploded'}
        assert data['universal_scores']['voice']['quality_tier'] in (
            'absent_weak', 'developing', 'competent', 'strong', 'exceptional')
        assert data['holistic_context'] is None


class TestSemanticAnalysis:
    """Runs with a (fake) model client"""

    def test_semantic_and_heuristic_mix(self, strong_essay, fake_client, settings):
        orchestrator = EssayOrchestrator(client=fake_client, settings=settings)
        report = asyncio.run(orchestrator.analyze(strong_essay, 'piq1_leadership'))

        assert report.universal_scores['voice'].source == 'semantic'
        assert report.universal_scores['specificity'].source == 'heuristic'
        assert report.primary_dimensions['role_clarity'].source == 'heuristic'
        assert report.secondary_dimensions['community_impact'].source == 'semantic'
        assert report.metadata.failed_dimensions == []

    def test_model_failure_is_inline(self, strong_essay, settings):
        client = FakeLLMClient(error=TimeoutError('model timed out'))
        orchestrator = EssayOrchestrator(client=client, settings=settings)
        report = asyncio.run(orchestrator.analyze(strong_essay, 'piq1_leadership'))

        voice = report.universal_scores['voice']
        assert voice == ScorerError(error='Analysis failed', details='model timed out')
        assert isinstance(report.universal_scores['specificity'], DimensionScore)
        assert 'voice' in report.metadata.failed_dimensions
        assert 'specificity' not in report.metadata.failed_dimensions

    def test_holistic_attached(self, strong_essay, fake_client, settings, profile_data):
        orchestrator = EssayOrchestrator(client=fake_client, settings=settings)
        report = asyncio.run(orchestrator.analyze(strong_essay, 'piq5_challenge', profile_data))

        holistic = report.holistic_context
        assert holistic is not None
        assert not holistic.degraded
        assert holistic.strategic_fit.status == 'aligned'
        assert [a.archetype for a in holistic.archetype_candidates] == ['Bridge Builder', 'Kitchen Scientist']

        holistic_calls = [c for c in fake_client.calls if 'senior admissions officer' in c['system_instruction']]
        assert len(holistic_calls) == 1
        assert holistic_calls[0]['max_output_tokens'] == 6000

    def test_holistic_failure_omitted(self, strong_essay, settings, profile_data):
        client = FailingHolisticClient()
        orchestrator = EssayOrchestrator(client=client, settings=settings)
        report = asyncio.run(orchestrator.analyze(strong_essay, 'piq5_challenge', profile_data))
        assert report.holistic_context is None
        assert report.metadata.failed_dimensions == []

    def test_no_profile_no_holistic_call(self, strong_essay, fake_client, settings):
        orchestrator = EssayOrchestrator(client=fake_client, settings=settings)
        asyncio.run(orchestrator.analyze(strong_essay, 'piq5_challenge'))
        assert not any('senior admissions officer' in c['system_instruction'] for c in fake_client.calls)

    def test_analyze_essay_helper(self, strong_essay, fake_client, settings):
        report = asyncio.run(analyze_essay(strong_essay, 'piq2_creative', client=fake_client, settings=settings))
        assert report.metadata.prompt_type == 'piq2_creative'
        assert report.primary_dimensions['identity'].source == 'semantic'


class TestClose:
    """Client cleanup"""

    def test_close_releases_client(self, fake_client, settings):
        orchestrator = EssayOrchestrator(client=fake_client, settings=settings)
        asyncio.run(orchestrator.close())
        assert fake_client.closed

    def test_close_without_client(self, settings):
        orchestrator = EssayOrchestrator(settings=settings)
        assert orchestrator.client is None
        asyncio.run(orchestrator.close())
