"""
Test suite for the model-backed dimension scorers

Tests:
1. JSON response parsing
2. Validation and backfill of structured results
3. Failure handling (AnalyzerFailure vs. heuristic fallback)
4. Prompt contents and call parameters
"""

import asyncio

import pytest

from conftest import SEMANTIC_RESPONSE, FakeLLMClient
from essay_diagnostic.config import Settings
from essay_diagnostic.errors import AnalyzerFailure, MalformedModelOutput
from essay_diagnostic.llm_client import LLMClient, parse_json_response
from essay_diagnostic.scorers import SEMANTIC_DIMENSIONS, SemanticScorer, score_semantic, validate_semantic_result
from essay_diagnostic.scorers.heuristic import score_heuristic
from essay_diagnostic.scorers.semantic import build_semantic_prompt


class TestParseJsonResponse:
    """Fenced and bare JSON objects"""

    def test_plain_object(self):
        assert parse_json_response('{"score": 7}') == {'score': 7}

    def test_fenced_object(self):
        assert parse_json_response('```json\n{"score": 7}\n```') == {'score': 7}

    def test_object_with_preamble(self):
        assert parse_json_response('Here you go:\n{"score": 7}\nThanks') == {'score': 7}

    def test_garbage_raises(self):
        with pytest.raises(MalformedModelOutput):
            parse_json_response('no json here')

    def test_array_raises(self):
        with pytest.raises(MalformedModelOutput):
            parse_json_response('[1, 2, 3]')


class TestLLMClient:
    def test_missing_key_raises(self):
        with pytest.raises(ValueError, match='ANTHROPIC_API_KEY not set'):
            LLMClient(Settings(api_key=None))


class TestValidation:
    """Raw structured output becomes a complete DimensionScore"""

    def test_full_result(self, strong_essay):
        prepass = score_heuristic('voice', strong_essay)
        result = validate_semantic_result('voice', dict(SEMANTIC_RESPONSE), strong_essay, prepass)

        assert result.source == 'semantic'
        assert result.score == 7.4
        assert result.quality_label == 'authentic_voice'
        assert result.confidence == 0.8
        assert result.progression.next_tier == 'distinctive'
        assert result.reasoning['voice_authenticity'] == 'Sounds like a real teenager'
        assert result.details['heuristic_score'] == prepass.score

    def test_non_literal_quotes_dropped(self, strong_essay):
        prepass = score_heuristic('voice', strong_essay)
        result = validate_semantic_result('voice', dict(SEMANTIC_RESPONSE), strong_essay, prepass)
        assert result.evidence_quotes == ['My hands shook.']
        assert result.evidence == ['My hands shook.']

    def test_quotes_match_across_whitespace_and_case(self, strong_essay):
        prepass = score_heuristic('voice', strong_essay)
        raw = {'score': 6, 'evidence_quotes': ['my   HANDS shook.']}
        result = validate_semantic_result('voice', raw, strong_essay, prepass)
        assert result.evidence_quotes == ['my   HANDS shook.']

    def test_empty_result_backfilled(self, strong_essay):
        prepass = score_heuristic('craft', strong_essay)
        result = validate_semantic_result('craft', {}, strong_essay, prepass)

        assert result.score == 0.0
        assert result.quality_label == 'unpolished'
        assert result.confidence == 0.0
        assert result.strengths == []
        assert result.weaknesses == []
        assert result.quick_wins == []
        assert result.reasoning == {}
        assert result.progression.current_tier == ''
        assert result.evidence == prepass.evidence

    def test_score_clamped(self, strong_essay):
        prepass = score_heuristic('craft', strong_essay)
        result = validate_semantic_result('craft', {'score': 14, 'confidence': 3}, strong_essay, prepass)
        assert result.score == 10.0
        assert result.confidence == 1.0

    def test_invalid_label_replaced(self, strong_essay):
        prepass = score_heuristic('craft', strong_essay)
        result = validate_semantic_result('craft', {'score': 7.5, 'quality_label': 'superb'}, strong_essay, prepass)
        assert result.quality_label == 'polished'

    def test_tier_reasoning_alias(self, strong_essay):
        prepass = score_heuristic('craft', strong_essay)
        raw = {'score': 5, 'tier_evaluation': {'current_tier': 'competent', 'tier_reasoning': 'Cut adverbs'}}
        result = validate_semantic_result('craft', raw, strong_essay, prepass)
        assert result.progression.how_to_advance == 'Cut adverbs'

    def test_valid_extra_kept(self, strong_essay):
        prepass = score_heuristic('narrative_arc', strong_essay)
        result = validate_semantic_result('narrative_arc', {'score': 6, 'climax_quality': 'scene'}, strong_essay, prepass)
        assert result.details['climax_quality'] == 'scene'

    def test_invalid_extra_keeps_pattern_value(self, weak_essay):
        prepass = score_heuristic('narrative_arc', weak_essay)
        result = validate_semantic_result('narrative_arc', {'score': 3, 'climax_quality': 'epic'}, weak_essay, prepass)
        assert result.details['climax_quality'] == prepass.details['climax_quality'] == 'weak'

    def test_missing_hook_type_keeps_pattern_value(self, strong_essay):
        prepass = score_heuristic('opening_hook', strong_essay)
        result = validate_semantic_result('opening_hook', {'score': 8}, strong_essay, prepass)
        assert result.details['hook_type'] == 'dialogue'


class TestScoreSemantic:
    """One structured call per dimension"""

    def test_all_semantic_dimensions_have_rubrics(self):
        assert 'voice' in SEMANTIC_DIMENSIONS
        assert 'opening_hook' in SEMANTIC_DIMENSIONS
        assert 'role_clarity' not in SEMANTIC_DIMENSIONS

    def test_success(self, strong_essay, fake_client, settings):
        result = asyncio.run(score_semantic('voice', strong_essay, fake_client, settings=settings))
        assert result.source == 'semantic'
        assert result.score == 7.4

        assert len(fake_client.calls) == 1
        call = fake_client.calls[0]
        assert call['structured_output'] is True
        assert call['temperature'] == 0.3
        assert call['max_output_tokens'] == 2048
        assert strong_essay in call['user_instruction']

    def test_failure_raises_analyzer_failure(self, strong_essay, settings):
        client = FakeLLMClient(error=TimeoutError('model timed out'))
        with pytest.raises(AnalyzerFailure) as excinfo:
            asyncio.run(score_semantic('voice', strong_essay, client, settings=settings))
        assert excinfo.value.dimension == 'voice'
        assert isinstance(excinfo.value.cause, TimeoutError)

    def test_non_dict_response_raises(self, strong_essay, settings):
        client = FakeLLMClient(semantic='not an object')
        with pytest.raises(AnalyzerFailure) as excinfo:
            asyncio.run(score_semantic('voice', strong_essay, client, settings=settings))
        assert isinstance(excinfo.value.cause, MalformedModelOutput)

    def test_fallback_enabled(self, strong_essay, settings):
        client = FakeLLMClient(error=TimeoutError('model timed out'))
        result = asyncio.run(score_semantic('voice', strong_essay, client, settings=settings, fallback=True))
        prepass = score_heuristic('voice', strong_essay)

        assert result.source == 'heuristic_fallback'
        assert result.confidence == 0.5
        assert result.score == prepass.score

    def test_fallback_from_settings(self, strong_essay):
        client = FakeLLMClient(error=RuntimeError('rate limited'))
        settings = Settings(api_key=None, heuristic_fallback=True)
        result = asyncio.run(score_semantic('craft', strong_essay, client, settings=settings))
        assert result.source == 'heuristic_fallback'

    def test_unknown_dimension(self, strong_essay, fake_client, settings):
        with pytest.raises(ValueError):
            asyncio.run(score_semantic('role_clarity', strong_essay, fake_client, settings=settings))

    def test_scorer_callable(self, strong_essay, fake_client, settings):
        scorer = SemanticScorer('thematic_coherence', fake_client, settings)
        result = asyncio.run(scorer(strong_essay))
        assert result.dimension == 'thematic_coherence'
        assert result.source == 'semantic'


class TestSemanticPrompt:
    def test_prompt_carries_prepass_and_rubric(self, weak_essay):
        prepass = score_heuristic('narrative_arc', weak_essay)
        prompt = build_semantic_prompt('narrative_arc', weak_essay, prepass)
        assert 'Pattern climax_quality: weak' in prompt
        assert '"climax_quality"' in prompt
        assert weak_essay in prompt
        assert 'compelling_arc' in prompt
