"""
Shared fixtures: sample essays, fake model clients, report builders
"""

import copy

import pytest

from essay_diagnostic.config import Settings
from essay_diagnostic.models import (
    DiagnosticReport, DimensionScore, QualityTier, ReportMetadata,
)
from essay_diagnostic.routing import UNIVERSAL_DIMENSIONS


STRONG_ESSAY = """"Turn it off," my sister whispered, but the smoke alarm kept screaming.

At 6:15 AM on a Tuesday, I stood in our kitchen with a pan of burnt sugar and a recipe I had translated for my mother. The caramel had gone black. My hands shook. I was the one who had insisted we could sell flan at the farmers market, and I was the one who had ruined forty dollars of ingredients.

I started over. I researched why sugar burns at 340 degrees, tested 12 batches that week, and wrote my own recipe card in English and Spanish. My job was to run the booth every Saturday; I handled the money, designed the sign, and convinced the market manager to give us a corner spot.

That was when I realized the recipe was never the point. For the first time, my mother was teaching me, and I was teaching her, in the same sentence.

Today the booth still runs every week. I plan to study food science, and I want to keep asking why things go wrong before I fix them."""

WEAK_ESSAY = """Ever since I was young, I have always been passionate about helping people. This experience taught me the importance of hard work. We worked on a lot of things together and we helped many people in our community. It was hard but eventually we overcame it. I learned that teamwork is important. In conclusion, this experience made me who I am and I want to change the world and make a difference."""

AI_ESSAY = """In today's world, leadership is a testament to character. I embarked on a journey to delve into the multifaceted tapestry of service. Navigating the complexities of our club fostered a sense of belonging. Each meeting played a pivotal role in my growth."""


SEMANTIC_RESPONSE = {
    'score': 7.4,
    'quality_label': 'authentic_voice',
    'tier_evaluation': {
        'current_tier': 'authentic',
        'next_tier': 'distinctive',
        'how_to_advance': 'Sharpen the ending image',
    },
    'reasoning': {
        'voice_authenticity': 'Sounds like a real teenager',
        'sentence_cadence': 'Varied',
    },
    'evidence_quotes': ['My hands shook.', 'This sentence is not in the essay at all.'],
    'strengths': ['Specific kitchen scene'],
    'weaknesses': ['Reflection is brief'],
    'quick_wins': ['Add one line of dialogue from your mother'],
    'confidence': 0.8,
    'climax_quality': 'scene',
    'hook_type': 'dialogue',
}

HOLISTIC_RESPONSE = {
    'consistency_check': {
        'status': 'gap_detected',
        'score': 7,
        'contradictions': [
            {
                'severity': 'warning',
                'issue': 'Booth role not listed',
                'essay_quote': 'My job was to run the booth every Saturday',
                'profile_fact': 'Activity list has no market booth',
                'fix_suggestion': 'Add the booth to the activity list',
            },
        ],
    },
    'strategic_fit': {
        'status': 'aligned',
        'score': 8,
        'major_alignment_analysis': 'Food science interest backed by experiments',
        'gaps': ['No formal research'],
    },
    'narrative_quality': {
        'coherence_score': 82,
        'recurring_motifs': ['burnt sugar', 'smoke alarm'],
        'spine': [
            {'id': 'spine_1', 'text': ['Kitchen ', {'text': 'experiments', 'details': ['12 batches']}], 'score': 6, 'reasoning': 'ok'},
            {'id': 'spine_2', 'text': ['Bilingual ', {'text': 'teaching', 'evidence': ['recipe card']}], 'score': 9, 'reasoning': 'best'},
        ],
        'spike': [],
        'lift': [{'id': 'lift_1', 'text': 'Enter a food science fair', 'score': 7, 'reasoning': 'concrete'}],
        'blind_spots': [
            {'id': 'blind_spot_1', 'text': ['Reads as ', {'text': 'family business', 'details': ['booth income']}], 'score': 5, 'reasoning': 'may overshadow'},
        ],
    },
    'archetype_candidates': [
        {'id': 'a1', 'archetype': 'Kitchen Scientist', 'narrative': ['Chemistry at the stove'], 'score': 8, 'reasoning': 'fits', 'tags': ['STEM']},
        {'id': 'a2', 'archetype': 'Bridge Builder', 'narrative': ['Translator'], 'score': 9, 'reasoning': 'fits', 'tags': ['family']},
        {'id': 'a3', 'archetype': 'Entrepreneur', 'narrative': ['Booth'], 'score': 4, 'reasoning': 'weak', 'tags': []},
    ],
    'risk_flags': {
        'has_red_flags': False,
        'flags': [{'type': 'tone', 'description': 'Ending slightly grandiose', 'severity': 'low'}],
    },
}

PROFILE_DATA = {
    'name': 'Maria Lopez',
    'academics': {
        'gpa': {'unweighted': 3.9, 'trend': 'upward'},
        'intendedMajor': 'Food Science',
        'courseRigor': 'most_rigorous',
    },
    'activities': [
        {
            'name': 'Chemistry Club',
            'role': 'Member',
            'category': 'academic',
            'timeCommitment': {'hoursPerWeek': 2, 'weeksPerYear': 30},
            'grades': [10, 11],
            'description': 'Weekly lab demos',
        },
    ],
    'awards': [{'name': 'Science Fair Honorable Mention', 'level': 'regional', 'year': 2024}],
    'circumstances': ['first-generation'],
}


class FakeLLMClient:
    """Stands in for LLMClient; records calls and replays canned responses"""

    def __init__(self, semantic=None, holistic=None, text='Option one\n---\nOption two', error=None):
        self.semantic = SEMANTIC_RESPONSE if semantic is None else semantic
        self.holistic = HOLISTIC_RESPONSE if holistic is None else holistic
        self.text = text
        self.error = error
        self.calls = []
        self.closed = False

    async def generate(self, user_instruction, *, system_instruction=None, temperature=0.3,
                       max_output_tokens=2048, structured_output=False):
        self.calls.append({
            'user_instruction': user_instruction,
            'system_instruction': system_instruction,
            'temperature': temperature,
            'max_output_tokens': max_output_tokens,
            'structured_output': structured_output,
        })
        if self.error is not None:
            raise self.error
        if not structured_output:
            return self.text
        if system_instruction and 'senior admissions officer' in system_instruction:
            return copy.deepcopy(self.holistic)
        return copy.deepcopy(self.semantic)

    async def close(self):
        self.closed = True


class FailingHolisticClient(FakeLLMClient):
    """Semantic calls succeed, the holistic call raises"""

    async def generate(self, user_instruction, **kwargs):
        system_instruction = kwargs.get('system_instruction') or ''
        if 'senior admissions officer' in system_instruction:
            raise TimeoutError('holistic call timed out')
        return await super().generate(user_instruction, **kwargs)


@pytest.fixture
def strong_essay():
    return STRONG_ESSAY


@pytest.fixture
def weak_essay():
    return WEAK_ESSAY


@pytest.fixture
def ai_essay():
    return AI_ESSAY


@pytest.fixture
def settings():
    return Settings(api_key=None)


@pytest.fixture
def fake_client():
    return FakeLLMClient()


@pytest.fixture
def profile_data():
    return copy.deepcopy(PROFILE_DATA)


@pytest.fixture
def make_score():
    """Build a DimensionScore with just the fields a test cares about"""

    def _make(dimension, score, quality_label='competent', weaknesses=None, **details):
        return DimensionScore(
            dimension=dimension,
            score=score,
            quality_tier=QualityTier.from_score(score),
            quality_label=quality_label,
            weaknesses=list(weaknesses or []),
            details=dict(details),
        )

    return _make


@pytest.fixture
def make_report(make_score):
    """
    Build a report from {dimension: score} maps.

    Universal dimensions not given default to 8.0 so they do not trigger rules.
    """

    def _make(universal=None, primary=None, secondary=None, prompt_type='piq5_challenge',
              voice_label='authentic_voice', climax_quality='vivid', holistic=None):
        universal = dict(universal or {})
        results = {}
        for dimension in UNIVERSAL_DIMENSIONS:
            score = universal.get(dimension, 8.0)
            if dimension == 'voice':
                results[dimension] = make_score(dimension, score, quality_label=voice_label,
                                                weaknesses=['Relies on stock phrasing'])
            elif dimension == 'narrative_arc':
                results[dimension] = make_score(dimension, score, climax_quality=climax_quality)
            else:
                results[dimension] = make_score(dimension, score)

        return DiagnosticReport(
            universal_scores=results,
            primary_dimensions={d: make_score(d, s) for d, s in (primary or {}).items()},
            secondary_dimensions={d: make_score(d, s) for d, s in (secondary or {}).items()},
            metadata=ReportMetadata(
                prompt_type=prompt_type,
                timestamp='2026-01-01T00:00:00+00:00',
                word_count=350,
            ),
            holistic_context=holistic,
        )

    return _make
