"""
Test suite for generation prompt building and the revision hand-off

Tests:
1. System instruction (doctrine + exactly one style block)
2. User instruction sections and ordering
3. Global context, content pivot and blind spots
4. Focus checklists and output constraints
5. Option splitting and generate_revision
"""

import asyncio
import copy

import pytest

from conftest import HOLISTIC_RESPONSE, FakeLLMClient
from essay_diagnostic.config import Settings
from essay_diagnostic.holistic import parse_holistic_result
from essay_diagnostic.models import FocusArea, GenerationRequest, GlobalContext, StyleVariant
from essay_diagnostic.prompt_builder import (
    CONTENT_PIVOT_MARKER, DOCTRINE, STYLE_BLOCKS, build_generation_prompt,
    build_system_instruction, generate_revision, split_options,
)

EXCERPT = 'Ever since I was young, I have always been passionate about helping people.'


def _mode_headers(text):
    return [block.splitlines()[0] for block in STYLE_BLOCKS.values() if block.splitlines()[0] in text]


class TestSystemInstruction:
    """Fixed doctrine plus one style block"""

    @pytest.mark.parametrize('style', list(StyleVariant))
    def test_exactly_one_style_block(self, style):
        system = build_system_instruction(style)
        assert system.startswith(DOCTRINE)
        assert _mode_headers(system) == [STYLE_BLOCKS[style].splitlines()[0]]

    def test_string_style(self):
        assert 'MODE: NOVELIST' in build_system_instruction('Novelist')

    def test_unknown_style_is_standard(self):
        system = build_system_instruction('poet')
        assert _mode_headers(system) == ['MODE: STANDARD']


class TestUserInstruction:
    """Section contents and order"""

    def test_pivot_with_motifs_and_journalist(self, make_report):
        request = GenerationRequest(
            original_text_excerpt=EXCERPT,
            focus_area=FocusArea.FULL_REWRITE,
            diagnostic_context=make_report(universal={'voice': 3.0}, voice_label='essay_speak'),
            style_variant=StyleVariant.JOURNALIST,
            global_context=GlobalContext(recurring_motifs=['burnt sugar']),
            content_pivot='The night the smoke alarm went off during my first solo batch',
        )
        prompt = build_generation_prompt(request)

        assert 'burnt sugar' in prompt.user_instruction
        assert CONTENT_PIVOT_MARKER in prompt.user_instruction
        assert 'ORIGINAL TEXT (voice reference only):' in prompt.user_instruction
        assert 'The night the smoke alarm went off' in prompt.user_instruction
        assert _mode_headers(prompt.system_instruction) == ['MODE: JOURNALIST']

    def test_section_order(self, make_report):
        holistic = parse_holistic_result(copy.deepcopy(HOLISTIC_RESPONSE))
        request = GenerationRequest(
            original_text_excerpt=EXCERPT,
            focus_area=FocusArea.HOOK,
            diagnostic_context=make_report(holistic=holistic),
            target_archetype='Bridge Builder',
            global_context=GlobalContext(theme='Bilingual teaching', recurring_motifs=['burnt sugar']),
            content_pivot='A new moment',
        )
        user = build_generation_prompt(request).user_instruction
        markers = [
            'ORIGINAL TEXT',
            'DIAGNOSTIC CONTEXT',
            'STRATEGIC DIRECTION',
            'GLOBAL NARRATIVE CONSTRAINTS',
            CONTENT_PIVOT_MARKER,
            'YOUR TASK',
            'MANDATORY VIVIDNESS CHECKLIST',
            'CONSTRAINTS:\n',
        ]
        positions = [user.index(marker) for marker in markers]
        assert positions == sorted(positions)

    def test_deterministic(self, make_report):
        request = GenerationRequest(
            original_text_excerpt=EXCERPT,
            focus_area=FocusArea.REFLECTION,
            diagnostic_context=make_report(),
            style_variant='philosopher',
        )
        assert build_generation_prompt(request) == build_generation_prompt(request)

    def test_optional_sections_omitted(self):
        prompt = build_generation_prompt(GenerationRequest(original_text_excerpt=EXCERPT, focus_area='hook'))
        assert CONTENT_PIVOT_MARKER not in prompt.user_instruction
        assert 'GLOBAL NARRATIVE CONSTRAINTS' not in prompt.user_instruction
        assert 'TARGET ARCHETYPE' not in prompt.user_instruction
        assert 'ORIGINAL TEXT:' in prompt.user_instruction
        assert 'Current voice: not assessed' in prompt.user_instruction

    def test_empty_global_context_omitted(self):
        request = GenerationRequest(original_text_excerpt=EXCERPT, focus_area='hook', global_context=GlobalContext())
        assert 'GLOBAL NARRATIVE CONSTRAINTS' not in build_generation_prompt(request).user_instruction

    def test_blind_spots_and_archetype(self, make_report):
        holistic = parse_holistic_result(copy.deepcopy(HOLISTIC_RESPONSE))
        request = GenerationRequest(
            original_text_excerpt=EXCERPT,
            focus_area=FocusArea.PIVOT_MOMENT,
            diagnostic_context=make_report(holistic=holistic),
            target_archetype='Bridge Builder',
        )
        user = build_generation_prompt(request).user_instruction
        assert 'EXPLICITLY AVOID' in user
        assert 'Reads as family business (evidence: booth income)' in user
        assert 'TARGET ARCHETYPE: Bridge Builder' in user

    def test_voice_diagnostics(self, make_report):
        request = GenerationRequest(
            original_text_excerpt=EXCERPT,
            focus_area=FocusArea.FULL_REWRITE,
            diagnostic_context=make_report(universal={'voice': 3.0}, voice_label='essay_speak'),
        )
        user = build_generation_prompt(request).user_instruction
        assert 'Current voice: absent_weak (essay_speak)' in user
        assert 'Relies on stock phrasing' in user


class TestFocusTemplates:
    """Task, checklist and constraints per focus"""

    @pytest.mark.parametrize('focus,checklist', [
        (FocusArea.HOOK, 'MANDATORY VIVIDNESS CHECKLIST'),
        (FocusArea.PIVOT_MOMENT, 'MANDATORY VIVIDNESS CHECKLIST'),
        (FocusArea.FULL_REWRITE, 'MANDATORY VIVIDNESS CHECKLIST'),
        (FocusArea.GROWTH_DEVELOPMENT, 'MANDATORY PROGRESSION CHECKLIST'),
        (FocusArea.REFLECTION, 'MANDATORY INSIGHT CHECKLIST'),
    ])
    def test_checklist(self, focus, checklist):
        user = build_generation_prompt(GenerationRequest(EXCERPT, focus)).user_instruction
        assert checklist in user

    def test_hook_task(self):
        user = build_generation_prompt(GenerationRequest(EXCERPT, FocusArea.HOOK)).user_instruction
        assert '3 alternative opening hooks' in user
        assert 'under 40 words' in user

    def test_banned_transitions(self):
        for focus in FocusArea:
            user = build_generation_prompt(GenerationRequest(EXCERPT, focus)).user_instruction
            assert 'Do NOT use the phrases "In conclusion" or "In summary"' in user

    def test_unknown_focus_is_full_rewrite(self):
        unknown = build_generation_prompt(GenerationRequest(EXCERPT, 'something_else')).user_instruction
        full = build_generation_prompt(GenerationRequest(EXCERPT, FocusArea.FULL_REWRITE)).user_instruction
        assert unknown == full


class TestRevisionHandOff:
    """Free-form generation and option splitting"""

    def test_split_options(self):
        assert split_options('A\n\n---\n\nB\n-----\nC') == ['A', 'B', 'C']

    def test_split_single_option(self):
        assert split_options('Only one option - with a dash') == ['Only one option - with a dash']

    def test_split_empty(self):
        assert split_options('') == []

    def test_generate_revision(self):
        client = FakeLLMClient(text='Hook one\n---\nHook two\n---\nHook three')
        request = GenerationRequest(EXCERPT, FocusArea.HOOK, style_variant='cinematographer')
        options = asyncio.run(generate_revision(request, client, Settings(api_key=None)))

        assert options == ['Hook one', 'Hook two', 'Hook three']
        call = client.calls[0]
        assert call['structured_output'] is False
        assert call['temperature'] == 0.7
        assert 'MODE: CINEMATOGRAPHER' in call['system_instruction']
        assert call['user_instruction'] == build_generation_prompt(request).user_instruction
