"""
Generation Prompt Builder - diagnostic findings -> revision instruction pair

build_generation_prompt() is pure and deterministic: identical requests give
identical prompts. generate_revision() is the hand-off to the language model
for free-form revision options.

System instruction = fixed writing doctrine + exactly one style block.
User instruction sections, in order:
1. Original excerpt
2. Diagnostic summary (voice tier/label, weaknesses, blind spots)
3. Directive and target archetype
4. Global continuity constraints
5. Content pivot override
6. Focus task
7. Focus checklist
8. Output constraints
"""

import re
from typing import List, Optional, Union

from .config import Settings, get_settings
from .logging_helper import get_logger
from .models import (
    DiagnosticReport, FocusArea, GenerationPrompt, GenerationRequest,
    GlobalContext, StyleVariant, rich_text_evidence,
)
from .routing import VOICE

log = get_logger(__name__)

OPTION_SEPARATOR = '---'
CONTENT_PIVOT_MARKER = 'CONTENT PIVOT OVERRIDE'
BANNED_TRANSITIONS = ('In conclusion', 'In summary')


# ==================== SYSTEM INSTRUCTION ====================

DOCTRINE = """You are a writing coach and ghostwriter for college admissions essays.

GOAL: Turn the student's raw material into distinctive, top-tier narrative prose.

CORE MINDSET (anti-generic):
- Reject the generic: if a sentence could appear in anyone else's essay, rewrite it.
- Reject the passive: the student acts, reacts and chooses; life does not just happen to them.
- Reject the clean: real life is messy. Burnt coffee, sticky floors, awkward silences.

VOICE PRINCIPLES:
1. Radical specificity. Not "I was nervous" but the physical sensation of nerves.
2. The camera test. If a camera cannot film it, it is too abstract. "Resilience" is
   invisible; "studying until 4 AM" is visible. Choose the visible.
3. Authentic imperfection. Sound like an observant 17-year-old, not an HR manager.
   Contractions and fragments are allowed. Be honest about doubt.
4. Show, don't tell.
   Tell: "I learned the value of hard work."
   Show: "By August my palms had calloused, and they snagged on the sheets when I finally fell into bed."
5. Economy of imagery. No adjective pile-ups. Every sensory detail must reveal
   character, move the story or set the emotional tone.

CONTEXT: You are fixing specific weaknesses found by the diagnostic. Do not just write
a pretty story; fix the identified structural or thematic flaws."""

STYLE_BLOCKS = {
    StyleVariant.JOURNALIST: """MODE: JOURNALIST
- Focus: facts, action, impact.
- Style: short sentences, minimal adjectives, no filler.
- Directive: write like a reporter. What actually happened? Cut the philosophy, give the scene.""",

    StyleVariant.PHILOSOPHER: """MODE: PHILOSOPHER
- Focus: mental shifts, connections, metaphor.
- Style: introspective and analytical, linking the small moment to the larger belief.
- Directive: stay inside the internal monologue and connect the event to a belief system.""",

    StyleVariant.CINEMATOGRAPHER: """MODE: CINEMATOGRAPHER
- Focus: light, motion, texture, angles.
- Style: visually immersive, grounded in the physical space.
- Directive: describe the scene through a camera lens: lighting, blocking, atmosphere.""",

    StyleVariant.NOVELIST: """MODE: NOVELIST
- Focus: dialogue, interaction, subtext.
- Style: character-driven, with dialogue carrying the tension.
- Directive: let dialogue reveal what is not being said.""",

    StyleVariant.STANDARD: """MODE: STANDARD
- Focus: balanced narrative with strong sensory detail.
- Style: authentic, vulnerable, specific.""",
}


# ==================== FOCUS TEMPLATES ====================

FOCUS_TASKS = {
    FocusArea.HOOK: (
        'Write 3 alternative opening hooks at the highest tier. Each must be under 40 words. '
        'Use in medias res or a paradox.'
    ),
    FocusArea.PIVOT_MOMENT: (
        'Rewrite the pivot moment (the climax, where things change). Make it a scene, not a '
        'summary. Dialogue and action are required.'
    ),
    FocusArea.GROWTH_DEVELOPMENT: (
        'Bridge the gap between the first event and who the student is now. Show the messy '
        'middle of growth: the failures, the practice, the gradual improvement. Connect more '
        'than one experience.'
    ),
    FocusArea.REFLECTION: (
        'Rewrite the reflection. Move from "this taught me X" to a deeper, less obvious '
        'insight. Balance the scene (what happened) with the insight (what it means).'
    ),
    FocusArea.FULL_REWRITE: (
        'Rewrite the entire segment at the highest tier. Keep the core facts and upgrade the '
        'storytelling.'
    ),
}

VIVIDNESS_CHECKLIST = """MANDATORY VIVIDNESS CHECKLIST (include all):
1. One specific SENSORY detail (smell, sound or texture). Prefer gritty over pleasant.
2. One MICRO-MOMENT: a split-second action, e.g. a hand freezing on a doorknob.
3. One line of DIALOGUE or INTERNAL MONOLOGUE that reveals character.
4. Thematic connection: imagery must serve the theme, not decorate it."""

PROGRESSION_CHECKLIST = """MANDATORY PROGRESSION CHECKLIST (include all):
1. Montage: connect at least two distinct moments in time (day 1 vs. day 100).
2. Messy middle: show failure or confusion after the start.
3. Through-line: a recurring sound, object or phrase ties the moments together."""

INSIGHT_CHECKLIST = """MANDATORY INSIGHT CHECKLIST (include all):
1. Counter-intuitive insight: not "hard work pays off" but the nuanced truth behind it.
2. Lens shift: show how the experience changed how the student sees the world or others.
3. Minimal imagery: one grounding detail, then prioritise the idea."""

FOCUS_CHECKLISTS = {
    FocusArea.HOOK: VIVIDNESS_CHECKLIST,
    FocusArea.PIVOT_MOMENT: VIVIDNESS_CHECKLIST,
    FocusArea.FULL_REWRITE: VIVIDNESS_CHECKLIST,
    FocusArea.GROWTH_DEVELOPMENT: PROGRESSION_CHECKLIST,
    FocusArea.REFLECTION: INSIGHT_CHECKLIST,
}


# ==================== SECTION BUILDERS ====================

def _resolve_style(style: Union[StyleVariant, str, None]) -> StyleVariant:
    if isinstance(style, StyleVariant):
        return style
    try:
        return StyleVariant(str(style).strip().lower())
    except ValueError:
        return StyleVariant.STANDARD


def _resolve_focus(focus: Union[FocusArea, str]) -> FocusArea:
    if isinstance(focus, FocusArea):
        return focus
    try:
        return FocusArea(str(focus).strip().lower())
    except ValueError:
        return FocusArea.FULL_REWRITE


def build_system_instruction(style: Union[StyleVariant, str, None]) -> str:
    return f"{DOCTRINE}\n\n{STYLE_BLOCKS[_resolve_style(style)]}"


def _diagnostic_section(report: Optional[DiagnosticReport]) -> str:
    lines = ['DIAGNOSTIC CONTEXT (what to fix):']
    voice = report.score_for(VOICE) if report else None
    if voice:
        lines.append(f"- Current voice: {voice.quality_tier.label} ({voice.quality_label})")
        lines.append(f"- Key weaknesses: {', '.join(voice.weaknesses) if voice.weaknesses else 'N/A'}")
    else:
        lines.append('- Current voice: not assessed')

    holistic = report.holistic_context if report else None
    if holistic and holistic.narrative_quality.blind_spots:
        lines.append('- EXPLICITLY AVOID these blind spots:')
        for spot in holistic.narrative_quality.blind_spots:
            evidence = rich_text_evidence(spot.rich_text)
            suffix = f" (evidence: {'; '.join(evidence)})" if evidence else ''
            lines.append(f"  * {spot.plain_text()}{suffix}")
    return '\n'.join(lines)


def _directive_section(request: GenerationRequest) -> str:
    lines = [f"STRATEGIC DIRECTION: {request.specific_directive or 'Elevate to the highest tier'}"]
    if request.target_archetype:
        lines.append(f"TARGET ARCHETYPE: {request.target_archetype} (embody this positioning)")
    return '\n'.join(lines)


def _global_context_section(context: Optional[GlobalContext]) -> str:
    if context is None:
        return ''
    lines = []
    if context.theme:
        lines.append(f'- Core theme: "{context.theme}". This segment MUST align with it.')
    if context.recurring_motifs:
        lines.append(
            f"- Recurring motifs: you MUST weave in at least one of [{', '.join(context.recurring_motifs)}]."
        )
    if context.ending_insight:
        lines.append(f'- Required ending: this segment MUST lead toward "{context.ending_insight}".')
    if not lines:
        return ''
    return 'GLOBAL NARRATIVE CONSTRAINTS (mandatory):\n' + '\n'.join(lines)


def _content_pivot_section(content_pivot: Optional[str]) -> str:
    if not content_pivot:
        return ''
    return '\n'.join([
        CONTENT_PIVOT_MARKER,
        '- IGNORE the events, topic and lessons of the original excerpt.',
        "- USE the original excerpt ONLY as a reference for the student's voice and background.",
        f'- FOCUS entirely on this new moment: "{content_pivot}"',
    ])


def _constraints_section(focus: FocusArea) -> str:
    length = ('- Each hook must be under 40 words.' if focus == FocusArea.HOOK
              else '- Keep the word count similar to the original excerpt.')
    banned = ' or '.join(f'"{phrase}"' for phrase in BANNED_TRANSITIONS)
    return f"""CONSTRAINTS:
{length}
- Do NOT use the phrases {banned}.
- Output ONLY the generated text. Separate multiple options with a line containing "{OPTION_SEPARATOR}"."""


def build_generation_prompt(request: GenerationRequest) -> GenerationPrompt:
    """Assemble the system/user instruction pair for one revision request"""
    focus = _resolve_focus(request.focus_area)
    style = _resolve_style(request.style_variant)

    excerpt_label = ('ORIGINAL TEXT (voice reference only):' if request.content_pivot
                     else 'ORIGINAL TEXT:')
    sections = [
        f'{excerpt_label}\n"{request.original_text_excerpt}"',
        _diagnostic_section(request.diagnostic_context),
        _directive_section(request),
        _global_context_section(request.global_context),
        _content_pivot_section(request.content_pivot),
        f"YOUR TASK:\n{FOCUS_TASKS[focus]}\n(Mode: {style.value})",
        FOCUS_CHECKLISTS[focus],
        _constraints_section(focus),
    ]

    return GenerationPrompt(
        system_instruction=build_system_instruction(style),
        user_instruction='\n\n'.join(section for section in sections if section),
    )


# ==================== HAND-OFF ====================

def split_options(response_text: str) -> List[str]:
    """Split a free-form response into options on separator lines"""
    parts = re.split(r'^\s*-{3,}\s*$', response_text or '', flags=re.MULTILINE)
    return [part.strip() for part in parts if part.strip()]


async def generate_revision(
    request: GenerationRequest,
    client,
    settings: Optional[Settings] = None,
) -> List[str]:
    """Send the built prompt pair to the model and return the revision options"""
    settings = settings or get_settings()
    prompt = build_generation_prompt(request)
    focus = _resolve_focus(request.focus_area)

    log.info(f"Generating revision options for focus '{focus.value}'...")
    response_text = await client.generate(
        prompt.user_instruction,
        system_instruction=prompt.system_instruction,
        temperature=settings.generation_temperature,
        max_output_tokens=settings.generation_max_tokens,
        structured_output=False,
    )
    options = split_options(str(response_text))
    log.info(f"✓ {len(options)} option(s) generated")
    return options
