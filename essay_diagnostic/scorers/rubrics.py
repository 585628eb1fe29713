"""
Semantic Rubrics - Per-dimension rubric configuration for model-backed scoring

Each rubric describes one dimension to the model:
- definition
- five-tier ladder (name, score range, description)
- diagnostic questions the evaluator should ask
- warning signs that cap the score
- closed set of quality labels and reasoning fields requested back
- extras: dimension-specific categorical fields with their closed value sets
"""

from typing import Dict

from ..routing import (
    OPENING_HOOK, VOICE, CRAFT, NARRATIVE_ARC, THEMATIC_COHERENCE, VULNERABILITY,
    COMMUNITY_IMPACT, INTELLECTUAL_VITALITY, IDENTITY, PERSONAL_GROWTH,
    CONTEXT_CIRCUMSTANCES,
)
from .heuristic import CLIMAX_QUALITY_VALUES, HOOK_TYPE_VALUES


RUBRICS: Dict[str, Dict] = {

    VOICE: {
        'display_name': 'Voice & Writing Style',
        'definition': 'Does this sound like a real person? Voice integrity captures honesty, '
                      'specificity of perspective, and a natural cadence (not corporate or AI-ish).',
        'tiers': [
            ('ai_template', '0-2', 'Reads like a template. "I have always been passionate about X." Flawless but dead.'),
            ('resume_prose', '3-4', 'Functional but soulless. "I organized events." Correct, emotionally flat.'),
            ('emerging_voice', '5-6', 'Personality glimpses through formal writing, mixed with essay-speak.'),
            ('authentic', '7-8', 'Sounds like a specific person. Natural cadence, no essay-speak.'),
            ('distinctive', '9-10', 'Unmistakable voice and a unique lens on ordinary things.'),
        ],
        'questions': [
            "Could I pick this student's voice out of a pile?",
            'Do sentences feel said, not performed?',
            'Does the essay avoid sounding like it was written to impress?',
        ],
        'warning_signs': [
            'Stock phrases such as "passion for", "this experience taught me"',
            'Ornate vocabulary a teenager would not say aloud ("tapestry", "delve")',
            'Uniform sentence rhythm across paragraphs',
        ],
        'quality_labels': [
            'distinctive_voice', 'authentic_voice', 'some_personality',
            'flat_correct', 'essay_speak', 'ai_generated',
        ],
        'reasoning_fields': [
            'voice_authenticity', 'sentence_cadence', 'perspective_specificity', 'essay_speak_analysis',
        ],
        'extras': {},
    },

    CRAFT: {
        'display_name': 'Writing Craft',
        'definition': 'Control of language: imagery, sentence variety, precise word choice, '
                      'and showing rather than telling.',
        'tiers': [
            ('unpolished', '0-2', 'Errors and filler obscure meaning.'),
            ('uneven', '3-4', 'Clear but plain; heavy telling, intensifiers and passive voice.'),
            ('competent', '5-6', 'Clean prose with occasional imagery.'),
            ('polished', '7-8', 'Deliberate rhythm and concrete imagery in key moments.'),
            ('masterful', '9-10', 'Every sentence earns its place; imagery carries meaning.'),
        ],
        'questions': [
            'Are the key moments shown as images or summarized?',
            'Does sentence length vary with the emotional pace?',
            'Are verbs and nouns precise, or propped up by adverbs?',
        ],
        'warning_signs': [
            'Strings of "very"/"really" intensifiers',
            'Passive constructions that hide the actor',
        ],
        'quality_labels': ['masterful', 'polished', 'competent', 'uneven', 'unpolished'],
        'reasoning_fields': ['imagery', 'sentence_control', 'word_choice'],
        'extras': {},
    },

    NARRATIVE_ARC: {
        'display_name': 'Narrative Arc & Stakes',
        'definition': 'Whether the essay has a shape: established stakes, a turning point rendered '
                      'as a scene, and a resolution that lands in a changed present.',
        'tiers': [
            ('no_arc', '0-2', 'A list of facts with no tension or change.'),
            ('flat_arc', '3-4', 'Events in order, but the turning point is summarized.'),
            ('basic_arc', '5-6', 'Recognizable beginning, middle and end; stakes implied.'),
            ('clear_arc', '7-8', 'Stakes are explicit and the climax is a scene.'),
            ('compelling_arc', '9-10', 'Tension builds to a vivid climax with a resonant resolution.'),
        ],
        'questions': [
            'What could the writer have lost?',
            'Is the climax dramatized in real time or summarized after the fact?',
            'Does the ending show a changed person or just say so?',
        ],
        'warning_signs': [
            'Summary verbs at the climax ("I overcame", "eventually")',
            'No stakes before the turning point',
        ],
        'quality_labels': ['compelling_arc', 'clear_arc', 'basic_arc', 'flat_arc', 'no_arc'],
        'reasoning_fields': ['stakes', 'climax', 'resolution'],
        'extras': {'climax_quality': CLIMAX_QUALITY_VALUES},
    },

    THEMATIC_COHERENCE: {
        'display_name': 'Thematic Coherence',
        'definition': 'Whether every part of the essay serves one central idea, with the opening '
                      'and ending in conversation.',
        'tiers': [
            ('disjointed', '0-2', 'Unrelated episodes with no connecting idea.'),
            ('scattered', '3-4', 'Several topics compete for attention.'),
            ('loosely_connected', '5-6', 'A theme exists but some sections drift.'),
            ('coherent', '7-8', 'One idea organizes the essay; tangents are rare.'),
            ('unified', '9-10', 'Opening image, development and ending insight form one arc of meaning.'),
        ],
        'questions': [
            'Can the central idea be stated in one sentence?',
            'Does the ending answer or transform the opening?',
            'Which paragraph could be cut without loss?',
        ],
        'warning_signs': [
            'List transitions ("also", "in addition") joining unrelated topics',
            'A moral in the final line that the body never set up',
        ],
        'quality_labels': ['unified', 'coherent', 'loosely_connected', 'scattered', 'disjointed'],
        'reasoning_fields': ['central_idea', 'through_line', 'ending_connection'],
        'extras': {},
    },

    VULNERABILITY: {
        'display_name': 'Vulnerability & Emotional Honesty',
        'definition': 'Willingness to show difficult emotions, doubts and mistakes without '
                      'performing them or hiding behind positivity.',
        'tiers': [
            ('closed', '0-2', 'No emotion beyond pride or positivity.'),
            ('surface_level', '3-4', 'Emotions are named generically ("it was hard").'),
            ('guarded', '5-6', 'Some honest moments, quickly resolved.'),
            ('genuine_openness', '7-8', 'Doubt or fear shown concretely and held long enough to matter.'),
            ('raw_honesty', '9-10', 'Admits something costly, rendered with restraint.'),
        ],
        'questions': [
            'What does the writer admit that they would rather not?',
            'Are emotions shown through the body or only labeled?',
        ],
        'warning_signs': [
            'Relentless positivity ("I never gave up")',
            'Trauma narrated for effect with no reflection',
        ],
        'quality_labels': ['raw_honesty', 'genuine_openness', 'guarded', 'surface_level', 'closed'],
        'reasoning_fields': ['emotional_honesty', 'self_disclosure'],
        'extras': {},
    },

    OPENING_HOOK: {
        'display_name': 'Opening Hook',
        'definition': 'Whether the first one or two sentences earn the reader\'s attention and set '
                      'up the essay\'s central tension.',
        'tiers': [
            ('cliche', '0-2', '"Ever since I was young..." or a dictionary definition.'),
            ('generic', '3-4', 'Backstory or summary opening; no tension.'),
            ('serviceable', '5-6', 'Clear opening with some concrete detail.'),
            ('engaging', '7-8', 'Starts in a moment: dialogue, action or sensory scene.'),
            ('arresting', '9-10', 'Surprising, specific and tied to the essay\'s theme.'),
        ],
        'questions': [
            'Would a tired reader keep going after the first sentence?',
            'Does the opening create a question the essay answers?',
            'Is the hook appropriate for a {essay_type} essay?',
        ],
        'warning_signs': [
            'Openings with "Ever since", "Growing up", "Many people"',
            'Rhetorical questions with obvious answers',
        ],
        'quality_labels': ['arresting', 'engaging', 'serviceable', 'generic', 'cliche'],
        'reasoning_fields': ['first_impression', 'tension', 'thematic_setup'],
        'extras': {'hook_type': HOOK_TYPE_VALUES},
    },

    IDENTITY: {
        'display_name': 'Identity & Self-Discovery',
        'definition': 'How clearly the reader comes to know who the writer is: values, quirks, '
                      'roots and the lens they see the world through.',
        'tiers': [
            ('absent_self', '0-2', 'The writer is invisible behind events.'),
            ('resume_self', '3-4', 'Identity is a list of credentials.'),
            ('emerging_self', '5-6', 'Some values surface, mostly stated.'),
            ('clear_self', '7-8', 'Values and personality are shown through choices.'),
            ('vivid_self', '9-10', 'A specific, memorable person; the reader could predict their next move.'),
        ],
        'questions': [
            'What three words describe this person after reading?',
            'Are values shown through choices or only asserted?',
        ],
        'warning_signs': ['Resume listing', 'Identity stated through labels only'],
        'quality_labels': ['vivid_self', 'clear_self', 'emerging_self', 'resume_self', 'absent_self'],
        'reasoning_fields': ['values', 'self_understanding', 'distinctiveness'],
        'extras': {},
    },

    PERSONAL_GROWTH: {
        'display_name': 'Personal Growth',
        'definition': 'Evidence of change over time: a credible before, a messy middle, and an '
                      'after expressed through changed behavior or thinking.',
        'tiers': [
            ('no_growth', '0-2', 'No change described.'),
            ('stated_growth', '3-4', 'Growth claimed with a cliche lesson.'),
            ('some_growth', '5-6', 'Before and after exist but the middle is skipped.'),
            ('clear_growth', '7-8', 'Struggle shown; change visible in behavior.'),
            ('transformative_growth', '9-10', 'A fundamental shift in thinking, rendered honestly.'),
        ],
        'questions': [
            'What does the writer do differently now?',
            'Is the messy middle shown, including setbacks?',
        ],
        'warning_signs': ['"This taught me the importance of..."', 'Instant transformation'],
        'quality_labels': [
            'transformative_growth', 'clear_growth', 'some_growth', 'stated_growth', 'no_growth',
        ],
        'reasoning_fields': ['before_state', 'struggle', 'after_state'],
        'extras': {},
    },

    INTELLECTUAL_VITALITY: {
        'display_name': 'Intellectual Vitality',
        'definition': 'Genuine curiosity pursued beyond requirements: questions chased, ideas '
                      'connected, learning done for its own sake.',
        'tiers': [
            ('detached', '0-2', 'Learning appears only as grades.'),
            ('academic_interest', '3-4', 'Interest asserted, not demonstrated.'),
            ('engaged', '5-6', 'Some self-directed exploration.'),
            ('genuine_curiosity', '7-8', 'A specific question pursued with evident excitement.'),
            ('intellectual_spark', '9-10', 'Original connections across ideas; thinking on the page.'),
        ],
        'questions': [
            'What question did the writer chase that nobody assigned?',
            'Does the essay show thinking, or report knowledge?',
        ],
        'warning_signs': ['"Passion for learning" without an example', 'Grades as evidence of curiosity'],
        'quality_labels': [
            'intellectual_spark', 'genuine_curiosity', 'engaged', 'academic_interest', 'detached',
        ],
        'reasoning_fields': ['curiosity', 'depth', 'connections'],
        'extras': {},
    },

    COMMUNITY_IMPACT: {
        'display_name': 'Community Impact',
        'definition': 'Concrete, sustained benefit to a specific community, with the writer\'s '
                      'contribution distinguishable from the group\'s.',
        'tiers': [
            ('no_impact', '0-2', 'Service mentioned with no outcome.'),
            ('claimed_impact', '3-4', 'Impact asserted in generic mission language.'),
            ('some_impact', '5-6', 'Outcomes named but unmeasured.'),
            ('meaningful_impact', '7-8', 'Specific people served and measurable change.'),
            ('transformative_impact', '9-10', 'Lasting change that continues without the writer.'),
        ],
        'questions': [
            'Who exactly benefited, and how do we know?',
            'Does the change outlast the writer\'s involvement?',
        ],
        'warning_signs': ['"Make a difference" language', 'Savior framing of the community'],
        'quality_labels': [
            'transformative_impact', 'meaningful_impact', 'some_impact', 'claimed_impact', 'no_impact',
        ],
        'reasoning_fields': ['beneficiaries', 'outcomes', 'sustainability'],
        'extras': {},
    },

    CONTEXT_CIRCUMSTANCES: {
        'display_name': 'Context & Circumstances',
        'definition': 'How well the essay conveys the circumstances the writer navigated and '
                      'their response, without grievance or spectacle.',
        'tiers': [
            ('missing_context', '0-2', 'Circumstances are absent or unclear.'),
            ('thin_context', '3-4', 'Hardship named in a phrase.'),
            ('some_context', '5-6', 'Circumstances described but the response is vague.'),
            ('clear_context', '7-8', 'Concrete daily reality and a specific response.'),
            ('illuminating_context', '9-10', 'Context reframes every achievement in the essay.'),
        ],
        'questions': [
            'What did an ordinary day look like under these circumstances?',
            'What did the writer do in response?',
        ],
        'warning_signs': ['Hardship as spectacle', 'Grievance without agency'],
        'quality_labels': [
            'illuminating_context', 'clear_context', 'some_context', 'thin_context', 'missing_context',
        ],
        'reasoning_fields': ['circumstances', 'response', 'framing'],
        'extras': {},
    },
}


def format_rubric(dimension: str, essay_type: str = '') -> str:
    """Render a rubric as prompt text"""
    rubric = RUBRICS[dimension]
    lines = [
        f"DIMENSION: {rubric['display_name']}",
        f"DEFINITION: {rubric['definition']}",
        "",
        "TIERS:",
    ]
    for i, (name, score_range, description) in enumerate(rubric['tiers'], 1):
        lines.append(f"{i}. {name} ({score_range}): {description}")

    lines.append("")
    lines.append("DIAGNOSTIC QUESTIONS:")
    for question in rubric['questions']:
        lines.append(f"- {question.replace('{essay_type}', essay_type or 'personal insight')}")

    lines.append("")
    lines.append("WARNING SIGNS (cap the score when present):")
    for sign in rubric['warning_signs']:
        lines.append(f"- {sign}")

    return "\n".join(lines)
