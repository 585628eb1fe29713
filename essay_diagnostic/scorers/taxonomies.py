"""
Heuristic Taxonomies - Static pattern data for rule-based dimension scoring

Each dimension entry holds:
- baseline: starting score (below the midpoint, merit must be evidenced)
- labels: (min_score, quality_label) pairs, highest first
- signals: named pattern groups with tiered adjustments

Signal fields:
- patterns: regexes counted against the essay (case-insensitive unless
  'case_sensitive' is set)
- steps: (min_count, delta) tiers; the highest tier reached applies
- missing: delta applied when the signal never fires (required elements)
- strength / weakness / quick_win: templated feedback keyed to the signal
"""

from typing import Dict, List, Tuple

from ..routing import (
    OPENING_HOOK, VOICE, CRAFT, SPECIFICITY, NARRATIVE_ARC, THEMATIC_COHERENCE,
    VULNERABILITY, INITIATIVE_LEADERSHIP, ROLE_CLARITY, COMMUNITY_IMPACT,
    INTELLECTUAL_VITALITY, IDENTITY, PERSONAL_GROWTH, CONTEXT_CIRCUMSTANCES,
    FIT_TRAJECTORY,
)

MIN_WORDS = 5
MAX_EVIDENCE = 5


# ==================== SHARED PATTERN GROUPS ====================

VAGUE_LANGUAGE = [
    r'\b(?:many|several|a lot of|lots of|a bunch of|numerous)\b',
    r'\b(?:things|stuff)\b',
    r'\b(?:helped|worked on|participated in|was involved in|contributed to)\b',
    r'\b(?:amazing|awesome|incredible)\b',
]

GENERIC_MISSION = [
    r'\bchange the world\b',
    r'\bmake a difference\b',
    r'\bhelp (?:people|others)\b',
    r'\bgive back\b',
    r'\bmake the world a better place\b',
]

ESSAY_SPEAK = [
    r'\bever since I was (?:young|little|a child)\b',
    r'\bfrom a young age\b',
    r'\bthis experience taught me\b',
    r'\bI learned (?:that|the importance of)\b',
    r'\bin conclusion\b',
    r'\bin summary\b',
    r'\bpassion for\b',
    r'\bI have always been\b',
    r'\bmade me who I am\b',
]

AI_TELLS = [
    r'\bdelve\b',
    r'\btapestry\b',
    r'\btestament to\b',
    r'\bnavigat(?:e|ing) the complexities\b',
    r'\bin today\'s (?:world|society)\b',
    r'\bfoster(?:ed|ing)? a sense of\b',
    r'\bembark(?:ed)? on a journey\b',
    r'\bplay(?:s|ed)? a pivotal role\b',
    r'\bmultifaceted\b',
]

SENSORY_DETAIL = [
    r'\b(?:smell|scent|stench|aroma)\w*\b',
    r'\b(?:hum|hummed|buzz(?:ed|ing)?|crackl(?:e|ed|ing)|sizzl(?:e|ed|ing)|clatter\w*)\b',
    r'\b(?:rough|smooth|sticky|slick|cold|warm|damp|gritty)\b',
    r'\b(?:fluorescent|flicker\w*|glow\w*|dim)\b',
    r'\b(?:tasted?|bitter|sour|burnt)\b',
]

DIALOGUE = [
    r'["“][^"”]{3,}["”]',
]

TURNING_POINT = [
    r'\b(?:suddenly|that was when|that\'s when|in that moment|at that moment)\b',
    r'\b(?:I realized|it hit me|it dawned on me|for the first time)\b',
    r'\b(?:everything changed|the moment|then I)\b',
]

SUMMARY_TELLING = [
    r'\b(?:it was (?:hard|difficult|challenging|tough))\b',
    r'\b(?:I overcame|I persevered|I got through)\b',
    r'\b(?:eventually|over time|after a while|in the end)\b',
]

REFLECTION = [
    r'\b(?:I realized|I now understand|I understand now|I\'ve come to see|I see now)\b',
    r'\b(?:looking back|in hindsight|today I)\b',
    r'\b(?:this is why|that is why|which is why)\b',
]

FIRST_PERSON_SINGULAR = r'\b(?:I|me|my|mine|myself)\b'
FIRST_PERSON_PLURAL = r'\b(?:we|us|our|ours|ourselves)\b'


# ==================== DIMENSION TAXONOMIES ====================

DIMENSION_TAXONOMIES: Dict[str, Dict] = {

    OPENING_HOOK: {
        'baseline': 3.0,
        'labels': [
            (8.5, 'arresting'),
            (7.0, 'engaging'),
            (5.0, 'serviceable'),
            (3.5, 'generic'),
            (0.0, 'cliche'),
        ],
        'signals': {},  # opening classification is computed, see heuristic._classify_hook
    },

    VOICE: {
        'baseline': 3.0,
        'labels': [
            (8.5, 'distinctive_voice'),
            (7.0, 'authentic_voice'),
            (5.0, 'some_personality'),
            (3.5, 'flat_correct'),
            (0.0, 'essay_speak'),
        ],
        'signals': {
            'conversational_markers': {
                'patterns': [
                    r'\b(?:honestly|frankly|okay|well,|turns out|of course)\b',
                    r'\?',
                    r'—|--',
                    r'\([^)]{3,}\)',
                ],
                'steps': [(1, 0.8), (3, 1.5), (6, 2.0)],
                'strength': 'Conversational asides and questions give the writing a speaking voice',
                'quick_win': 'Let one honest aside or question into a paragraph that sounds like a report',
            },
            'concrete_detail': {
                'patterns': SENSORY_DETAIL + DIALOGUE,
                'steps': [(1, 0.8), (3, 1.5), (5, 2.0)],
                'missing': -0.5,
                'strength': 'Concrete sensory detail anchors the voice in lived experience',
                'weakness': 'Voice stays abstract with no concrete sensory anchors',
                'quick_win': 'Replace one abstract sentence with what you saw, heard or smelled',
            },
            'essay_speak': {
                'patterns': ESSAY_SPEAK,
                'steps': [(1, -1.0), (2, -1.5), (4, -2.5)],
                'weakness': 'Stock application phrasing ("this experience taught me", "passion for") flattens the voice',
                'quick_win': 'Delete stock phrases and say the specific thing you actually mean',
            },
            'ai_tells': {
                'patterns': AI_TELLS,
                'steps': [(1, -1.0), (3, -2.5)],
                'weakness': 'Vocabulary reads as machine-polished rather than personal',
                'quick_win': 'Swap ornate words ("tapestry", "delve") for words you would say aloud',
            },
        },
    },

    CRAFT: {
        'baseline': 3.0,
        'labels': [
            (8.5, 'masterful'),
            (7.0, 'polished'),
            (5.0, 'competent'),
            (3.5, 'uneven'),
            (0.0, 'unpolished'),
        ],
        'signals': {
            'imagery': {
                'patterns': SENSORY_DETAIL + [r'\b(?:like a|as if|as though)\b'],
                'steps': [(1, 0.8), (3, 1.5), (6, 2.0)],
                'missing': -0.5,
                'strength': 'Imagery and comparison make scenes visible',
                'weakness': 'Little imagery; the essay tells rather than shows',
                'quick_win': 'Render one key moment as an image the reader can see',
            },
            'dialogue': {
                'patterns': DIALOGUE,
                'steps': [(1, 0.8), (2, 1.2)],
                'strength': 'Dialogue brings other people onto the page',
            },
            'telling_adverbs': {
                'patterns': [
                    r'\b(?:very|really|extremely|incredibly|truly)\s+\w+',
                ],
                'steps': [(3, -0.5), (6, -1.0), (10, -1.5)],
                'weakness': 'Intensifiers ("very", "really") stand in for precise words',
                'quick_win': 'Cut intensifiers and choose a stronger verb or noun instead',
            },
            'passive_voice': {
                'patterns': [r'\b(?:was|were|been|being)\s+\w+ed\b'],
                'steps': [(3, -0.5), (6, -1.0)],
                'weakness': 'Frequent passive constructions blur who acted',
                'quick_win': 'Rewrite passive sentences so you are the subject doing the action',
            },
        },
    },

    SPECIFICITY: {
        'baseline': 2.5,
        'labels': [
            (8.5, 'vivid_specific'),
            (7.0, 'concrete'),
            (5.0, 'mixed'),
            (3.5, 'mostly_general'),
            (0.0, 'vague'),
        ],
        'signals': {
            'quantified_detail': {
                'patterns': [
                    r'\b\d+\s*(?:hours?|minutes?|weeks?|months?|years?|days?)\b',
                    r'\b\d+\s*(?:people|students|members|participants|volunteers|kids|families)\b',
                    r'\b\d+\s*%|\b\d+\s*percent\b',
                    r'\$\s?\d[\d,]*',
                    r'\b\d+[\d,]*\s*(?:times|sessions|meetings|events|pounds|miles|dollars)\b',
                ],
                'steps': [(1, 1.0), (3, 2.0), (5, 2.5)],
                'missing': -1.0,
                'strength': 'Numbers and measurements make claims verifiable',
                'weakness': 'No quantities anywhere; scale and effort are left to the imagination',
                'quick_win': 'Add one real number: hours, people, dollars or days',
            },
            'time_and_place': {
                'patterns': [
                    r'\b(?:Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday)\b',
                    r'\b(?:January|February|March|April|May|June|July|August|September|October|November|December)\b',
                    r'\b\d{1,2}:\d{2}\s*(?:AM|PM|a\.m\.|p\.m\.)?',
                    r'\b(?:sophomore|junior|freshman|senior) year\b',
                ],
                'steps': [(1, 0.8), (3, 1.2)],
                'strength': 'Dated, timed moments ground the story',
            },
            'named_entities': {
                'patterns': [
                    r'\b[A-Z][a-z]+\s+(?:Club|Society|Association|Foundation|Team|Committee|Council|Center|Library|Hospital)\b',
                    r'\b[A-Z][a-z]+\s+(?:High School|Middle School|University|College|Park|County)\b',
                ],
                'case_sensitive': True,
                'steps': [(1, 0.8), (2, 1.2)],
                'strength': 'Named places and organizations add credibility',
            },
            'vague_language': {
                'patterns': VAGUE_LANGUAGE,
                'steps': [(2, -0.5), (4, -1.0), (7, -2.0)],
                'weakness': 'Vague filler ("a lot of", "things", "helped") hides what actually happened',
                'quick_win': 'Replace each "helped" or "things" with the exact action or object',
            },
        },
    },

    NARRATIVE_ARC: {
        'baseline': 3.0,
        'labels': [
            (8.5, 'compelling_arc'),
            (7.0, 'clear_arc'),
            (5.0, 'basic_arc'),
            (3.5, 'flat_arc'),
            (0.0, 'no_arc'),
        ],
        'signals': {
            'stakes': {
                'patterns': [
                    r'\b(?:afraid|terrified|scared|panic\w*|dread\w*)\b',
                    r'\b(?:if I didn\'t|if we didn\'t|or else|at stake|risk\w*)\b',
                    r'\b(?:deadline|last chance|about to lose|failing)\b',
                ],
                'steps': [(1, 1.0), (3, 1.5)],
                'missing': -0.5,
                'strength': 'Stakes are named, so the reader knows what could be lost',
                'weakness': 'No stakes established; the reader has no reason to worry',
                'quick_win': 'State in one sentence what would have happened if you had failed',
            },
            'turning_point': {
                'patterns': TURNING_POINT,
                'steps': [(1, 1.0), (2, 1.5)],
                'missing': -1.0,
                'strength': 'A clear turning point gives the story a shape',
                'weakness': 'No identifiable turning point',
                'quick_win': 'Slow down at the moment things changed and show it as a scene',
            },
            'resolution': {
                'patterns': REFLECTION + [r'\b(?:now|today|since then)\b'],
                'steps': [(1, 0.8), (3, 1.2)],
                'strength': 'The story lands in a changed present',
            },
            'summary_telling': {
                'patterns': SUMMARY_TELLING,
                'steps': [(1, -0.5), (3, -1.0)],
                'weakness': 'Key events are summarized ("I overcame", "eventually") rather than dramatized',
                'quick_win': 'Trade a summary line for thirty seconds of real-time action',
            },
        },
    },

    THEMATIC_COHERENCE: {
        'baseline': 3.0,
        'labels': [
            (8.5, 'unified'),
            (7.0, 'coherent'),
            (5.0, 'loosely_connected'),
            (3.5, 'scattered'),
            (0.0, 'disjointed'),
        ],
        'signals': {
            'reflective_through_line': {
                'patterns': REFLECTION,
                'steps': [(1, 1.0), (2, 1.5), (4, 2.0)],
                'missing': -1.0,
                'strength': 'Reflection ties the events to a single idea',
                'weakness': 'Events are never tied back to a central idea',
                'quick_win': 'Name the idea that connects your opening image to your ending',
            },
            'callbacks': {
                'patterns': [
                    r'\b(?:again|once more|still|this time|the same)\b',
                    r'\b(?:just like|like before|back to)\b',
                ],
                'steps': [(2, 0.8), (4, 1.2)],
                'strength': 'Callbacks to earlier moments create a through-line',
            },
            'topic_drift': {
                'patterns': [
                    r'\b(?:another thing|also,|in addition|additionally|on top of that|besides that)\b',
                ],
                'steps': [(2, -0.5), (4, -1.5)],
                'weakness': 'List-like transitions suggest the essay covers several unrelated topics',
                'quick_win': 'Cut the weakest tangent and deepen the main thread',
            },
        },
    },

    VULNERABILITY: {
        'baseline': 2.5,
        'labels': [
            (8.5, 'raw_honesty'),
            (7.0, 'genuine_openness'),
            (5.0, 'guarded'),
            (3.5, 'surface_level'),
            (0.0, 'closed'),
        ],
        'signals': {
            'named_emotion': {
                'patterns': [
                    r'\b(?:ashamed|embarrass\w*|humiliat\w*|afraid|scared|lonely|jealous|insecure|guilty)\b',
                    r'\bI (?:cried|panicked|froze|doubted)\b',
                ],
                'steps': [(1, 1.0), (3, 2.0)],
                'missing': -0.5,
                'strength': 'Names difficult emotions directly',
                'weakness': 'No uncomfortable emotion is ever admitted',
                'quick_win': 'Name one feeling you would rather not admit and when you felt it',
            },
            'physical_symptom': {
                'patterns': [
                    r'\bmy (?:hands|fingers|heart|stomach|throat|voice) (?:shook|trembled|tightened|dropped|clenched|cracked|pounded)\b',
                ],
                'steps': [(1, 1.0)],
                'strength': 'Shows emotion through the body rather than labeling it',
            },
            'admitted_fault': {
                'patterns': [
                    r'\bI was wrong\b',
                    r'\bmy (?:fault|mistake)\b',
                    r'\bI (?:failed|messed up|let \w+ down)\b',
                    r'\bI didn\'t know\b',
                ],
                'steps': [(1, 1.5)],
                'strength': 'Owns a mistake or limitation',
            },
            'armored_positivity': {
                'patterns': [
                    r'\b(?:never gave up|always positive|stayed strong|no matter what)\b',
                ],
                'steps': [(1, -0.5), (2, -1.0)],
                'weakness': 'Relentless positivity keeps the reader at arm\'s length',
                'quick_win': 'Show one moment where you were not okay',
            },
        },
    },

    INITIATIVE_LEADERSHIP: {
        'baseline': 2.5,
        'labels': [
            (9.0, 'exceptional_initiative'),
            (7.0, 'strong_initiative'),
            (5.0, 'some_initiative'),
            (3.0, 'reactive'),
            (0.0, 'passive'),
        ],
        'signals': {
            'self_directed_action': {
                'patterns': [
                    r'\bI (?:started|founded|launched|created|organized|proposed|initiated|built|designed|pitched)\b',
                    r'\bI (?:decided to|took it upon myself|set out to|convinced)\b',
                ],
                'steps': [(1, 1.5), (2, 2.5), (4, 3.5)],
                'missing': -1.0,
                'strength': 'Self-directed action verbs show you started things, not just joined them',
                'weakness': 'No moment where you initiated something yourself',
                'quick_win': 'Describe the first concrete step you took without being asked',
            },
            'influence': {
                'patterns': [
                    r'\b(?:persuaded|convinced|recruited|mentored|trained|delegated|rallied)\b',
                ],
                'steps': [(1, 1.0), (3, 1.5)],
                'strength': 'Shows influence over other people',
            },
            'reactive_language': {
                'patterns': [
                    r'\b(?:was asked to|was told to|was assigned|was chosen|was selected|was given the)\b',
                    r'\b(?:had to|were required to)\b',
                ],
                'steps': [(1, -0.5), (3, -1.5)],
                'weakness': 'Reactive phrasing ("was asked to", "had to") casts you as following instructions',
                'quick_win': 'Rewrite assigned tasks as choices you made about how to do them',
            },
            'title_without_action': {
                'patterns': [
                    r'\bas (?:president|captain|leader|head|chair)\b',
                    r'\bI (?:was|became) (?:the )?(?:president|captain|leader|head|chair)\b',
                ],
                'steps': [(1, -0.5)],
                'weakness': 'Leans on a title to signal leadership',
                'quick_win': 'Replace the title with one decision only the leader could have made',
            },
        },
    },

    ROLE_CLARITY: {
        'baseline': 3.0,
        'labels': [
            (9.0, 'exceptional_ownership'),
            (7.0, 'clear_ownership'),
            (5.0, 'partial_ownership'),
            (3.0, 'diffuse_role'),
            (0.0, 'hidden_role'),
        ],
        'signals': {
            'role_description': {
                'patterns': [
                    r'\bmy (?:job|role|responsibility|task) (?:was|became)\b',
                    r'\bI (?:was responsible for|was in charge of|handled|managed|oversaw|coordinated)\b',
                    r'\bI (?:wrote|coded|designed|built|taught|ran|led)\b',
                ],
                'steps': [(1, 1.5)],
                'missing': -2.5,
                'strength': 'Your specific role is spelled out',
                'weakness': 'Your personal role is never described',
                'quick_win': 'Add one sentence naming exactly what you were responsible for',
            },
            'failure_ownership': {
                'patterns': [
                    r'\bmy (?:fault|mistake|error)\b',
                    r'\bI (?:failed|messed up|made a mistake|underestimated|overlooked)\b',
                    r'\bI should have\b',
                ],
                'steps': [(1, 1.5)],
                'missing': -1.0,
                'strength': 'Takes ownership of what went wrong',
                'weakness': 'Setbacks are never owned personally',
                'quick_win': 'Name one thing that went wrong because of a choice you made',
            },
            'vague_contribution': {
                'patterns': VAGUE_LANGUAGE,
                'steps': [(1, -0.5), (3, -1.0), (5, -2.0)],
                'weakness': 'Vague verbs ("helped", "was involved in") blur your contribution',
                'quick_win': 'Swap "helped with" for the concrete thing you did',
            },
        },
    },

    COMMUNITY_IMPACT: {
        'baseline': 2.5,
        'labels': [
            (8.5, 'transformative_impact'),
            (7.0, 'meaningful_impact'),
            (5.0, 'some_impact'),
            (3.5, 'claimed_impact'),
            (0.0, 'no_impact'),
        ],
        'signals': {
            'named_beneficiaries': {
                'patterns': [
                    r'\b(?:neighbors?|residents|families|kids|children|seniors|patients|classmates|refugees|immigrants)\b',
                    r'\bour (?:community|neighborhood|town|school)\b',
                ],
                'steps': [(1, 1.0), (3, 1.5)],
                'missing': -1.0,
                'strength': 'The people who benefited are named',
                'weakness': 'It is unclear who the work served',
                'quick_win': 'Name the specific group you served and one person in it',
            },
            'measured_outcome': {
                'patterns': [
                    r'\b\d+\s*(?:people|students|families|kids|meals|books|dollars|volunteers)\b',
                    r'\b(?:raised|collected|served|tutored|donated|distributed)\b',
                ],
                'steps': [(1, 1.0), (3, 2.0)],
                'strength': 'Impact is measured in concrete outcomes',
                'quick_win': 'Quantify what changed: meals served, dollars raised, students tutored',
            },
            'sustained_change': {
                'patterns': [
                    r'\b(?:still runs|continues to|is still|every week|every year|now has|permanent|sustainable)\b',
                ],
                'steps': [(1, 1.0)],
                'strength': 'The change outlasts your involvement',
            },
            'generic_mission': {
                'patterns': GENERIC_MISSION,
                'steps': [(1, -1.0), (2, -1.5)],
                'weakness': 'Generic mission language ("make a difference") replaces evidence of impact',
                'quick_win': 'Cut "make a difference" and show the difference instead',
            },
        },
    },

    INTELLECTUAL_VITALITY: {
        'baseline': 2.5,
        'labels': [
            (8.5, 'intellectual_spark'),
            (7.0, 'genuine_curiosity'),
            (5.0, 'engaged'),
            (3.5, 'academic_interest'),
            (0.0, 'detached'),
        ],
        'signals': {
            'curiosity_markers': {
                'patterns': [
                    r'\bI (?:wondered|asked myself|couldn\'t stop thinking|became obsessed|needed to know)\b',
                    r'\b(?:why|how) (?:does|do|did|could|would)\b',
                    r'\brabbit hole\b',
                ],
                'steps': [(1, 1.0), (3, 2.0)],
                'missing': -0.5,
                'strength': 'Shows a question you chased because you wanted to know',
                'weakness': 'Interest is asserted but no real question is pursued',
                'quick_win': 'Write down the exact question that kept you up at night',
            },
            'self_directed_learning': {
                'patterns': [
                    r'\bI (?:read|researched|taught myself|experimented|tested|built|coded|tinkered)\b',
                    r'\bon my own\b',
                ],
                'steps': [(1, 1.0), (3, 1.5)],
                'strength': 'Learning goes beyond the assignment',
            },
            'domain_terms': {
                'patterns': [
                    r'\b(?:hypothesis|theorem|algorithm|equation|molecule|enzyme|variable|dataset|proof|protein|circuit)s?\b',
                ],
                'steps': [(1, 0.5), (3, 1.0)],
                'strength': 'Uses the real vocabulary of the field',
            },
            'grade_focus': {
                'patterns': [
                    r'\b(?:got an A|straight A\'s|top of my class|highest grade|perfect score)\b',
                ],
                'steps': [(1, -1.0)],
                'weakness': 'Grades stand in for curiosity',
                'quick_win': 'Replace the grade with what you discovered while earning it',
            },
        },
    },

    IDENTITY: {
        'baseline': 2.5,
        'labels': [
            (8.5, 'vivid_self'),
            (7.0, 'clear_self'),
            (5.0, 'emerging_self'),
            (3.5, 'resume_self'),
            (0.0, 'absent_self'),
        ],
        'signals': {
            'self_definition': {
                'patterns': [
                    r'\bI am (?:the kind of|someone who|a person who)\b',
                    r'\bwho I am\b',
                    r'\bpart of me\b',
                    r'\bI\'m the (?:one|kind)\b',
                ],
                'steps': [(1, 1.0), (2, 1.5)],
                'strength': 'States something specific about who you are',
            },
            'values': {
                'patterns': [
                    r'\bI (?:care about|believe in|value|refuse to|can\'t stand)\b',
                    r'\bmatters? to me\b',
                ],
                'steps': [(1, 1.0), (3, 1.5)],
                'missing': -0.5,
                'strength': 'Values are made explicit',
                'weakness': 'The reader never learns what you care about',
                'quick_win': 'Add one sentence about what you will not compromise on, and why',
            },
            'heritage_and_roots': {
                'patterns': [
                    r'\bmy (?:grandmother|grandfather|abuela|abuelo|mother|father|family|culture|heritage|language)\b',
                ],
                'steps': [(1, 0.5), (3, 1.0)],
                'strength': 'Connects identity to family or culture',
            },
            'quirks': {
                'patterns': [
                    r'\bI (?:collect|obsess over|secretly|always carry|can\'t help)\b',
                ],
                'steps': [(1, 1.0)],
                'strength': 'A specific quirk makes you memorable',
            },
            'resume_listing': {
                'patterns': [
                    r'\b(?:I was also|I am also|in addition to|as well as being)\b',
                ],
                'steps': [(2, -1.0)],
                'weakness': 'Reads like a resume listing rather than a portrait',
                'quick_win': 'Drop one listed credential and spend the words on a revealing moment',
            },
        },
    },

    PERSONAL_GROWTH: {
        'baseline': 2.5,
        'labels': [
            (8.5, 'transformative_growth'),
            (7.0, 'clear_growth'),
            (5.0, 'some_growth'),
            (3.5, 'stated_growth'),
            (0.0, 'no_growth'),
        ],
        'signals': {
            'before_after': {
                'patterns': [
                    r'\b(?:used to|at first|before,|back then|in the beginning)\b',
                    r'\b(?:now I|today I|these days|I no longer|I have since)\b',
                ],
                'steps': [(1, 1.0), (2, 2.0)],
                'missing': -1.0,
                'strength': 'Contrasts who you were with who you are',
                'weakness': 'No clear before and after',
                'quick_win': 'Pair one "I used to" sentence with a matching "now I"',
            },
            'struggle': {
                'patterns': [
                    r'\b(?:struggled|failed|doubted|frustrat\w*|gave up|almost quit)\b',
                ],
                'steps': [(1, 1.0), (3, 1.5)],
                'strength': 'The messy middle of growth is shown',
            },
            'insight': {
                'patterns': REFLECTION,
                'steps': [(1, 0.8), (3, 1.2)],
                'strength': 'Growth is articulated as insight',
            },
            'cliche_lesson': {
                'patterns': [
                    r'\b(?:taught me the (?:value|importance) of|made me a better person|helped me grow)\b',
                    r'\b(?:never give up|hard work pays off|everything happens for a reason)\b',
                ],
                'steps': [(1, -1.0), (2, -1.5)],
                'weakness': 'The lesson is a cliche rather than something you discovered',
                'quick_win': 'Replace the moral with the specific behavior that changed',
            },
        },
    },

    CONTEXT_CIRCUMSTANCES: {
        'baseline': 3.0,
        'labels': [
            (8.5, 'illuminating_context'),
            (7.0, 'clear_context'),
            (5.0, 'some_context'),
            (3.5, 'thin_context'),
            (0.0, 'missing_context'),
        ],
        'signals': {
            'circumstance_detail': {
                'patterns': [
                    r'\b(?:first-generation|first generation|low-income|single (?:mother|father|parent)|immigra\w*)\b',
                    r'\b(?:translate[ds]?|translating|interpreter) for\b',
                    r'\b(?:worked|work) (?:\d+ hours|after school|nights|weekends)\b',
                    r'\b(?:took care of|cared for|raised) my (?:brother|sister|siblings|grandmother|grandfather)\b',
                    r'\b(?:evict\w*|homeless\w*|shelter|food stamps|unemploy\w*|illness|diagnos\w*)\b',
                ],
                'steps': [(1, 1.5), (3, 2.5)],
                'missing': -1.0,
                'strength': 'Circumstances are described concretely',
                'weakness': 'The circumstances that shaped you are not explained',
                'quick_win': 'Describe one ordinary day that shows the constraint you lived with',
            },
            'response_to_circumstance': {
                'patterns': [
                    r'\bI (?:learned to|figured out|found a way|made time|managed to|adapted)\b',
                ],
                'steps': [(1, 1.0), (2, 1.5)],
                'strength': 'Shows how you responded, not only what happened',
                'quick_win': 'Follow the hardship with one concrete thing you did about it',
            },
            'victim_framing': {
                'patterns': [
                    r'\b(?:it wasn\'t fair|nobody helped|no one cared|I had no choice)\b',
                ],
                'steps': [(1, -0.5), (2, -1.0)],
                'weakness': 'Framing leans on grievance rather than agency',
                'quick_win': 'Shift the last paragraph from what was done to you to what you did',
            },
        },
    },

    FIT_TRAJECTORY: {
        'baseline': 3.0,
        'labels': [
            (9.0, 'compelling_trajectory'),
            (7.0, 'clear_trajectory'),
            (5.0, 'emerging_trajectory'),
            (3.0, 'vague_trajectory'),
            (0.0, 'no_trajectory'),
        ],
        'signals': {
            'future_connection': {
                'patterns': [
                    r'\b(?:I plan to|I want to|I hope to|I will|I intend to)\b',
                    r'\b(?:major in|study|pursue a degree in|career in)\b',
                ],
                'steps': [(1, 1.5), (3, 2.0)],
                'missing': -1.0,
                'strength': 'Connects the story to a concrete next step',
                'weakness': 'No link between the story and what you will study next',
                'quick_win': 'End with one concrete thing you will do in college with this',
            },
            'institution_specific': {
                'patterns': [
                    r'\b(?:UC|University of California)\b',
                    r'\b(?:UCLA|UCSD|UCSB|UCI|UCD|UCSC|Berkeley)\b',
                    r'\b(?:professor|lab|research center|program|course)s? (?:at|in|like)\b',
                ],
                'steps': [(1, 1.5)],
                'strength': 'Mentions specific programs or resources',
            },
            'field_depth': {
                'patterns': [
                    r'\b(?:research|internship|project|lab|competition|publication)s?\b',
                ],
                'steps': [(1, 0.5), (3, 1.0)],
                'strength': 'Prior engagement with the field is evident',
            },
            'generic_mission': {
                'patterns': GENERIC_MISSION,
                'steps': [(1, -1.0), (2, -2.0)],
                'weakness': 'Goals are stated as generic missions ("change the world")',
                'quick_win': 'Replace the mission statement with a specific problem you want to work on',
            },
        },
    },
}


# ==================== OPENING HOOK PATTERNS ====================

# Priority-ordered: first family to match the opening sentences wins
HOOK_TYPES: List[Tuple[str, Dict]] = [
    ('dialogue', {
        'patterns': [r'^\s*["“]'],
        'score': 3.5,
        'strength': 'Opens mid-conversation with dialogue',
    }),
    ('question', {
        'patterns': [
            r'^(?:Have|Do|Did|Would|Could|Can) you\b',
            r'^What (?:if|would|could|do|did|does)\b',
            r'^How (?:do|does|did|can|could|many|much)\b',
            r'^[^.!]{5,120}\?',
        ],
        'score': 2.0,
        'strength': 'Opens with a question that invites the reader in',
    }),
    ('in_medias_res', {
        'patterns': [
            r'^I (?:dragged|pulled|pushed|ran|sprinted|jumped|leaped|threw|rushed|grabbed|slammed)\b',
            r'^(?:The|My) \w+ (?:shattered|exploded|collapsed|crashed|snapped)\b',
            r'^My (?:hands|fingers|heart|stomach|throat|voice) (?:shook|trembled|tightened|dropped|clenched|cracked|pounded)\b',
        ],
        'score': 3.5,
        'strength': 'Drops the reader straight into action',
    }),
    ('sensory_scene', {
        'patterns': [
            r'^\d{1,2}:\d{2}\s*(?:AM|PM)?',
            r'^I (?:stand|stood|sit|sat|kneel|knelt) (?:on|in|at|by|near)\b',
            r'^The (?:smell|sound|scent|taste|lights?|hum|buzz)\b',
        ],
        'score': 3.0,
        'strength': 'Opens on a concrete sensory scene',
    }),
    ('generic_statement', {
        'patterns': [
            r'^(?:From|Since|Throughout|During) (?:an early age|my (?:life|time|childhood|youth))',
            r'^(?:I have always|I\'ve always|I always)\b',
            r'^(?:Many|Some|Most) people\b',
            r'^(?:Growing up|As a child|When I was young)\b',
            r'^(?:Ever since|All my life)\b',
            r'^[A-Z]\w+ (?:is|are) (?:defined|described) as\b',
        ],
        'score': -0.5,
        'weakness': 'Opens with a familiar, generic statement',
    }),
]

BOLD_STATEMENT_SCORE = 2.0
NO_HOOK_PENALTY = -1.0

HOOK_MODIFIERS = {
    'short_opening': {
        'max_words': 12,
        'delta': 1.0,
        'strength': 'The first sentence is short and punchy',
    },
    'long_opening': {
        'min_words': 35,
        'delta': -1.0,
        'weakness': 'The first sentence is long and slow to get going',
    },
    'concrete_opening': {
        'patterns': SENSORY_DETAIL + [r'\b\d+\b'],
        'delta': 1.0,
        'strength': 'Concrete detail appears in the first lines',
    },
}
