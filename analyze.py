#!/usr/bin/env python3
"""
Analyze CLI - essay diagnostics end to end

Scores an essay for its prompt category, optionally cross-references it with
an applicant profile, recommends revision foci and writes one generation
prompt per focus. Uses the Claude API by default.

Usage:
    python analyze.py --essay essays/maria_piq5.txt --prompt-type challenge
    python analyze.py --essay essay.json --prompt-type piq1_leadership --profile profiles/maria.json
    python analyze.py --essay essay.txt --prompt-type talent --rule-based   # no API calls

Output:
    outputs/analyses/{name}_analysis.json
    outputs/reports/{name}_report.md
    outputs/prompts/{name}_{focus}_prompt.md
    outputs/revisions/{name}_{focus}_revision.md   (with --generate)
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from essay_diagnostic import (
    EssayOrchestrator, GenerationRequest, PromptType, StudentProfile, StyleVariant,
    build_generation_prompt, generate_revision, global_context_from, recommend_focus,
)
from essay_diagnostic.config import get_settings
from essay_diagnostic.logging_helper import configure_logging
from essay_diagnostic.models import DimensionScore
from essay_diagnostic.weights import format_weight, get_weight_profile
from essay_diagnostic.errors import ConfigurationGap


def load_essay(path: Path):
    """Essay text and a display name from a .txt file or a JSON file with 'text'"""
    if path.suffix == '.json':
        with open(path, 'r') as f:
            data = json.load(f)
        return data.get('text', ''), data.get('student_name') or data.get('name') or path.stem
    return path.read_text(encoding='utf-8'), path.stem


def render_report(name: str, report, foci) -> str:
    lines = [
        f"# Essay Diagnostic Report: {name}",
        "",
        f"**Prompt type:** {report.metadata.prompt_type}",
        f"**Words:** {report.metadata.word_count}",
        f"**Weighted score:** {report.metadata.weighted_score if report.metadata.weighted_score is not None else 'N/A'}/10",
        "",
        "---",
        "",
        "| Dimension | Score | Tier | Level | Weight |",
        "|-----------|-------|------|-------|--------|",
    ]

    try:
        profile = get_weight_profile(report.metadata.prompt_type)
    except ConfigurationGap:
        profile = None

    for dimension, result in report.all_results().items():
        weight = format_weight(profile.weight_of(dimension)) if profile else '-'
        if isinstance(result, DimensionScore):
            lines.append(
                f"| {dimension} | {result.score:.1f} | {result.quality_tier.label} | "
                f"{result.quality_label} | {weight} |"
            )
        else:
            lines.append(f"| {dimension} | - | {result.error} | - | {weight} |")

    lines += ["", "## Revision Focus", ""]
    if not foci:
        lines.append("No revision focus triggered.")
    for focus in foci:
        lines.append(f"{focus.priority}. **{focus.focus_area.value}** - {focus.reason}")
        lines.append(f"   - Strategy: {focus.strategy}")
        if focus.content_pivot_suggested:
            lines.append("   - Consider a content pivot, not just a polish")

    if report.holistic_context:
        holistic = report.holistic_context
        lines += [
            "",
            "## Holistic Context",
            "",
            f"- Consistency: {holistic.consistency_check.status} ({holistic.consistency_check.score}/10)",
            f"- Strategic fit: {holistic.strategic_fit.status} ({holistic.strategic_fit.score}/10)",
            f"- Motifs: {', '.join(holistic.narrative_quality.recurring_motifs) or 'none'}",
        ]
        for archetype in holistic.archetype_candidates:
            lines.append(f"- Archetype: {archetype.archetype} ({archetype.score}/10)")
        for flag in holistic.risk_flags.flags:
            lines.append(f"- ⚠ Risk ({flag.type}, {flag.severity}): {flag.description}")

    return "\n".join(lines) + "\n"


async def run(args, essay_text: str, profile):
    settings = get_settings(api_key=args.api_key)
    orchestrator = EssayOrchestrator(settings=settings, use_api=not args.rule_based)
    try:
        report = await orchestrator.analyze(essay_text, args.prompt_type, profile)

        foci = recommend_focus(report)
        context = global_context_from(report.holistic_context)
        top_archetype = (report.holistic_context.archetype_candidates[0].archetype
                         if report.holistic_context and report.holistic_context.archetype_candidates else None)

        requests = [
            GenerationRequest(
                original_text_excerpt=essay_text,
                focus_area=focus.focus_area,
                diagnostic_context=report,
                style_variant=args.style,
                target_archetype=top_archetype,
                global_context=context,
                content_pivot=args.content_pivot if focus.content_pivot_suggested else None,
            )
            for focus in foci
        ]

        revisions = {}
        if args.generate and requests:
            if orchestrator.client is None:
                print("⚠ --generate needs an API key; skipping revision generation")
            else:
                top = requests[0]
                revisions[top.focus_area] = await generate_revision(top, orchestrator.client, settings)
    finally:
        await orchestrator.close()

    return report, foci, requests, revisions


def main():
    parser = argparse.ArgumentParser(
        description='Diagnose a personal insight essay and build revision prompts',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Prompt types: {', '.join(p.value for p in PromptType)}
Styles: {', '.join(s.value for s in StyleVariant)}

Examples:
    # Basic analysis (API-based by default)
    python analyze.py --essay essay.txt --prompt-type challenge

    # With applicant profile (enables holistic analysis)
    python analyze.py --essay essay.txt --prompt-type leadership --profile profile.json

    # Rule-based only (no API calls)
    python analyze.py --essay essay.txt --prompt-type talent --rule-based
        """
    )

    parser.add_argument('--essay', required=True, help='Path to essay .txt or JSON file with "text"')
    parser.add_argument('--prompt-type', required=True, help='Prompt category (e.g. piq5_challenge or challenge)')
    parser.add_argument('--profile', help='Path to applicant profile JSON (optional)')
    parser.add_argument('--style', default='standard', help='Style variant for generation prompts')
    parser.add_argument('--content-pivot', help='New moment to build around when a content pivot is suggested')
    parser.add_argument('--generate', action='store_true', help='Send the top-priority prompt to the model')
    parser.add_argument('--output', default='./outputs', help='Output directory base (default: ./outputs)')
    parser.add_argument('--rule-based', action='store_true', help='Use rule-based scoring instead of API')
    parser.add_argument('--api-key', help='Anthropic API key (optional, can also use ANTHROPIC_API_KEY env var)')
    parser.add_argument('--log-dir', help='Also write logs to this directory')

    args = parser.parse_args()
    configure_logging(get_settings().log_level, args.log_dir)

    essay_path = Path(args.essay)
    if not essay_path.exists():
        print(f"ERROR: Essay not found: {essay_path}")
        sys.exit(1)

    profile = None
    if args.profile:
        profile_path = Path(args.profile)
        if not profile_path.exists():
            print(f"ERROR: Profile not found: {profile_path}")
            sys.exit(1)
        with open(profile_path, 'r') as f:
            profile = StudentProfile.from_dict(json.load(f))

    essay_text, name = load_essay(essay_path)

    print(f"\n{'='*60}")
    print("ANALYZING ESSAY")
    print(f"{'='*60}")
    print(f"Essay: {name}")
    print(f"Prompt type: {args.prompt_type}")
    print(f"Words: {len(essay_text.split())}")
    print("  Using rule-based scoring" if args.rule_based else "  Using API-based scoring (Claude)")

    report, foci, requests, revisions = asyncio.run(run(args, essay_text, profile))

    print("\n✓ Analysis complete")
    if report.metadata.weighted_score is not None:
        print(f"  Weighted score: {report.metadata.weighted_score}/10")
    if report.metadata.failed_dimensions:
        print(f"  ⚠ Failed: {', '.join(report.metadata.failed_dimensions)}")
    for focus in foci:
        print(f"  [{focus.priority}] {focus.focus_area.value}: {focus.reason}")

    output_base = Path(args.output)
    analysis_dir = output_base / "analyses"
    report_dir = output_base / "reports"
    prompt_dir = output_base / "prompts"
    for directory in (analysis_dir, report_dir, prompt_dir):
        directory.mkdir(parents=True, exist_ok=True)

    safe_name = name.replace(' ', '_')

    analysis_path = analysis_dir / f"{safe_name}_analysis.json"
    with open(analysis_path, 'w') as f:
        json.dump({
            'essay': name,
            'report': report.to_dict(),
            'recommended_focus': [focus.to_dict() for focus in foci],
        }, f, indent=2)

    report_path = report_dir / f"{safe_name}_report.md"
    report_path.write_text(render_report(name, report, foci), encoding='utf-8')

    for request in requests:
        prompt = build_generation_prompt(request)
        prompt_path = prompt_dir / f"{safe_name}_{request.focus_area.value}_prompt.md"
        prompt_path.write_text(
            f"# System\n\n{prompt.system_instruction}\n\n# User\n\n{prompt.user_instruction}\n",
            encoding='utf-8',
        )

    if revisions:
        revision_dir = output_base / "revisions"
        revision_dir.mkdir(parents=True, exist_ok=True)
        for focus_area, options in revisions.items():
            revision_path = revision_dir / f"{safe_name}_{focus_area.value}_revision.md"
            revision_path.write_text("\n\n---\n\n".join(options) + "\n", encoding='utf-8')
            print(f"\n✓ Revision options saved: {revision_path}")

    print(f"\n✓ Analysis saved: {analysis_path}")
    print(f"✓ Report saved: {report_path}")
    print(f"✓ {len(requests)} generation prompt(s) saved to: {prompt_dir}")


if __name__ == '__main__':
    main()
