"""Ask Claude for a short written recap of a year's report."""

import json
import os
import re
import sys
from typing import Optional

from .models import Recap, WrappedReport

DEFAULT_MODEL = "claude-sonnet-4-20250514"

RECAP_PROMPT = '''Here is someone's yearly usage report for Claude Code, as JSON:

{report}

Write a short, upbeat recap of their year. Respond in this exact JSON format:
{{
  "headline": "One sentence summing up the year (max 80 chars)",
  "highlights": [
    "A specific observation grounded in the numbers (max 100 chars)"
  ]
}}

RULES:
- Only use facts present in the report. Do not invent projects, languages or numbers.
- 2-4 highlights.
- No advice, no criticism.'''


def summarize_year(report: WrappedReport, model: str = DEFAULT_MODEL) -> Optional[Recap]:
    """Use Claude API to write a recap of the report.

    Args:
        report: Finished report.
        model: Claude model to use.

    Returns:
        Recap, or None on error.

    Requires:
        ANTHROPIC_API_KEY environment variable.
    """
    try:
        import anthropic
    except ImportError:
        print("Error: anthropic package not installed. Run: pip install anthropic", file=sys.stderr)
        return None

    api_key = os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        print("Error: ANTHROPIC_API_KEY environment variable not set", file=sys.stderr)
        return None

    client = anthropic.Anthropic(api_key=api_key)
    prompt = RECAP_PROMPT.format(report=json.dumps(report.to_dict(), indent=2, ensure_ascii=False))

    try:
        print("Writing recap with Claude...", file=sys.stderr)
        response = client.messages.create(
            model=model,
            max_tokens=800,
            messages=[{"role": "user", "content": prompt}]
        )
        return parse_recap_response(response.content[0].text)

    except anthropic.APIError as e:
        print(f"Error during recap: {e}", file=sys.stderr)
        return None


def parse_recap_response(response_text: str) -> Optional[Recap]:
    """Parse the JSON response from Claude."""
    json_match = re.search(r'\{[\s\S]*\}', response_text)
    if not json_match:
        return None

    try:
        result = json.loads(json_match.group())
    except json.JSONDecodeError:
        return None

    if not isinstance(result, dict) or not isinstance(result.get("headline"), str):
        return None

    highlights = result.get("highlights", [])
    if not isinstance(highlights, list):
        highlights = []
    return Recap(
        headline=result["headline"],
        highlights=[h for h in highlights if isinstance(h, str)],
    )
