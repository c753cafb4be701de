# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

"""
Prompts for the two generation stages.
"""

# -----------------------------------------------------------------------------
# Factual Summary Prompts
# -----------------------------------------------------------------------------

SUMMARY_PROMPT = """Summarize the following git diff with strict factual accuracy.
Produce TWO sections:
1. A short commit title (max 60 chars)
2. A 3-40 line commit body describing the key changes.

Rules:
- Title should be imperative tense.
- Body should describe files, functions, and intent.
- Do NOT invent or hallucinate.
- Keep it concise.

Diff:
{diff}
"""

SUMMARY_OUTPUT_FORMAT = """

OUTPUT FORMAT:
TITLE (one line)
BLANK LINE
BODY (2-4 lines)
"""


# -----------------------------------------------------------------------------
# Style Prompts
# -----------------------------------------------------------------------------

STYLE_PROMPT = """Rewrite the following commit (title + body) but:
- KEEP the factual content *exactly*.
- Apply this tone: {tone}
- Make it match that tone while staying readable.
- Maintain title + body structure.
- 1 title line, 2-40 body lines.

Original commit:
{summary}
"""


def build_summary_prompt(diff: str) -> str:
    return SUMMARY_PROMPT.format(diff=diff) + SUMMARY_OUTPUT_FORMAT


def build_style_prompt(tone: str, summary: str) -> str:
    return STYLE_PROMPT.format(tone=tone, summary=summary)
