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

"""Utilities for sanitizing LLM outputs."""

import ast
import io
import re
import tokenize
import warnings

_FENCE = "```"
# ```lang\n ... ``` -> inner text
_FENCED_BLOCK_RE = re.compile(r"```[a-zA-Z0-9_-]*\r?\n(.*?)```", re.DOTALL)
_LABEL_RE = re.compile(r"^(title|body):", re.IGNORECASE)
_QUOTES = ('"', "'")
_TRAILING_TOKENS = (tokenize.NEWLINE, tokenize.NL, tokenize.ENDMARKER)


def _is_single_string_literal(text: str) -> bool:
    """True when ``text`` tokenizes to exactly one string token."""
    try:
        tokens = [
            tok
            for tok in tokenize.generate_tokens(io.StringIO(text).readline)
            if tok.type not in _TRAILING_TOKENS
        ]
    except (tokenize.TokenError, SyntaxError):
        return False

    return len(tokens) == 1 and tokens[0].type == tokenize.STRING


def _unquote(text: str) -> str:
    """
    If the whole text is a single quoted string literal, return its
    unescaped content. Concatenated literals, trailing comments and anything
    that does not evaluate to a plain string are returned untouched.
    """
    if len(text) < 2 or text[0] not in _QUOTES or text[-1] != text[0]:
        return text

    try:
        with warnings.catch_warnings():
            # invalid escape sequences only warn
            warnings.simplefilter("ignore")
            if not _is_single_string_literal(text):
                return text
            value = ast.literal_eval(text)
    except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
        return text

    return value if isinstance(value, str) else text


def _normalize_once(text: str) -> str:
    result = text.strip()
    result = _unquote(result)
    result = _FENCED_BLOCK_RE.sub(r"\1", result)
    result = result.replace(_FENCE, "")
    result = result.replace("\r\n", "\n")
    return result.strip()


def normalize_model_output(text: str) -> str:
    """
    Normalizes raw text returned by a model.

    Trims whitespace, unwraps a response that was returned as one quoted
    string literal (``"line one\\nline two"``), replaces fenced code blocks
    with their inner content, drops stray fence markers and converts CRLF
    line endings.

    Never raises. Every pass that changes the text makes it strictly
    shorter, so repeating it until nothing changes terminates and makes the
    function idempotent.

    Args:
        text: Raw aggregated model output.

    Returns:
        The cleaned text.
    """
    if not text:
        return ""

    current = text
    while True:
        cleaned = _normalize_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned


def strip_labels(text: str) -> str:
    """
    Remove leading ``Title:`` / ``Body:`` labels (case-insensitive) from
    each line. Unlabeled lines are kept exactly as they are.
    """
    lines = []
    for line in text.split("\n"):
        trimmed = line.strip()
        match = _LABEL_RE.match(trimmed)
        if match:
            lines.append(trimmed[match.end() :].strip())
        else:
            lines.append(line)

    return "\n".join(lines)
