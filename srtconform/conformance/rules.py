"""Ordered text rewrite rules of the house style.

Rules are applied in table order, each to the output of the previous one.
Later rules rely on the normalization done by earlier ones.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Tuple


@dataclass(frozen=True)
class TextRule:
    """A single text rewrite and the problem it reports."""
    name: str
    rewrite: Callable[[str], str]
    message: str


def _sub(pattern: str, replacement: str) -> Callable[[str], str]:
    compiled = re.compile(pattern)
    return lambda text: compiled.sub(replacement, text)


def _collapse_spacing(text: str) -> str:
    return re.sub(r' {2,}', ' ', text.replace('\t', ' '))


def _strip_line_edges(text: str) -> str:
    return re.sub(r'\s*\n\s*', '\n', text).strip()


def _straighten_quotes(text: str) -> str:
    return re.sub(r'[‘’]', "'", re.sub(r'[“”]', '"', text))


TEXT_RULES: List[TextRule] = [
    TextRule("excess_spacing", _collapse_spacing, "Excess spacing"),
    TextRule("line_edge_spacing", _strip_line_edges, "Spaces at start or end of lines"),
    TextRule("ellipsis_character", _sub(r'…', '...'), "Ellipsis character"),
    TextRule("double_dots", _sub(r'(?<!\.)\.\.(?!\.)', '...'), "Double dots not triple dots"),
    TextRule("excess_dots", _sub(r'\.{4,}', '...'), "More than 3 dots in a row"),
    TextRule("space_after_ellipsis", _sub(r'(?<=\S\.\.\.)(?=\S)', ' '), "No space after ..."),
    TextRule("long_hyphen", _sub(r'[–—]', '-'), "Long hyphen not short hyphen"),
    TextRule("space_after_hyphen", _sub(r'(?m)^-(?=[^ \n])', '- '), "No space after hyphen"),
    TextRule("curly_quotes", _straighten_quotes, "Non-standard quotation marks/apostrophes"),
    TextRule("hash_for_music", _sub(r'#', '♪'), "Hash character instead of musical note"),
]


def apply_text_rules(text: str, rules: List[TextRule] = TEXT_RULES) -> Tuple[str, List[str]]:
    """
    Run text through the rewrite rules.

    Args:
        text: Subtitle text
        rules: Rules to apply, in order

    Returns:
        Tuple of (rewritten text, messages of the rules that changed it)
    """
    messages: List[str] = []
    for rule in rules:
        new_text = rule.rewrite(text)
        if new_text != text:
            text = new_text
            messages.append(rule.message)
    return text, messages


__all__ = ["TextRule", "TEXT_RULES", "apply_text_rules"]
