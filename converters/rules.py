"""Structural rewrite rules applied to handbook HTML before markdown conversion.

A rule pairs a predicate on a BeautifulSoup tag with a replacement callable.
The replacement returns:

- ``''`` to drop the element entirely,
- a markdown string, spliced verbatim into the output as its own block,
- ``None`` after rewriting the element in place; conversion then continues
  inside it.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from bs4 import Tag

HIDDEN_GLOSSARY_CLASS = 'glossary-item-hidden-content'
SOURCE_TOGGLE_CLASSES = ('show-complete-source', 'less-complete-source')
BRUSH_MARKER = 'brush:'

# First substring found in the class attribute wins
CODE_LANGUAGES: Tuple[Tuple[str, str], ...] = (
    ('css', 'css'),
    ('bash', 'bash'),
    ('php', 'php'),
    ('yaml', 'yaml'),
    ('xml', 'xml'),
    ('jscript', 'javascript'),
)

# Applied in order to the raw inner HTML of highlighted code blocks
UNESCAPE_PASSES: Tuple[Tuple[str, str], ...] = (
    (r'\\\\', '\\\\'),
    (r'\\\*', '*'),
    (r'\\-', '-'),
    (r'(?m)^\\\+ ', '+ '),
    (r'\\=', '='),
    (r'\\`', '`'),
    (r'\\~~~', '~~~'),
    (r'\\\[', '['),
    (r'\\\]', ']'),
    (r'\\>', '>'),
    (r'\\_', '_'),
    (r'&quot;', '"'),
    (r'&lt;', '<'),
    (r'&gt;', '>'),
    (r'&amp;', '&'),
)

LEADING_BREAKS = re.compile(r'^(?:<br\s*/?>)+\n?(?:[ \t]*\n)?')


@dataclass(frozen=True)
class ConversionRule:
    """A named (predicate, replacement) pair."""

    name: str
    matches: Callable[[Tag], bool]
    replace: Callable[[Tag], Optional[str]]


def class_attribute(tag: Tag) -> str:
    """Return the class attribute as the original space-separated string."""
    classes = tag.get('class')
    if not classes:
        return ''
    if isinstance(classes, str):
        return classes
    return ' '.join(classes)


def drop_element(tag: Tag) -> str:
    return ''


def is_hidden_glossary(tag: Tag) -> bool:
    return class_attribute(tag) == HIDDEN_GLOSSARY_CLASS


def is_source_toggle(tag: Tag) -> bool:
    classes = class_attribute(tag)
    return any(marker in classes for marker in SOURCE_TOGGLE_CLASSES)


def is_definition_term(tag: Tag) -> bool:
    return tag.name == 'dt'


def strengthen_term(tag: Tag) -> None:
    """Wrap the term's children in a <strong> element."""
    if not tag.contents:
        return None
    root = tag
    while root.parent is not None:
        root = root.parent
    strong = root.new_tag('strong')
    for child in list(tag.contents):
        strong.append(child.extract())
    tag.append(strong)
    return None


def is_highlighted_code(tag: Tag) -> bool:
    return tag.name == 'pre' and BRUSH_MARKER in class_attribute(tag)


def detect_code_language(tag: Tag) -> str:
    """Infer the fence language from the brush class, '' when unknown."""
    classes = class_attribute(tag)
    for needle, language in CODE_LANGUAGES:
        if needle in classes:
            return language
    return ''


def unescape_code(code: str) -> str:
    """Undo HTML entities and markdown backslash escapes in raw code."""
    for pattern, replacement in UNESCAPE_PASSES:
        code = re.sub(pattern, replacement, code)
    return code


def extract_code(tag: Tag) -> str:
    """Return the unescaped, de-wrapped inner content of a highlighted block."""
    code = unescape_code(tag.decode_contents())
    code = LEADING_BREAKS.sub('', code)
    if code.startswith('<p>'):
        code = code[len('<p>'):]
    if code.endswith('</p>'):
        code = code[:-len('</p>')]
    if code.startswith('\n'):
        code = code[1:]
    return code.rstrip('\n')


def fence_code(tag: Tag) -> str:
    return f"```{detect_code_language(tag)}\n{extract_code(tag)}\n```"


DEFAULT_RULES: List[ConversionRule] = [
    ConversionRule('hidden_glossary', is_hidden_glossary, drop_element),
    ConversionRule('source_toggle', is_source_toggle, drop_element),
    ConversionRule('definition_term', is_definition_term, strengthen_term),
    ConversionRule('highlighted_code', is_highlighted_code, fence_code),
]


__all__ = [
    'ConversionRule',
    'DEFAULT_RULES',
    'CODE_LANGUAGES',
    'UNESCAPE_PASSES',
    'class_attribute',
    'detect_code_language',
    'extract_code',
    'unescape_code',
    'fence_code'
]
