"""Converters package for handbook HTML to markdown conversion."""

from .markdown_converter import MarkdownConverter
from .rules import DEFAULT_RULES, ConversionRule


def convert_html(html_content, rules=None):
    """
    Convenience function converting one HTML fragment with the default options.

    Args:
        html_content: Rendered HTML body
        rules: Optional ordered list of ConversionRule objects

    Returns:
        str: Markdown text

    Example:
        >>> from converters import convert_html
        >>> convert_html('<pre class="brush: bash">echo hi</pre>')
        '```bash\\necho hi\\n```'
    """
    return MarkdownConverter(rules=rules).convert_fragment(html_content)


__all__ = [
    'convert_html',
    'MarkdownConverter',
    'ConversionRule',
    'DEFAULT_RULES'
]
