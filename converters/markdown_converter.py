"""Markdown converter for handbook HTML bodies."""

import html
import logging
import re
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup, Tag
from markdownify import ASTERISK, ATX
from markdownify import MarkdownConverter as MarkdownifyConverter

from models import HandbookItem, RenderedDocument, ResolvedItem
from .rules import DEFAULT_RULES, ConversionRule


class MarkdownConverter(MarkdownifyConverter):
    """
    Converts handbook HTML into markdown.

    This class extends markdownify.MarkdownConverter with an ordered list of
    structural rewrite rules. Rules run over the parsed tree before markdownify
    sees it; the first rule matching an element wins. Rules returning markdown
    are spliced in through placeholders after conversion so their text is not
    re-escaped or re-wrapped.
    """

    PLACEHOLDER = 'MDRULEBLOCK{index}MDRULEBLOCK'
    PLACEHOLDER_LINE = re.compile(r'^([^\n]*?)MDRULEBLOCK(\d+)MDRULEBLOCK', re.MULTILINE)

    def __init__(
        self,
        rules: Optional[Iterable[ConversionRule]] = None,
        logger: Optional[logging.Logger] = None,
        **kwargs
    ):
        """Initialize converter with rewrite rules and markdownify options."""
        markdownify_options = {
            'heading_style': ATX,  # Use # for headings
            'strong_em_symbol': ASTERISK,  # *em* and **strong**
            'bullets': '-',
        }
        markdownify_options.update(kwargs)

        super().__init__(**markdownify_options)

        self.rules: List[ConversionRule] = list(DEFAULT_RULES if rules is None else rules)
        self.logger = logger or logging.getLogger('handbook_markdown_sync.converters.markdown_converter')

    def convert_fragment(self, html_content: str) -> str:
        """
        Convert an HTML fragment to markdown.

        The result depends only on the input; no state is kept between calls.

        Args:
            html_content: Rendered HTML body

        Returns:
            Markdown text without leading or trailing blank lines
        """
        soup = self._parse_html(html_content or '')

        blocks: List[str] = []
        self._apply_rules(soup, soup, blocks)

        markdown = self.convert_soup(soup)
        markdown = self._final_cleanup(markdown)

        markdown = self._splice_blocks(markdown, blocks)

        return markdown.strip()

    def render_document(self, item: HandbookItem) -> str:
        """Return the full markdown document for an item: title heading plus body."""
        title = html.unescape(item.title).strip()
        return f"# {title}\n\n{self.convert_fragment(item.content)}"

    def render(self, resolved: ResolvedItem) -> RenderedDocument:
        """Render a resolved item into a document bound to its output path."""
        self.logger.debug(f"Rendering item {resolved.item.id} as {resolved.filename}")
        return RenderedDocument(path=resolved.path, markdown=self.render_document(resolved.item))

    def _parse_html(self, html_content: str) -> BeautifulSoup:
        """Parse HTML content with BeautifulSoup."""
        return BeautifulSoup(html_content, 'lxml')

    def _match_rule(self, tag: Tag) -> Optional[ConversionRule]:
        for rule in self.rules:
            if rule.matches(tag):
                return rule
        return None

    def _apply_rules(self, soup: BeautifulSoup, node: Tag, blocks: List[str]) -> None:
        """Walk the tree in document order, applying the first matching rule per element."""
        for child in list(node.children):
            if not isinstance(child, Tag):
                continue

            rule = self._match_rule(child)
            if rule is None:
                self._apply_rules(soup, child, blocks)
                continue

            replacement = rule.replace(child)
            if replacement is None:
                self._apply_rules(soup, child, blocks)
            elif replacement == '':
                self.logger.debug(f"Rule '{rule.name}' dropped <{child.name}>")
                child.decompose()
            else:
                placeholder = soup.new_tag('p')
                placeholder.string = self.PLACEHOLDER.format(index=len(blocks))
                blocks.append(replacement)
                child.replace_with(placeholder)

    def _splice_blocks(self, markdown: str, blocks: List[str]) -> str:
        """
        Replace placeholders with rule output, keeping list and quote nesting.

        Every line after the first gets the placeholder's line prefix, with list
        markers blanked out (``- `` becomes two spaces, ``> `` is kept), so a
        fence inside a list item or blockquote stays inside it.
        """
        def replace(match):
            prefix = match.group(1)
            lines = blocks[int(match.group(2))].split('\n')
            continuation = re.sub(r'[^\s>]', ' ', prefix)
            indented = [lines[0]]
            for line in lines[1:]:
                indented.append(continuation + line if line else continuation.rstrip())
            return prefix + '\n'.join(indented)

        return self.PLACEHOLDER_LINE.sub(replace, markdown)

    def _final_cleanup(self, markdown: str) -> str:
        """Collapse runs of blank lines."""
        return re.sub(r'\n{3,}', '\n\n', markdown)


__all__ = ['MarkdownConverter']
