import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import mistune
from mistune.util import escape
from pygments import highlight
from pygments.formatter import Formatter
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.token import Token
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

GFM_PLUGINS = ["table", "strikethrough", "task_lists", "url"]
PLAIN_LANGUAGE = "plaintext"


class LineSpanFormatter(Formatter):
    """
    Emit one ``<span data-line="">`` per source line with inline token colours.

    A line without tokens gets a single space so blank lines keep their height.
    """

    name = "Line spans"
    aliases = ["linespans"]

    def __init__(self, **options):
        super().__init__(**options)
        self._css_cache: Dict[object, str] = {}

    @property
    def background_color(self) -> str:
        return self.style.background_color

    @property
    def text_color(self) -> Optional[str]:
        color = self.style.style_for_token(Token.Text)["color"]
        return f"#{color}" if color else None

    def format(self, tokensource, outfile):
        rendered = []
        for line in split_lines(tokensource):
            body = "".join(self._format_token(ttype, value) for ttype, value in line)
            rendered.append(f'<span data-line="">{body or " "}</span>')
        outfile.write("\n".join(rendered))

    def _format_token(self, ttype, value: str) -> str:
        css = self._token_css(ttype)
        text = escape(value)
        if not css:
            return text
        return f'<span style="{css}">{text}</span>'

    def _token_css(self, ttype) -> str:
        if ttype not in self._css_cache:
            style = self.style.style_for_token(ttype)
            parts = []
            if style["color"]:
                parts.append(f"color:#{style['color']}")
            if style["bold"]:
                parts.append("font-weight:bold")
            if style["italic"]:
                parts.append("font-style:italic")
            if style["underline"]:
                parts.append("text-decoration:underline")
            self._css_cache[ttype] = ";".join(parts)
        return self._css_cache[ttype]


def split_lines(tokensource: Iterable[Tuple[object, str]]) -> Iterator[List[tuple]]:
    """Regroup a flat token stream into lists of tokens, one list per line."""
    line: List[tuple] = []
    for ttype, value in tokensource:
        for index, part in enumerate(value.split("\n")):
            if index:
                yield line
                line = []
            if part:
                line.append((ttype, part))
    if line:
        yield line


class CodeHighlighter:
    def __init__(self, theme: str):
        self.theme = theme
        self.formatter = LineSpanFormatter(style=theme)

    def highlight(self, code: str, info: Optional[str] = None) -> str:
        language = parse_language(info)
        lexer = get_lexer(language)
        lines = highlight(code, lexer, self.formatter)

        language_attr = escape(language or PLAIN_LANGUAGE)
        theme_attr = escape(self.theme)
        pre_style = f"background-color:{self.formatter.background_color}"
        if self.formatter.text_color:
            pre_style += f";color:{self.formatter.text_color}"

        return (
            '<figure data-rehype-pretty-code-figure="">'
            f'<pre data-language="{language_attr}" data-theme="{theme_attr}" '
            f'style="{pre_style}">'
            f'<code data-language="{language_attr}" data-theme="{theme_attr}">'
            f"{lines}</code></pre></figure>\n"
        )


def parse_language(info: Optional[str]) -> Optional[str]:
    if not info:
        return None
    language = info.strip().split(None, 1)
    return language[0] if language else None


def get_lexer(language: Optional[str]):
    if not language:
        return TextLexer(stripnl=False)
    try:
        return get_lexer_by_name(language, stripnl=False)
    except ClassNotFound:
        logger.debug(f"No lexer for language {language!r}, using plain text")
        return TextLexer(stripnl=False)


class HighlightingRenderer(mistune.HTMLRenderer):
    """HTML renderer that keeps raw HTML and highlights fenced code blocks."""

    def __init__(self, highlighter: CodeHighlighter):
        super().__init__(escape=False)
        self.highlighter = highlighter

    def block_code(self, code: str, info: Optional[str] = None) -> str:
        return self.highlighter.highlight(code, info)


class MarkdownRenderer:
    def __init__(self, theme: str = "github-dark"):
        self.highlighter = CodeHighlighter(theme)
        self._markdown = mistune.create_markdown(
            escape=False,
            renderer=HighlightingRenderer(self.highlighter),
            plugins=GFM_PLUGINS,
        )

    def render(self, body: str) -> str:
        """Convert a markdown body to an HTML string."""
        if not body or not body.strip():
            return ""
        return self._markdown(body)
