"""
Syntax colorizing of code blocks in rendered HTML documentation.

Rewrites every ``<pre><code>...</code></pre>`` block of the generated pages
into ``<div class="code"><code lang="java">...</code></div>`` with keywords,
string literals, line comments and annotations wrapped in colored markup.
Annotations are written as ``\\@Name`` in doc comments so the renderer does
not treat them as tags; the backslash is removed here.
"""

import logging
import re
from pathlib import Path
from typing import Optional

ANNOTATION_COLOR = "#808080"
KEYWORD_COLOR = "#7F0055"
COMMENT_COLOR = "#3F7F5F"
STRING_COLOR = "#0000FF"

KEYWORDS = frozenset([
    "abstract", "assert", "boolean", "break", "byte", "case", "catch",
    "char", "class", "const", "continue", "default", "do", "double", "else",
    "enum", "extends", "final", "finally", "float", "for", "goto", "if",
    "implements", "import", "instanceof", "int", "interface", "long",
    "native", "null", "new", "package", "private", "protected", "public",
    "return", "short", "static", "strictfp", "super", "switch",
    "synchronized", "this", "throw", "throws", "transient", "try", "void",
    "volatile", "while",
])

CODE_BLOCK_PATTERN = re.compile(r"<pre><code>(.*?)</code></pre>", re.IGNORECASE | re.DOTALL)

TOKEN_PATTERN = re.compile(
    r'(?P<comment>//[^\r\n]*)'
    r'|(?P<string>"(?:\\.|[^"\\\r\n])*")'
    r'|(?<!\\)\\@(?P<annotation>[A-Za-z_$][\w$]*)'
    r'|(?P<identifier>[A-Za-z_$][\w$]*)'
)

CODE_OPEN = '<div class="code"><code lang="java">'
CODE_CLOSE = "</code></div>"


def _highlight_token(match: "re.Match[str]") -> str:
    if match.group("comment") is not None:
        return f'<font color="{COMMENT_COLOR}">{match.group("comment")}</font>'
    if match.group("string") is not None:
        return f'<font color="{STRING_COLOR}">{match.group("string")}</font>'
    if match.group("annotation") is not None:
        return f'<font color="{ANNOTATION_COLOR}"><b>@{match.group("annotation")}</b></font>'

    identifier = match.group("identifier")
    if identifier in KEYWORDS:
        return f'<font color="{KEYWORD_COLOR}"><b>{identifier}</b></font>'
    return identifier


def colorize_code(code: str) -> str:
    """Colorize the body of one code block."""
    # Both tags sit on their own lines; drop the surrounding line breaks
    if code.startswith("\r\n"):
        code = code[2:]
    elif code.startswith("\n"):
        code = code[1:]
    newline = code.rfind("\n")
    if newline != -1 and not code[newline:].strip():
        code = code[:newline]
    return TOKEN_PATTERN.sub(_highlight_token, code)


def colorize_html(html: str) -> str:
    """Colorize every code block of an HTML page."""
    return CODE_BLOCK_PATTERN.sub(
        lambda match: CODE_OPEN + colorize_code(match.group(1)) + CODE_CLOSE, html
    )


class Colorizer:
    """Colorizes all HTML files below a base directory."""

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir is not None else Path(".")
        self.processed = 0
        self.modified = 0

    def colorize(self) -> None:
        """
        Process every ``.html`` file below the base directory.

        Files without code blocks are left untouched.

        Raises:
            NotADirectoryError: If the base directory is not a directory
        """
        if not self.base_dir.is_dir():
            raise NotADirectoryError(f"{self.base_dir} is not a directory.")

        for html_file in sorted(self.base_dir.rglob("*.html")):
            if html_file.is_file():
                self.colorize_file(html_file)

        logging.info(
            f"Colorizer processed {self.processed} files and modified {self.modified}."
        )

    def colorize_file(self, html_file: Path) -> bool:
        """Colorize one file, returning True if it was rewritten."""
        self.processed += 1
        content = html_file.read_text(encoding="utf-8")
        colorized = colorize_html(content)
        if colorized == content:
            return False

        html_file.write_text(colorized, encoding="utf-8")
        self.modified += 1
        logging.debug(f"Colorized {html_file}")
        return True
