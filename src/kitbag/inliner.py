"""Chainable builder for inline HTML.

Provides helper methods for common inline tags and escapes all text
content except what is passed to `Inliner.raw`.
"""

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
        "`": "&#96;",
        "=": "&#61;",
        "/": "&#47;",
    }
)


def escape(s: str) -> str:
    """Escape special characters in text content for safe HTML output.

    Examples:
        >>> escape("3 > 7")
        '3 &gt; 7'
    """
    return s.translate(_ESCAPES)


class Inliner:
    """
    Builder for inline HTML fragments.

    Every appending method returns the builder so calls can be chained:

        Inliner.create().text("Hi").space().strong("John").render()
    """

    def __init__(self) -> None:
        self.pieces: list[str] = []

    @classmethod
    def create(cls) -> "Inliner":
        """Create a new, empty builder."""
        return cls()

    def _wrap(self, tag: str, content: str) -> "Inliner":
        self.pieces.append(f"<{tag}>{escape(content)}</{tag}>")
        return self

    def raw(self, content: str) -> "Inliner":
        """Append HTML without escaping. Use only with trusted content."""
        self.pieces.append(content)
        return self

    def text(self, content: str) -> "Inliner":
        """Append escaped text."""
        self.pieces.append(escape(content))
        return self

    def strong(self, content: str) -> "Inliner":
        """Append a <strong> element (semantic strong emphasis)."""
        return self._wrap("strong", content)

    def em(self, content: str) -> "Inliner":
        """Append an <em> element (semantic emphasis)."""
        return self._wrap("em", content)

    def u(self, content: str) -> "Inliner":
        """Append a <u> element (stylistic underline)."""
        return self._wrap("u", content)

    def ins(self, content: str) -> "Inliner":
        """Append an <ins> element (semantic insertion)."""
        return self._wrap("ins", content)

    def s(self, content: str) -> "Inliner":
        """Append an <s> element (stylistic strikethrough)."""
        return self._wrap("s", content)

    def del_(self, content: str) -> "Inliner":
        """Append a <del> element (semantic deletion)."""
        return self._wrap("del", content)

    def sub(self, content: str) -> "Inliner":
        """Append a <sub> element (subscript)."""
        return self._wrap("sub", content)

    def sup(self, content: str) -> "Inliner":
        """Append a <sup> element (superscript)."""
        return self._wrap("sup", content)

    def span(self, content: str) -> "Inliner":
        """Append a <span> element."""
        return self._wrap("span", content)

    def small(self, content: str) -> "Inliner":
        """Append a <small> element (side comments, fine print)."""
        return self._wrap("small", content)

    def space(self) -> "Inliner":
        """Append a non-breaking space."""
        self.pieces.append("&nbsp;")
        return self

    def render(self) -> str:
        """Return the generated HTML."""
        return "".join(self.pieces)

    def __str__(self) -> str:
        return self.render()
