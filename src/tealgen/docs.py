"""Documentation attached to the members of one type."""

from __future__ import annotations

from dataclasses import dataclass, field

PARAGRAPH_SEPARATOR = "\n\n"
HELP_NOT_FOUND = "The given key is not found. Use `.help()` to list available pages."


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` and the empty piece after a final newline."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def render_doc(text: str | None) -> str:
    """Turn documentation into comment lines, one marker per physical line."""
    if not text:
        return ""
    return "".join(f"--{line}\n" for line in split_lines(text))


@dataclass
class DocLedger:
    """Pending and committed documentation of a single type.

    ``document()`` queues text for the next registered member; registering
    that member calls ``commit()`` with its name. A second commit under the
    same name (a field getter and its setter) appends a paragraph instead of
    replacing the first one.
    """

    pending: str | None = None
    documentation: dict[str, str] = field(default_factory=dict)
    type_doc: str = ""

    def document(self, text: str) -> None:
        if self.pending is None:
            self.pending = text
        else:
            self.pending = self.pending + PARAGRAPH_SEPARATOR + text

    def commit(self, name: str) -> None:
        docs = self.pending
        self.pending = None
        if docs is None:
            return
        current = self.documentation.get(name)
        if current is None:
            self.documentation[name] = docs
        else:
            self.documentation[name] = current + PARAGRAPH_SEPARATOR + docs

    def document_type(self, text: str) -> None:
        self.type_doc += text + PARAGRAPH_SEPARATOR

    def help(self, key: str | None = None) -> str:
        """Text returned by a generated ``help()`` function at runtime."""
        if key is not None:
            return self.documentation.get(key, HELP_NOT_FOUND)
        pages = "".join(f"{k}\n" for k in self.documentation)
        return f"{self.type_doc}\nAvailable pages:\n{pages}"
