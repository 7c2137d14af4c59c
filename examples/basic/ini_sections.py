"""Parse a small INI dialect with state functions and a tree builder."""

from __future__ import annotations

from dataclasses import dataclass, field

from scanstate import EOF, ParseError, Scanner, StateFn, scan

WHITESPACE = " \t"
NAME_CHARS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-."


@dataclass
class Node:
    kind: str
    text: str = ""
    children: list[Node] = field(default_factory=list)

    def add_child(self, child: Node) -> None:
        self.children.append(child)


def lex_line(s: Scanner) -> StateFn | None:
    s.accept_run(WHITESPACE + "\n")
    s.discard()
    rune = s.peek()
    if rune == EOF:
        return None
    if rune == "[":
        return lex_section
    if rune in ";#":
        return lex_comment
    return lex_key


def lex_comment(s: Scanner) -> StateFn | None:
    s.advance_until("\n")
    s.discard()
    return lex_line


def lex_section(s: Scanner) -> StateFn | None:
    s.accept("[")
    s.discard()
    s.accept_run(NAME_CHARS)
    name = s.emit()
    if not s.accept("]"):
        s.fail("expected ']' after section name %r", name)
        return None
    s.discard()
    # Sections do not nest: leave the previous one first
    if s.depth > 1:
        s.pop_node()
    s.push_node(Node("section", name))
    return lex_line


def lex_key(s: Scanner) -> StateFn | None:
    s.accept_run(NAME_CHARS)
    key = s.emit()
    if not key:
        s.fail("expected a key")
        return None
    s.accept_run(WHITESPACE)
    if not s.accept("="):
        s.fail("expected '=' after key %r", key)
        return None
    s.accept_run(WHITESPACE)
    s.discard()
    s.advance_until("\n")
    s.push_node(Node("entry", key))
    s.push_node(Node("value", s.emit().rstrip()))
    s.pop_node()
    s.pop_node()
    return lex_line


SOURCE = """\
; demo
[server]
host = example.org
port = 8080

[client]
retries = 3
"""

if __name__ == "__main__":
    doc = scan(SOURCE, Node("document"), lex_line, source_file="demo.ini")
    for section in doc.children:
        print(f"[{section.text}]")
        for entry in section.children:
            print(f"  {entry.text} -> {entry.children[0].text}")

    try:
        scan("[broken\n", Node("document"), lex_line)
    except ParseError as exc:
        print(exc)
