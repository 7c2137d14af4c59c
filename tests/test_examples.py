"""Smoke tests for the runnable examples."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType

import pytest

from scanstate import ParseError, scan

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def _load(relative: str) -> ModuleType:
    path = EXAMPLES / relative
    name = f"scanstate_example_{path.stem}"
    spec = importlib.util.spec_from_file_location(name, path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    # dataclasses resolve string annotations through sys.modules
    sys.modules[name] = module
    spec.loader.exec_module(module)
    return module


class TestIniSections:
    """The INI example parses its own sample and reports broken input."""

    def test_sample_document(self) -> None:
        ini = _load("basic/ini_sections.py")
        doc = scan(ini.SOURCE, ini.Node("document"), ini.lex_line)

        assert [s.text for s in doc.children] == ["server", "client"]
        server = doc.children[0]
        assert [(e.text, e.children[0].text) for e in server.children] == [
            ("host", "example.org"),
            ("port", "8080"),
        ]
        assert doc.children[1].children[0].children[0].text == "3"

    def test_unclosed_section(self) -> None:
        ini = _load("basic/ini_sections.py")
        with pytest.raises(ParseError, match="expected ']' after section name 'broken'") as exc_info:
            scan("[broken\n", ini.Node("document"), ini.lex_line)
        assert (exc_info.value.lineno, exc_info.value.col_offset) == (1, 8)

    def test_missing_equals(self) -> None:
        ini = _load("basic/ini_sections.py")
        with pytest.raises(ParseError, match="expected '=' after key 'host'"):
            scan("[a]\nhost example\n", ini.Node("document"), ini.lex_line)
