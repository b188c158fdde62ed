"""Tests for the modify engine."""

import pytest

from cdlatex.buffer import Buffer
from cdlatex.config import EngineConfig
from cdlatex.engine import ExtentKind, resolve_extent, wrap
from cdlatex.observability import get_metrics
from cdlatex.tables import ModifierEntry
from cdlatex.vocabulary import EditMode, Key


def extent_of(marked: str, count: int | None = None, **config) -> tuple[ExtentKind, str]:
    buffer = Buffer.from_marked(marked)
    extent = resolve_extent(buffer, EngineConfig(**config), count)
    return extent.kind, buffer.text[extent.start:extent.end]


class TestResolveExtent:
    """Which text a modifier applies to."""

    def test_word(self):
        assert extent_of("x abc|") == (ExtentKind.WORD, "abc")

    def test_macro_token(self):
        assert extent_of("$\\alpha|") == (ExtentKind.MACRO, "\\alpha")

    def test_balanced_group(self):
        assert extent_of("x (a+(b))|") == (ExtentKind.GROUP, "(a+(b))")

    def test_brace_group(self):
        assert extent_of("x^{ab}|") == (ExtentKind.GROUP, "{ab}")

    def test_single_character(self):
        assert extent_of("a+|") == (ExtentKind.CHAR, "+")

    def test_counted_words(self):
        assert extent_of("one two, three|", count=2) == (ExtentKind.WORDS, "two, three")

    @pytest.mark.parametrize("marked", ["|", "ab\n|", "a |", "a$|", "f(|", "x{|"])
    def test_empty(self, marked):
        assert extent_of(marked) == (ExtentKind.EMPTY, "")

    def test_backwards_disabled(self):
        assert extent_of("abc|", modify_backwards=False) == (ExtentKind.EMPTY, "")

    def test_selection_first(self):
        buffer = Buffer(text="abc def", point=7, mark=0, selection_active=True)
        extent = resolve_extent(buffer, EngineConfig(), count=1)
        assert (extent.kind, extent.start, extent.end) == (ExtentKind.SELECTION, 0, 7)


class TestWrap:
    """Building the modified text."""

    def test_command_style(self):
        entry = ModifierEntry(key="~", math="\\tilde")
        assert wrap(entry, "\\tilde", "x", EditMode.MATH) == "\\tilde{x}"

    def test_brace_group_reused_as_argument(self):
        entry = ModifierEntry(key="b", math="\\mathbf")
        assert wrap(entry, "\\mathbf", "{ab}", EditMode.MATH) == "\\mathbf{ab}"

    def test_declaration_style_goes_inside_group(self):
        entry = ModifierEntry(key="B", text="\\bfseries", command_style=False)
        assert wrap(entry, "\\bfseries", "{abc}", EditMode.TEXT) == "{\\bfseries abc}"
        assert wrap(entry, "\\bfseries", "abc", EditMode.TEXT) == "{\\bfseries abc}"

    def test_dotless_in_math(self):
        entry = ModifierEntry(key="~", math="\\tilde", remove_dot=True)
        assert wrap(entry, "\\tilde", "i", EditMode.MATH) == "\\tilde{\\imath}"
        assert wrap(entry, "\\tilde", "j", EditMode.MATH) == "\\tilde{\\jmath}"
        assert wrap(entry, "\\tilde", "ij", EditMode.MATH) == "\\tilde{ij}"

    def test_italic_correction_only_in_text(self):
        entry = ModifierEntry(key="i", math="\\mathit", text="\\textit", italic_correction=True)
        assert wrap(entry, "\\textit", "word", EditMode.TEXT) == "\\textit{word\\/}"
        assert wrap(entry, "\\mathit", "word", EditMode.MATH) == "\\mathit{word}"


class TestMathModify:
    """The modify prefix, end to end."""

    def test_tilde_after_letter_in_math(self, make_engine):
        engine = make_engine("$a|$", keys=["~"])
        result = engine.math_modify()
        assert result.data == "\\tilde{a}"
        assert engine.buffer.render() == "$\\tilde{a}|$"

    def test_dotless_i(self, make_engine):
        engine = make_engine("$i|$", keys=["~"])
        engine.math_modify()
        assert engine.buffer.render() == "$\\tilde{\\imath}|$"

    def test_macro(self, make_engine):
        engine = make_engine("$\\alpha|$", keys=["~"])
        engine.math_modify()
        assert engine.buffer.render() == "$\\tilde{\\alpha}|$"

    def test_empty_form_after_space(self, make_engine):
        engine = make_engine("$a |$", keys=["~"])
        engine.math_modify()
        assert engine.buffer.render() == "$a \\tilde{|}$"

    def test_style_key_after_space_in_text(self, make_engine):
        engine = make_engine("word |", keys=["B"])
        engine.math_modify()
        assert engine.buffer.render() == "word {\\bfseries |}"

    def test_italic_style_in_text(self, make_engine):
        engine = make_engine("word |", keys=["I"])
        engine.math_modify()
        assert engine.buffer.render() == "word {\\itshape |\\/}"

    def test_style_key_on_word(self, make_engine):
        engine = make_engine("a word|", keys=["B"])
        engine.math_modify()
        assert engine.buffer.render() == "a {\\bfseries word}|"

    def test_text_variant(self, make_engine):
        engine = make_engine("a word|", keys=["b"])
        engine.math_modify()
        assert engine.buffer.render() == "a \\textbf{word}|"

    def test_counted_words(self, make_engine):
        engine = make_engine("one two three|", keys=["b"])
        engine.math_modify(count=2)
        assert engine.buffer.render() == "one \\textbf{two three}|"

    def test_selection(self, make_engine):
        engine = make_engine("$abc|$", keys=["~"])
        engine.buffer.mark = 1
        engine.buffer.selection_active = True
        engine.math_modify()
        assert engine.buffer.render() == "$\\tilde{abc}|$"
        assert not engine.buffer.selection_active

    def test_backwards_disabled(self, make_engine):
        engine = make_engine("$a|$", keys=["~"], config=EngineConfig(modify_backwards=False))
        engine.math_modify()
        assert engine.buffer.render() == "$a\\tilde{|}$"


class TestModifyFallbacks:
    """Keys without a usable modifier."""

    def test_mode_restriction(self, make_engine, messages):
        engine = make_engine("word|", keys=["~"])
        result = engine.math_modify()
        assert not result.success
        assert result.message == "No such modifier `~' in text mode"
        assert messages == [result.message]
        assert engine.buffer.render() == "word|"
        assert get_metrics().errors.value == 1

    def test_unknown_key_inserted_literally(self, make_engine):
        engine = make_engine("$a|$", keys=["#"])
        engine.math_modify()
        assert engine.buffer.render() == "$a'#|$"

    def test_prefix_twice_inserts_prefix(self, make_engine):
        engine = make_engine("$a|$", keys=["'"])
        engine.math_modify()
        assert engine.buffer.render() == "$a'|$"

    def test_cancel(self, make_engine):
        engine = make_engine("$a|$", keys=[Key.CANCEL.value])
        assert engine.math_modify().aborted
        assert engine.buffer.render() == "$a|$"
