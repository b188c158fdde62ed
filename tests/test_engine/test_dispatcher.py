"""Tests for the trigger-key pipeline."""

import pytest

from cdlatex.config import EngineConfig
from cdlatex.engine import TabOutcome, keyword_before
from cdlatex.observability import get_metrics


class TestKeywordBefore:
    """Tests for finding the keyword token."""

    def test_word(self):
        assert keyword_before("a $fr", 5) == (3, "fr")

    def test_word_with_opening_bracket(self):
        assert keyword_before("cite{", 5) == (0, "cite{")
        assert keyword_before("$lr(", 4) == (1, "lr(")

    def test_star_is_a_word_character(self):
        assert keyword_before("equ*", 4) == (0, "equ*")

    def test_dollar_is_never_part_of_keyword(self):
        assert keyword_before("ab$", 3) is None

    def test_nothing_before_point(self):
        assert keyword_before("x ", 2) is None
        assert keyword_before("", 0) is None


class TestKeywordExpansion:
    """Keywords are expanded when active in the current mode."""

    def test_fr_in_math(self, make_engine):
        engine = make_engine("$fr|$")
        result = engine.tab()
        assert result.success
        assert result.data.outcome == TabOutcome.EXPANDED
        assert result.data.keyword == "fr"
        assert engine.buffer.render() == "$\\frac{|}{}$"

    def test_fr_not_expanded_in_text(self, make_engine):
        engine = make_engine("fr|")
        result = engine.tab()
        assert result.data.outcome == TabOutcome.ADVANCED
        assert engine.buffer.render() == "fr|"

    def test_ite_in_text(self, make_engine):
        engine = make_engine("ite|")
        engine.tab()
        assert engine.buffer.render() == "\\begin{itemize}\n  \\item |\n\\end{itemize}"

    def test_environment_starts_on_fresh_line(self, make_engine):
        engine = make_engine("Hello ite|")
        engine.tab()
        assert engine.buffer.render() == (
            "Hello \n\\begin{itemize}\n  \\item |\n\\end{itemize}"
        )

    def test_item_keyword(self, make_engine):
        engine = make_engine("\\begin{itemize}\n  \\item a it|\n\\end{itemize}")
        engine.tab()
        assert engine.buffer.render() == (
            "\\begin{itemize}\n  \\item a \n  \\item |\n\\end{itemize}"
        )

    def test_lr_pair_keyword(self, make_engine):
        engine = make_engine("$lr(|$")
        engine.tab()
        assert engine.buffer.render() == "$\\left( | \\right)$"

    def test_lr_brace_removes_paired_closer(self, make_engine):
        engine = make_engine("$lr{|}$")
        engine.tab()
        assert engine.buffer.render() == "$\\left\\{ | \\right\\}$"

    def test_label_keyword(self, make_engine):
        engine = make_engine("\\begin{equation}\nx lbl|\n\\end{equation}")
        engine.tab()
        assert engine.buffer.render() == "\\begin{equation}\nx \\label{eq:1}|\n\\end{equation}"

    def test_includegraphics_with_file(self, make_engine):
        engine = make_engine("inc|", path="img/a.png")
        engine.tab()
        assert engine.buffer.render() == "\\includegraphics[]{img/a.png|}"

    def test_user_command(self, make_engine):
        from cdlatex.tables import BuiltinAction, CommandEntry
        from cdlatex.vocabulary import Builtin

        config = EngineConfig(commands=(
            CommandEntry(
                keyword="bx",
                replacement="\\boxed{?}",
                action=BuiltinAction(op=Builtin.POSITION_CURSOR),
                text_mode=False,
                math_mode=True,
            ),
        ))
        engine = make_engine("$bx|$", config=config)
        engine.tab()
        assert engine.buffer.render() == "$\\boxed{|}$"

    def test_user_command_without_action_places_cursor(self, make_engine):
        from cdlatex.tables import CommandEntry

        config = EngineConfig(commands=(CommandEntry(keyword="foo", replacement="\\foo{?}"),))
        engine = make_engine("foo|", config=config)
        result = engine.tab()
        assert result.data.outcome == TabOutcome.EXPANDED
        assert engine.buffer.render() == "\\foo{|}"

    def test_user_command_without_marker_ends_after_replacement(self, make_engine):
        from cdlatex.tables import CommandEntry

        config = EngineConfig(commands=(CommandEntry(keyword="hl", replacement="\\hline"),))
        engine = make_engine("hl| x", config=config)
        engine.tab()
        assert engine.buffer.render() == "\\hline| x"

    def test_expansion_counted(self, make_engine):
        make_engine("$fr|$").tab()
        assert get_metrics().expansions.value == 1


class TestScriptGroups:
    """Leaving sub/superscript groups."""

    def test_single_character_simplified(self, make_engine):
        engine = make_engine("$x^{2|}$")
        result = engine.tab()
        assert result.data.outcome == TabOutcome.SIMPLIFIED
        assert engine.buffer.render() == "$x^2|$"

    def test_subscript_simplified(self, make_engine):
        engine = make_engine("$a_{i|}$")
        engine.tab()
        assert engine.buffer.render() == "$a_i|$"

    def test_two_characters_kept(self, make_engine):
        engine = make_engine("$x^{23|}$")
        result = engine.tab()
        assert result.data.outcome == TabOutcome.LEFT_GROUP
        assert engine.buffer.render() == "$x^{23}|$"

    def test_simplification_disabled(self, make_engine):
        engine = make_engine("$x^{2|}$", config=EngineConfig(simplify_sub_super_scripts=False))
        engine.tab()
        assert engine.buffer.render() == "$x^{2}|$"

    def test_continues_into_next_group(self, make_engine):
        engine = make_engine("$\\frac{a|}{b}$")
        result = engine.tab()
        assert result.data.outcome == TabOutcome.ADVANCED
        assert engine.buffer.render() == "$\\frac{a}{b}|$"


class TestAdvanceFallback:
    """Without a keyword the cursor moves on."""

    def test_unknown_keyword_advances(self, make_engine):
        engine = make_engine("xyz| abc")
        result = engine.tab()
        assert result.data.outcome == TabOutcome.ADVANCED
        assert engine.buffer.render() == "xyz |abc"

    def test_advance_counted(self, make_engine):
        make_engine("a|bc def").tab()
        assert get_metrics().advances.value == 1


class TestHooks:
    """External hooks run before anything else."""

    def test_truthy_hook_stops_pipeline(self, make_engine):
        engine = make_engine("$fr|$")
        seen = []
        engine.tab_hooks.append(lambda ctx: seen.append(ctx.buffer.point) or True)
        result = engine.tab()
        assert result.data.outcome == TabOutcome.HOOK
        assert seen == [3]
        assert engine.buffer.render() == "$fr|$"

    def test_falsy_hook_falls_through(self, make_engine):
        engine = make_engine("$fr|$")
        engine.tab_hooks.append(lambda ctx: False)
        engine.tab()
        assert engine.buffer.render() == "$\\frac{|}{}$"
