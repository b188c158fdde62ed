"""
Built-in Tables — Default commands, environments, math symbols and modifiers.

User overrides are merged in front of these by the table compiler.
Templates use the markers from cdlatex.vocabulary.Marker: ``?`` for the
cursor, AUTOLABEL, AUTOFILE, AUTOINDENT, and a leading ``\\\\`` on item
templates that continue a row.
"""

from cdlatex.vocabulary import Builtin
from cdlatex.tables.models import (
    BuiltinAction,
    CommandEntry,
    EnvironmentEntry,
    ModifierEntry,
    ParameterizedAction,
    SymbolEntry,
)


def _env(keyword: str, environment: str, math: bool = False) -> CommandEntry:
    return CommandEntry(
        keyword=keyword,
        docstring=f"Insert {environment.upper()} environment template",
        action=ParameterizedAction(op=Builtin.ENVIRONMENT, args=(environment,)),
        text_mode=not math,
        math_mode=math,
    )


def _cmd(keyword: str, docstring: str, replacement: str,
         text: bool = True, math: bool = False) -> CommandEntry:
    return CommandEntry(
        keyword=keyword,
        docstring=docstring,
        replacement=replacement,
        action=BuiltinAction(op=Builtin.POSITION_CURSOR),
        text_mode=text,
        math_mode=math,
    )


def _lr(keyword: str, delimiter: str) -> CommandEntry:
    return CommandEntry(
        keyword=keyword,
        docstring=f"Insert a \\left{delimiter} \\right pair",
        replacement=delimiter,
        action=BuiltinAction(op=Builtin.LR_PAIR),
        text_mode=False,
        math_mode=True,
    )


# =============================================================================
# COMMANDS
# =============================================================================

DEFAULT_COMMANDS: list[CommandEntry] = [
    # Environments
    _env("equ", "equation"),
    _env("equ*", "equation*"),
    _env("eqn", "eqnarray"),
    _env("eqn*", "eqnarray*"),
    _env("ali", "align"),
    _env("ali*", "align*"),
    _env("gat", "gather"),
    _env("gat*", "gather*"),
    _env("mul", "multline"),
    _env("mul*", "multline*"),
    _env("ite", "itemize"),
    _env("enu", "enumerate"),
    _env("des", "description"),
    _env("fg", "figure"),
    _env("tab", "tabular"),
    _env("tbl", "table"),
    _env("ctr", "center"),
    _env("qu", "quote"),
    _env("ver", "verbatim"),
    _env("spl", "split", math=True),
    _env("cas", "cases", math=True),
    _env("arr", "array", math=True),
    _env("pmat", "pmatrix", math=True),
    _env("bmat", "bmatrix", math=True),
    CommandEntry(
        keyword="it",
        docstring="New item in current environment",
        action=BuiltinAction(op=Builtin.ITEM),
        text_mode=True,
        math_mode=True,
    ),
    # Sectioning
    _cmd("cha", "Insert \\chapter{}", "\\chapter{?}"),
    _cmd("cha*", "Insert \\chapter*{}", "\\chapter*{?}"),
    _cmd("sn", "Insert \\section{}", "\\section{?}"),
    _cmd("sn*", "Insert \\section*{}", "\\section*{?}"),
    _cmd("ss", "Insert \\subsection{}", "\\subsection{?}"),
    _cmd("ss*", "Insert \\subsection*{}", "\\subsection*{?}"),
    _cmd("sss", "Insert \\subsubsection{}", "\\subsubsection{?}"),
    _cmd("sss*", "Insert \\subsubsection*{}", "\\subsubsection*{?}"),
    _cmd("pf", "Insert \\paragraph{}", "\\paragraph{?}"),
    _cmd("pf*", "Insert \\paragraph*{}", "\\paragraph*{?}"),
    _cmd("sp", "Insert \\subparagraph{}", "\\subparagraph{?}"),
    # Text
    _cmd("fn", "Make a footnote", "\\footnote{?}"),
    _cmd("ct", "Insert \\cite{}", "\\cite{?}"),
    _cmd("ref", "Insert \\ref{}", "\\ref{?}", text=True, math=True),
    _cmd("eqref", "Insert \\eqref{}", "\\eqref{?}"),
    _cmd("emph", "Insert \\emph{}", "\\emph{?}"),
    CommandEntry(
        keyword="lbl",
        docstring="Insert automatic label at point",
        action=BuiltinAction(op=Builtin.LABEL),
        text_mode=True,
        math_mode=True,
    ),
    CommandEntry(
        keyword="inc",
        docstring="Insert \\includegraphics with file name",
        replacement="\\includegraphics[]{?}",
        action=BuiltinAction(op=Builtin.INSERT_FILENAME),
    ),
    # Math
    _cmd("fr", "Insert \\frac{}{}", "\\frac{?}{}", text=False, math=True),
    _cmd("sq", "Insert \\sqrt{}", "\\sqrt{?}", text=False, math=True),
    _cmd("sqrt", "Insert \\sqrt{}", "\\sqrt{?}", text=False, math=True),
    _cmd("sum", "Insert \\sum\\limits_{}^{}", "\\sum\\limits_{?}^{}", text=False, math=True),
    _cmd("prod", "Insert \\prod\\limits_{}^{}", "\\prod\\limits_{?}^{}", text=False, math=True),
    _cmd("int", "Insert \\int_{}^{}", "\\int_{?}^{}", text=False, math=True),
    _cmd("intl", "Insert \\int\\limits_{}^{}", "\\int\\limits_{?}^{}", text=False, math=True),
    _cmd("lim", "Insert \\lim\\limits_{}", "\\lim\\limits_{?}", text=False, math=True),
    _cmd("te", "Insert \\text{}", "\\text{?}", text=False, math=True),
    _cmd("bin", "Insert \\binom{}{}", "\\binom{?}{}", text=False, math=True),
    _cmd("ov", "Insert \\overline{}", "\\overline{?}", text=False, math=True),
    _cmd("ds", "Insert \\displaystyle", "\\displaystyle ?", text=False, math=True),
    _lr("lr(", "("),
    _lr("lr[", "["),
    _lr("lr{", "{"),
    _lr("lr<", "<"),
    _lr("lr|", "|"),
]


# =============================================================================
# ENVIRONMENTS
# =============================================================================

DEFAULT_ENVIRONMENTS: list[EnvironmentEntry] = [
    EnvironmentEntry(
        name="abstract",
        body="\\begin{abstract}\n?\n\\end{abstract}",
    ),
    EnvironmentEntry(
        name="appendix",
        body="\\begin{appendix}\n?\n\\end{appendix}",
    ),
    EnvironmentEntry(
        name="array",
        body="\\begin{array}[tb]{?lcrp{width}*{num}{lcrp}}\n\n\\end{array}",
        item=" &  & \\\\",
    ),
    EnvironmentEntry(
        name="center",
        body="\\begin{center}\n? \\\\\n\\end{center}",
        item="\\\\\n?",
    ),
    EnvironmentEntry(
        name="description",
        body="\\begin{description}\n\\item[?] \n\\end{description}",
        item="\\item[?] ",
    ),
    EnvironmentEntry(
        name="displaymath",
        body="\\begin{displaymath}\n?\n\\end{displaymath}",
    ),
    EnvironmentEntry(
        name="document",
        body="\\begin{document}\n?\n\\end{document}",
    ),
    EnvironmentEntry(
        name="enumerate",
        body="\\begin{enumerate}\nAUTOINDENT\\item ?\n\\end{enumerate}",
        item="AUTOINDENT\\item ?",
    ),
    EnvironmentEntry(
        name="eqnarray",
        body="\\begin{eqnarray}\nAUTOLABEL\n? &  & \\\\\n\\end{eqnarray}",
        item="\\\\AUTOLABEL\n? &  & ",
    ),
    EnvironmentEntry(
        name="eqnarray*",
        body="\\begin{eqnarray*}\n? & & \\\\\n\\end{eqnarray*}",
        item="\\\\\n? & & ",
    ),
    EnvironmentEntry(
        name="equation",
        body="\\begin{equation}\nAUTOLABEL\n?\n\\end{equation}",
    ),
    EnvironmentEntry(
        name="equation*",
        body="\\begin{equation*}\n?\n\\end{equation*}",
    ),
    EnvironmentEntry(
        name="figure",
        body=(
            "\\begin{figure}[htbp]\n"
            "AUTOINDENT\\centering\n"
            "AUTOINDENT\\includegraphics[width=\\linewidth]{AUTOFILE}\n"
            "AUTOINDENT\\caption[]{AUTOLABEL ?}\n"
            "\\end{figure}"
        ),
    ),
    EnvironmentEntry(
        name="figure*",
        body=(
            "\\begin{figure*}[htbp]\n"
            "AUTOINDENT\\centering\n"
            "AUTOINDENT\\includegraphics[width=\\linewidth]{AUTOFILE}\n"
            "AUTOINDENT\\caption[]{AUTOLABEL ?}\n"
            "\\end{figure*}"
        ),
    ),
    EnvironmentEntry(
        name="flushleft",
        body="\\begin{flushleft}\n? \\\\\n\\end{flushleft}",
        item="\\\\\n?",
    ),
    EnvironmentEntry(
        name="flushright",
        body="\\begin{flushright}\n? \\\\\n\\end{flushright}",
        item="\\\\\n?",
    ),
    EnvironmentEntry(
        name="itemize",
        body="\\begin{itemize}\nAUTOINDENT\\item ?\n\\end{itemize}",
        item="AUTOINDENT\\item ?",
    ),
    EnvironmentEntry(
        name="letter",
        body="\\begin{letter}{?}\n\n\\end{letter}",
    ),
    EnvironmentEntry(
        name="list",
        body="\\begin{list}{}{}\n\\item ?\n\\end{list}",
        item="\\item ?",
    ),
    EnvironmentEntry(
        name="minipage",
        body="\\begin{minipage}[?]{}\n\n\\end{minipage}",
    ),
    EnvironmentEntry(
        name="picture",
        body="\\begin{picture}(?,)()\n\n\\end{picture}",
    ),
    EnvironmentEntry(
        name="quotation",
        body="\\begin{quotation}\n?\n\\end{quotation}",
    ),
    EnvironmentEntry(
        name="quote",
        body="\\begin{quote}\n?\n\\end{quote}",
    ),
    EnvironmentEntry(
        name="tabbing",
        body="\\begin{tabbing}\n? \\= \\kill\n\\end{tabbing}",
        item="\\\\\n?",
    ),
    EnvironmentEntry(
        name="table",
        body=(
            "\\begin{table}[htbp]\n"
            "AUTOINDENT\\caption[]{AUTOLABEL ?}\n"
            "AUTOINDENT\\vspace{4mm}\n"
            "\n"
            "\\end{table}"
        ),
    ),
    EnvironmentEntry(
        name="tabular",
        body="\\begin{tabular}[tb]{?lcrp{width}*{num}{lcrp}|}\n\n\\end{tabular}",
        item=" &  & \\\\",
    ),
    EnvironmentEntry(
        name="thebibliography",
        body="\\begin{thebibliography}{}\n\n\\bibitem[?]{}\n\n\\end{thebibliography}",
        item="\n\\bibitem[?]{}\n",
    ),
    EnvironmentEntry(
        name="titlepage",
        body=(
            "\\begin{titlepage}\n\n\\title{?}\n\n\\author{}\n\n"
            "\\date{}\n\n\\maketitle\n\n\\end{titlepage}"
        ),
    ),
    EnvironmentEntry(
        name="verbatim",
        body="\\begin{verbatim}\n?\n\\end{verbatim}",
    ),
    EnvironmentEntry(
        name="verse",
        body="\\begin{verse}\n? \\\\\n\\end{verse}",
        item="\\\\\n?",
    ),
    # AMS-LaTeX
    EnvironmentEntry(
        name="align",
        body="\\begin{align}\nAUTOLABEL\n?\n\\end{align}",
        item="\\\\AUTOLABEL\n?",
    ),
    EnvironmentEntry(
        name="align*",
        body="\\begin{align*}\n?\n\\end{align*}",
        item="\\\\\n?",
    ),
    EnvironmentEntry(
        name="alignat",
        body="\\begin{alignat}{?}\nAUTOLABEL\n\n\\end{alignat}",
        item="\\\\AUTOLABEL\n?",
    ),
    EnvironmentEntry(
        name="gather",
        body="\\begin{gather}\nAUTOLABEL\n?\n\\end{gather}",
        item="\\\\AUTOLABEL\n?",
    ),
    EnvironmentEntry(
        name="gather*",
        body="\\begin{gather*}\n?\n\\end{gather*}",
        item="\\\\\n?",
    ),
    EnvironmentEntry(
        name="multline",
        body="\\begin{multline}\nAUTOLABEL\n?\n\\end{multline}",
        item="\\\\\n?",
    ),
    EnvironmentEntry(
        name="multline*",
        body="\\begin{multline*}\n?\n\\end{multline*}",
        item="\\\\\n?",
    ),
    EnvironmentEntry(
        name="split",
        body="\\begin{split}\n?\n\\end{split}",
        item="\\\\\n?",
    ),
    EnvironmentEntry(
        name="cases",
        body="\\begin{cases}\n? & \\\\\n\\end{cases}",
        item="\\\\\n? & ",
    ),
    EnvironmentEntry(
        name="pmatrix",
        body="\\begin{pmatrix}\n? \\\\\n\\end{pmatrix}",
        item="\\\\\n?",
    ),
    EnvironmentEntry(
        name="bmatrix",
        body="\\begin{bmatrix}\n? \\\\\n\\end{bmatrix}",
        item="\\\\\n?",
    ),
]


# =============================================================================
# MATH SYMBOLS
# =============================================================================
# Level 1 holds Greek letters and common operators, level 2 their variants,
# level 3 function names.

def _sym(key: str, *levels: str) -> SymbolEntry:
    return SymbolEntry(key=key, levels=levels)


DEFAULT_SYMBOLS: list[SymbolEntry] = [
    _sym("a", "\\alpha"),
    _sym("A", "\\forall", "\\aleph"),
    _sym("b", "\\beta"),
    _sym("B", ""),
    _sym("c", "", "", "\\cos"),
    _sym("C", "", "", "\\arccos"),
    _sym("d", "\\delta", "\\partial"),
    _sym("D", "\\Delta", "\\nabla"),
    _sym("e", "\\epsilon", "\\varepsilon", "\\exp"),
    _sym("E", "\\exists", "", "\\ln"),
    _sym("f", "\\phi", "\\varphi"),
    _sym("F", ""),
    _sym("g", "\\gamma", "", "\\lg"),
    _sym("G", "\\Gamma", "", "10^{?}"),
    _sym("h", "\\eta", "\\hbar"),
    _sym("H", ""),
    _sym("i", "\\in", "\\imath"),
    _sym("I", "", "\\Im"),
    _sym("j", "", "\\jmath"),
    _sym("J", ""),
    _sym("k", "\\kappa"),
    _sym("K", ""),
    _sym("l", "\\lambda", "\\ell", "\\log"),
    _sym("L", "\\Lambda"),
    _sym("m", "\\mu"),
    _sym("M", ""),
    _sym("n", "\\nu", "", "\\ln"),
    _sym("N", "\\nabla", "", "\\exp"),
    _sym("o", "\\omega"),
    _sym("O", "\\Omega", "\\mho"),
    _sym("p", "\\pi", "\\varpi"),
    _sym("P", "\\Pi"),
    _sym("q", "\\theta", "\\vartheta"),
    _sym("Q", "\\Theta"),
    _sym("r", "\\rho", "\\varrho"),
    _sym("R", "", "\\Re"),
    _sym("s", "\\sigma", "\\varsigma", "\\sin"),
    _sym("S", "\\Sigma", "", "\\arcsin"),
    _sym("t", "\\tau", "", "\\tan"),
    _sym("T", "", "", "\\arctan"),
    _sym("u", "\\upsilon"),
    _sym("U", "\\Upsilon"),
    _sym("v", "\\vee"),
    _sym("V", "\\Phi"),
    _sym("w", "\\xi"),
    _sym("W", "\\Xi"),
    _sym("x", "\\chi"),
    _sym("X", ""),
    _sym("y", "\\psi"),
    _sym("Y", "\\Psi"),
    _sym("z", "\\zeta"),
    _sym("Z", ""),
    _sym("0", "\\emptyset"),
    _sym("8", "\\infty"),
    _sym("!", "\\neg"),
    _sym("^", "\\uparrow"),
    _sym("&", "\\wedge"),
    _sym("~", "\\approx", "\\simeq"),
    _sym("_", "\\downarrow"),
    _sym("+", "\\cup"),
    _sym("-", "\\leftrightarrow", "\\longleftrightarrow"),
    _sym("*", "\\times"),
    _sym("/", "\\not"),
    _sym("|", "\\mapsto", "\\longmapsto"),
    _sym("\\", "\\setminus"),
    _sym("=", "\\Leftrightarrow", "\\Longleftrightarrow"),
    _sym("(", "\\langle"),
    _sym(")", "\\rangle"),
    _sym("[", "\\Leftarrow", "\\Longleftarrow"),
    _sym("]", "\\Rightarrow", "\\Longrightarrow"),
    _sym("{", "\\subset"),
    _sym("}", "\\supset"),
    _sym("<", "\\leftarrow", "\\longleftarrow", "\\min"),
    _sym(">", "\\rightarrow", "\\longrightarrow", "\\max"),
    _sym("'", "\\prime"),
    _sym(".", "\\cdot"),
]


# =============================================================================
# MODIFIERS
# =============================================================================

def _acc(key: str, math: str | None, text: str | None = None,
         remove_dot: bool = False) -> ModifierEntry:
    return ModifierEntry(key=key, math=math, text=text, remove_dot=remove_dot)


DEFAULT_MODIFIERS: list[ModifierEntry] = [
    # Math accents
    _acc(".", "\\dot", remove_dot=True),
    _acc(":", "\\ddot", remove_dot=True),
    _acc("~", "\\tilde", remove_dot=True),
    _acc("N", "\\widetilde", remove_dot=True),
    _acc("^", "\\hat", remove_dot=True),
    _acc("H", "\\widehat", remove_dot=True),
    _acc("-", "\\bar", remove_dot=True),
    _acc("T", "\\overline"),
    _acc("_", "\\underline"),
    _acc("{", "\\overbrace"),
    _acc("}", "\\underbrace"),
    _acc(">", "\\vec", remove_dot=True),
    _acc("/", "\\grave", remove_dot=True),
    _acc("\\", "\\acute", remove_dot=True),
    _acc("v", "\\check", remove_dot=True),
    _acc("u", "\\breve", remove_dot=True),
    _acc("m", "\\mbox"),
    _acc("c", "\\mathcal"),
    # Fonts, math and text variants
    _acc("r", "\\mathrm", "\\textrm"),
    _acc("i", "\\mathit", "\\textit"),
    _acc("l", None, "\\textsl"),
    _acc("b", "\\mathbf", "\\textbf"),
    _acc("e", None, "\\emph"),
    _acc("y", "\\mathtt", "\\texttt"),
    _acc("f", "\\mathsf", "\\textsf"),
    # Declaration-style switches
    ModifierEntry(key="I", text="\\itshape", command_style=False, italic_correction=True),
    ModifierEntry(key="B", text="\\bfseries", command_style=False),
    ModifierEntry(key="S", text="\\slshape", command_style=False, italic_correction=True),
    ModifierEntry(key="0", math="\\textstyle", command_style=False),
    ModifierEntry(key="1", math="\\displaystyle", command_style=False),
    ModifierEntry(key="2", math="\\scriptstyle", command_style=False),
    ModifierEntry(key="3", math="\\scriptscriptstyle", command_style=False),
]
