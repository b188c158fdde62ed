"""
Collaborators — The engine's seams to the editor around it.

The engine never reads the keyboard, draws help windows, asks for file
names or invents labels on its own; it goes through these protocols.
Simple default implementations are provided for headless use and tests.
"""

import re
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Protocol, runtime_checkable

from cdlatex.buffer import Buffer
from cdlatex.vocabulary import Key


# =============================================================================
# PROTOCOLS
# =============================================================================

@runtime_checkable
class MathModeDetector(Protocol):
    """Tells whether the cursor is inside math."""

    def in_math_mode(self, buffer: Buffer) -> bool:
        ...

    def math_open_delimiter_info(self, buffer: Buffer) -> tuple[str, int] | None:
        """Opening delimiter of the innermost math around point and its offset."""
        ...


@runtime_checkable
class KeyReader(Protocol):
    """Source of keystrokes for the prefix read loops."""

    def read_key(self, timeout: float | None = None) -> str | None:
        """
        Wait for the next key.

        Returns None when timeout (seconds) expires first; with no
        timeout the call blocks until a key arrives.
        """
        ...


@runtime_checkable
class HelpDisplay(Protocol):
    """Where the read loops show their help tables."""

    def show(self, lines: list[str], offset: int) -> None:
        ...

    def hide(self) -> None:
        ...


@runtime_checkable
class LabelGenerator(Protocol):
    """Creates label keys for AUTOLABEL markers."""

    def generate_label(self, environment: str) -> str:
        ...


@runtime_checkable
class PathPrompter(Protocol):
    """Asks the user for a file name."""

    def prompt_path(self, absolute: bool = False) -> str:
        ...


@runtime_checkable
class EnvironmentPrompter(Protocol):
    """Asks the user for an environment name."""

    def prompt_environment(self, names: list[str]) -> str:
        ...


# =============================================================================
# MATH MODE DETECTION
# =============================================================================

MATH_ENVIRONMENTS = frozenset({
    "equation", "equation*", "eqnarray", "eqnarray*",
    "align", "align*", "alignat", "alignat*", "flalign", "flalign*",
    "gather", "gather*", "multline", "multline*",
    "displaymath", "math",
})

TEXT_SWITCHES = ("text", "mbox", "textrm", "textbf", "textit", "intertext", "hbox")

_MATH_TOKEN_RE = re.compile(
    r"(?P<skip>\\\\|\\[$%{}])"
    r"|(?P<comment>%[^\n]*)"
    r"|(?P<textsw>\\(?:" + "|".join(TEXT_SWITCHES) + r")\{)"
    r"|(?P<env>\\(?P<kind>begin|end)\{(?P<name>[^}\n]*)\})"
    r"|(?P<open>\\[(\[])"
    r"|(?P<close>\\[)\]])"
    r"|(?P<dollar>\$\$?)"
    r"|(?P<brace>[{}])"
)

_CLOSERS = {"\\)": "\\(", "\\]": "\\["}


@dataclass
class _Frame:
    opener: str
    position: int
    math: bool = True
    depth: int = 0


class TexMathDetector:
    """
    Local scan of the text before point for math delimiters.

    Understands ``$``, ``$$``, ``\\(``, ``\\[``, the display math
    environments, and text switches such as ``\\text{...}`` inside math.
    Comments and escaped characters are ignored.
    """

    def __init__(self, math_environments: Iterable[str] = MATH_ENVIRONMENTS):
        self.math_environments = frozenset(math_environments)

    def in_math_mode(self, buffer: Buffer) -> bool:
        return self.math_open_delimiter_info(buffer) is not None

    def math_open_delimiter_info(self, buffer: Buffer) -> tuple[str, int] | None:
        frames = self._scan(buffer.text[:buffer.point])
        if frames and frames[-1].math:
            return frames[-1].opener, frames[-1].position
        return None

    def _scan(self, text: str) -> list[_Frame]:
        frames: list[_Frame] = []
        depth = 0

        def in_math() -> bool:
            return bool(frames) and frames[-1].math

        for match in _MATH_TOKEN_RE.finditer(text):
            token = match.group(0)
            if match.group("skip") or match.group("comment"):
                continue
            if match.group("brace"):
                if token == "{":
                    depth += 1
                else:
                    depth -= 1
                    if frames and not frames[-1].math and depth < frames[-1].depth:
                        frames.pop()
            elif match.group("textsw"):
                depth += 1
                if in_math():
                    frames.append(_Frame(token, match.start(), math=False, depth=depth))
            elif match.group("env"):
                name = match.group("name")
                if name not in self.math_environments:
                    continue
                if match.group("kind") == "begin":
                    frames.append(_Frame(token, match.start()))
                elif frames and frames[-1].opener == f"\\begin{{{name}}}":
                    frames.pop()
            elif match.group("open"):
                if not in_math():
                    frames.append(_Frame(token, match.start()))
            elif match.group("close"):
                if frames and frames[-1].opener == _CLOSERS[token]:
                    frames.pop()
            elif match.group("dollar"):
                if frames and frames[-1].opener == token:
                    frames.pop()
                elif not in_math():
                    frames.append(_Frame(token, match.start()))
        return frames


class StaticMathDetector:
    """Always reports the same mode."""

    def __init__(self, math: bool = False, opener: str = "$"):
        self.math = math
        self.opener = opener

    def in_math_mode(self, buffer: Buffer) -> bool:
        return self.math

    def math_open_delimiter_info(self, buffer: Buffer) -> tuple[str, int] | None:
        if not self.math:
            return None
        return self.opener, 0


# =============================================================================
# KEYS AND HELP
# =============================================================================

class ScriptedKeyReader:
    """
    Replays a fixed key sequence.

    A None entry stands for the user idling: it satisfies a read with a
    timeout by timing out, and is skipped by a blocking read. Running out
    of keys reads as the cancel key.
    """

    def __init__(self, keys: Iterable[str | None] = ()):
        self._keys: deque[str | None] = deque(keys)
        self.timeouts: list[float | None] = []

    def feed(self, *keys: str | None) -> None:
        self._keys.extend(keys)

    @property
    def pending(self) -> int:
        return len(self._keys)

    def read_key(self, timeout: float | None = None) -> str | None:
        self.timeouts.append(timeout)
        while self._keys:
            key = self._keys.popleft()
            if key is not None:
                return key
            if timeout is not None:
                return None
        return Key.CANCEL.value


class NullHelpDisplay:
    """Discards help output."""

    def show(self, lines: list[str], offset: int) -> None:
        pass

    def hide(self) -> None:
        pass


@dataclass
class RecordingHelpDisplay:
    """Keeps what was shown, for tests and the command line."""
    shown: list[tuple[list[str], int]] = field(default_factory=list)
    visible: bool = False

    def show(self, lines: list[str], offset: int) -> None:
        self.shown.append((list(lines), offset))
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    @property
    def last(self) -> list[str]:
        return self.shown[-1][0] if self.shown else []


# =============================================================================
# LABELS AND PATHS
# =============================================================================

LABEL_PREFIXES = {
    "figure": "fig:",
    "figure*": "fig:",
    "table": "tab:",
    "table*": "tab:",
}


class SequentialLabelGenerator:
    """
    Numbers labels per prefix: ``eq:1``, ``eq:2``, ``fig:1``...

    Equation-like environments and anything unknown get ``eq:``.
    """

    def __init__(self, prefixes: dict[str, str] | None = None, default_prefix: str = "eq:"):
        self.prefixes = dict(LABEL_PREFIXES if prefixes is None else prefixes)
        self.default_prefix = default_prefix
        self._counts: dict[str, int] = {}

    def generate_label(self, environment: str) -> str:
        prefix = self.prefixes.get(environment, self.default_prefix)
        self._counts[prefix] = self._counts.get(prefix, 0) + 1
        return f"{prefix}{self._counts[prefix]}"


class FixedPathPrompter:
    """Answers every prompt with the same path."""

    def __init__(self, path: str):
        self.path = path
        self.requests: list[bool] = []

    def prompt_path(self, absolute: bool = False) -> str:
        self.requests.append(absolute)
        return self.path
