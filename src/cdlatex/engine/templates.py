"""
Template Inserter — Expands environment templates and resolves placeholders.

Placeholders are only resolved inside the span that was just inserted;
text elsewhere in the buffer that happens to contain a marker is left alone.
"""

import os
import re
from pathlib import Path

from cdlatex.buffer import Buffer
from cdlatex.engine.context import EditContext
from cdlatex.errors import CdlatexError, NoEnvironmentError, NoItemTemplateError
from cdlatex.observability.logging import get_logger
from cdlatex.vocabulary import INDENT_LITERAL, Marker, TemplateVariant

logger = get_logger("templates")

_PLACEHOLDER_RE = re.compile(
    "|".join(re.escape(m.value) for m in (Marker.AUTOFILE, Marker.AUTOINDENT, Marker.AUTOLABEL))
)


def resolve_cursor(buffer: Buffer, start: int, end: int) -> bool:
    """
    Remove the first cursor marker in [start, end) and leave point there.

    Without a marker point goes to end.

    Returns:
        True if a marker was found
    """
    index = buffer.text.find(Marker.CURSOR.value, start, end)
    if index < 0:
        buffer.goto(end)
        return False
    buffer.delete(index, index + len(Marker.CURSOR.value))
    buffer.goto(index)
    return True


def generic_template(name: str) -> str:
    """Template for an environment the tables do not know."""
    return f"\\begin{{{name}}}\n{Marker.CURSOR.value}\n\\end{{{name}}}"


def relativize(path: str, base: Path, absolute: bool = False) -> str:
    """Express path relative to base unless an absolute name was asked for."""
    if absolute or not path:
        return path
    if not os.path.isabs(path):
        return path
    try:
        return os.path.relpath(path, base)
    except ValueError:
        # Different drive on Windows
        return path


class TemplateInserter:
    """
    Inserts environment templates at point.

    Usage:
        inserter = TemplateInserter(ctx)
        inserter.insert_environment("itemize")
    """

    def __init__(self, ctx: EditContext):
        self.ctx = ctx

    @property
    def buffer(self) -> Buffer:
        return self.ctx.buffer

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def insert_environment(
        self,
        name: str | None = None,
        variant: TemplateVariant = TemplateVariant.BODY,
    ) -> str:
        """
        Expand an environment template at point.

        Args:
            name: Environment name or unique prefix; prompted for when None
            variant: BODY for a new environment, ITEM for a new item

        Returns:
            The environment name that was expanded
        """
        if name is None:
            name = self._prompt_name()

        entry = self.ctx.tables.find_environment(name)
        if variant == TemplateVariant.ITEM and (entry is None or not entry.item):
            raise NoItemTemplateError("environment", entry.name if entry else name)
        if entry is None:
            logger.debug("Unknown environment %r, using generic template", name)
            template = generic_template(name)
        else:
            name = entry.name
            if variant == TemplateVariant.ITEM:
                template = entry.item
            else:
                template = entry.body

        if template.startswith(Marker.CONTINUATION.value):
            template = template[len(Marker.CONTINUATION.value):]
            self._ensure_separator()

        if template.startswith("\n"):
            # The template brings its own line break
            if not self._text_before_point().strip():
                template = template[1:]
        elif self._text_before_point().strip():
            self.buffer.insert("\n")

        self.insert_template(template, environment=name)
        logger.debug("Inserted %s %s", name, variant.value)
        return name

    def insert_item(self) -> str:
        """
        Insert a new item for the environment enclosing point.

        Raises:
            NoEnvironmentError: No open environment at point
            NoItemTemplateError: The environment has no item template
        """
        enclosing = self.buffer.enclosing_environment()
        if enclosing is None:
            raise NoEnvironmentError("item")
        name = enclosing[0]
        entry = self.ctx.tables.environment(name)
        if entry is None or not entry.item:
            raise NoItemTemplateError("item", name)
        return self.insert_environment(name, TemplateVariant.ITEM)

    def insert_label(self, environment: str | None = None) -> bool:
        """
        Insert a generated ``\\label{...}`` at point.

        Returns:
            False when no label generator is available
        """
        if self.ctx.labels is None:
            return False
        if environment is None:
            enclosing = self.buffer.enclosing_environment()
            environment = enclosing[0] if enclosing else ""
        self.buffer.insert(self._label_text(environment))
        return True

    def insert_filename(self, absolute: bool = False) -> str:
        """Prompt for a file and insert its name at point."""
        path = self._prompt_path(absolute)
        self.buffer.insert(path)
        return path

    # -------------------------------------------------------------------------
    # Template mechanics
    # -------------------------------------------------------------------------

    def insert_template(self, template: str, environment: str = "") -> tuple[int, int]:
        """
        Insert a template at point and resolve its placeholders.

        Returns:
            (start, end) of the inserted text after resolution
        """
        buffer = self.buffer
        start = buffer.point
        buffer.insert(template)
        end = buffer.point

        rest = buffer.text[end:buffer.line_end(end)]
        if rest.strip():
            buffer.insert_at(end, "\n")

        start, end = self.resolve_placeholders(start, end, environment)
        resolve_cursor(buffer, start, end)
        return start, end

    def resolve_placeholders(
        self, start: int, end: int, environment: str = ""
    ) -> tuple[int, int]:
        """
        Replace AUTOFILE, AUTOINDENT and AUTOLABEL left to right in [start, end).

        An AUTOLABEL that cannot be filled is deleted together with its line
        when that line ends up blank.

        Returns:
            The new (start, end) of the span
        """
        buffer = self.buffer
        pos = start
        while True:
            match = _PLACEHOLDER_RE.search(buffer.text, pos, end)
            if match is None:
                return start, end
            marker = match.group(0)
            buffer.delete(match.start(), match.end())
            end -= len(marker)
            pos = match.start()

            if marker == Marker.AUTOLABEL.value and not self._labels_enabled():
                line_start, removed = self._drop_blank_line(pos)
                if removed:
                    start = min(start, line_start)
                    end -= removed
                    pos = line_start
                continue

            if marker == Marker.AUTOFILE.value:
                replacement = self._prompt_path(absolute=False)
            elif marker == Marker.AUTOINDENT.value:
                replacement = INDENT_LITERAL
            else:
                replacement = self._label_text(environment)

            buffer.insert_at(pos, replacement)
            end += len(replacement)
            pos += len(replacement)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _ensure_separator(self) -> None:
        """Put ``\\\\`` before point unless the previous content ends with it."""
        text = self.buffer.text
        pos = self.buffer.point
        while pos > 0 and text[pos - 1] in " \t\n":
            pos -= 1
        separator = Marker.CONTINUATION.value
        if text[max(0, pos - len(separator)):pos] != separator:
            self.buffer.insert_at(pos, separator)

    def _text_before_point(self) -> str:
        return self.buffer.text[self.buffer.line_start():self.buffer.point]

    def _drop_blank_line(self, pos: int) -> tuple[int, int]:
        """
        Delete the line at pos if it is blank.

        Returns:
            (offset where the deletion started, characters removed)
        """
        buffer = self.buffer
        line_start = buffer.line_start(pos)
        line_end = buffer.line_end(pos)
        if buffer.text[line_start:line_end].strip():
            return pos, 0
        if line_end < len(buffer.text):
            line_end += 1
        elif line_start > 0:
            line_start -= 1
        buffer.delete(line_start, line_end)
        return line_start, line_end - line_start

    def _labels_enabled(self) -> bool:
        return self.ctx.config.insert_auto_labels and self.ctx.labels is not None

    def _label_text(self, environment: str) -> str:
        label = self.ctx.labels.generate_label(environment) if self.ctx.labels else ""
        return f"\\label{{{label}}}"

    def _prompt_path(self, absolute: bool) -> str:
        if self.ctx.paths is None:
            logger.debug("No path prompter, leaving file name empty")
            return ""
        path = self.ctx.paths.prompt_path(absolute)
        return relativize(path, self.ctx.config.base_directory, absolute)

    def _prompt_name(self) -> str:
        if self.ctx.environments is None:
            raise CdlatexError("environment: no environment name given")
        name = self.ctx.environments.prompt_environment(self.ctx.tables.environment_names())
        if not name:
            raise CdlatexError("environment: no environment name given")
        return name
