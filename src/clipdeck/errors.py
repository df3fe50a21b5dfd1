# -*- coding: utf-8 -*-
from typing import Optional


class ClippingsError(Exception):
    """
    Base class for every failure a conversion or validation pass can raise.

    Each subclass carries its own process exit code so the CLI can map
    errors without inspecting messages.
    """

    exit_code = 1

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.message = message
        self.line_number = line_number
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"{self.message} (line {self.line_number})"

    def at_line(self, line_number: int) -> 'ClippingsError':
        """Attach a line number unless one is already set."""
        if self.line_number is None:
            self.line_number = line_number
            self.args = (str(self),)
        return self


# Raw clippings grammar
class MalformedTitleLine(ClippingsError):
    exit_code = 10


class MalformedMetaLine(ClippingsError):
    exit_code = 11


class DateParseError(ClippingsError):
    exit_code = 12


class UnknownRecordKind(ClippingsError):
    exit_code = 13


# Note line grammar
class MissingBasicDescription(ClippingsError):
    exit_code = 20


class MissingHighlightForCloze(ClippingsError):
    exit_code = 21


class NoClozeMatch(ClippingsError):
    exit_code = 22


# Intermediate format
class MissingFrontBackSeparator(ClippingsError):
    exit_code = 30


class MissingCardTerm(ClippingsError):
    exit_code = 31


class InvalidBlockSequence(ClippingsError):
    exit_code = 32


class EmptyMetadata(ClippingsError):
    exit_code = 33


class MalformedMetadata(ClippingsError):
    exit_code = 34


# Environment
class IoError(ClippingsError):
    exit_code = 40
