from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional
import logging
import re


COLORS = {
    "DEBUG": "\033[36m",  # cyan
    "INFO": "\033[32m",  # green
    "WARNING": "\033[33m",  # yellow
    "ERROR": "\033[31m",  # red
    "CRITICAL": "\033[1;31m",  # bold red
}
COLOR_RESET = "\033[0m"

LESS_EXTENSION = "less"

SIZE_TOKEN_RE = re.compile(r"^(\d+)[xX](\d+)$")
IDENTIFIER_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_-]+")
SIZE_WITH_UNIT_RE = re.compile(r"^\d*\.?\d+[A-Za-z%]+$")
# The prefix starts the class name, so it has to be a valid start on its own.
CLASS_PREFIX_RE = re.compile(r"^-?[A-Za-z_][A-Za-z0-9_-]*$")


class ColorFormatter(logging.Formatter):
    def format(self, record):
        color = COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname}{COLOR_RESET}"
        return super().format(record)


def setup_logging():
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter("%(levelname)s %(message)s"))
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.INFO)


class SvgLessError(Exception):
    """Base class for errors that abort a run."""


class MinifyError(SvgLessError):
    def __init__(self, name: str, reason: str):
        super().__init__(f"{name}: could not minify SVG ({reason})")
        self.name = name


class StreamClosedError(SvgLessError):
    pass


@dataclass(frozen=True)
class SvgLessConfig:
    file_name: str = "icons"
    add_size: bool = False
    output_mixin: bool = False
    mixin_prefix: str = "icon-"
    default_width: str = "16px"
    default_height: str = "16px"

    def __post_init__(self):
        if not self.file_name:
            raise ValueError("file_name must not be empty")
        if not CLASS_PREFIX_RE.match(self.mixin_prefix):
            raise ValueError(
                f"mixin_prefix must start a valid class name (letter or underscore first), got {self.mixin_prefix!r}"
            )
        for field, value in (
            ("default_width", self.default_width),
            ("default_height", self.default_height),
        ):
            if not SIZE_WITH_UNIT_RE.match(value):
                raise ValueError(f"{field} must carry a unit suffix, got {value!r}")

    @property
    def artifact_name(self) -> str:
        return f"{self.file_name}.{LESS_EXTENSION}"


@dataclass(frozen=True)
class IconSource:
    name: str
    content: bytes


@dataclass(frozen=True)
class ParsedName:
    identifier: str
    explicit_width: Optional[str] = None
    explicit_height: Optional[str] = None


@dataclass(frozen=True)
class IconRecord:
    identifier: str
    escaped_markup: str
    width: Optional[str] = None
    height: Optional[str] = None

    @property
    def has_size(self) -> bool:
        return self.width is not None and self.height is not None


@dataclass(frozen=True)
class Artifact:
    name: str
    content: bytes


def parse_icon_name(file_name: str) -> ParsedName:
    """Split a file name such as ``collapsed.16x16.svg`` into its identifier
    (``collapsed``) and the size baked into the name (``16``, ``16``).

    Remaining dots and characters that cannot appear in a class name are
    replaced with dashes. Never raises.
    """
    stem = PurePath(file_name).stem if file_name else ""

    width = height = None
    base, sep, token = stem.rpartition(".")
    m = SIZE_TOKEN_RE.match(token) if sep else None
    if m:
        stem = base
        width, height = m.group(1), m.group(2)

    identifier = IDENTIFIER_UNSAFE_RE.sub("-", stem).strip("-") or "icon"
    return ParsedName(identifier, width, height)
