"""Pack SVG icons into a single LESS file of data-URI rules or mixins."""

import logging
import re
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from svg import DeclaredSize, extract_svg_size, is_bare_number, is_length, minify_svg
from utils import (
    Artifact,
    IconRecord,
    IconSource,
    MinifyError,
    ParsedName,
    StreamClosedError,
    SvgLessConfig,
    parse_icon_name,
)

Minifier = Callable[[Union[str, bytes]], str]
Renderer = Callable[[Sequence[IconRecord], str], str]

HEADER = "// Generated by svgless, do not edit."
DATA_URI_PREFIX = "data:image/svg+xml;charset=utf8,"

# Characters that would end the string literal, break the data URI, or be
# picked up by LESS itself (blocks, @{var} and ${prop} interpolation, `js`).
ESCAPED_CHARS = "%\"'\\<>#{}@$~`\n\r\t"
ESCAPES = {c: f"%{ord(c):02X}" for c in ESCAPED_CHARS}
ESCAPE_RE = re.compile("[" + re.escape(ESCAPED_CHARS) + "]")


def escape_svg(markup: str) -> str:
    return ESCAPE_RE.sub(lambda m: ESCAPES[m.group(0)], markup)


def _resolve_axis(explicit: Optional[str], declared: Optional[str], default: str) -> str:
    if explicit is not None:
        return f"{explicit}px"
    if declared is not None:
        if is_bare_number(declared):
            return f"{declared}px"
        if is_length(declared):
            return declared
        logging.debug(f"Ignoring declared size {declared!r}, using {default}")
    return default


def resolve_size(
    name: ParsedName, declared: DeclaredSize, config: SvgLessConfig
) -> Optional[tuple]:
    """
    Width and height for one icon, or None when sizes are not emitted.

    Each axis is taken from the first of: the size in the file name (in px), the
    size declared on the root <svg> element (px added when unit-less), the
    configured default.
    """
    if not config.add_size:
        return None
    return (
        _resolve_axis(name.explicit_width, declared.width, config.default_width),
        _resolve_axis(name.explicit_height, declared.height, config.default_height),
    )


def build_record(identifier: str, size: Optional[tuple], escaped_markup: str) -> IconRecord:
    width, height = size if size else (None, None)
    return IconRecord(identifier, escaped_markup, width, height)


def _declarations(record: IconRecord) -> List[str]:
    lines = [f'background-image: url("{DATA_URI_PREFIX}{record.escaped_markup}");']
    if record.has_size:
        lines.append(f"width: {record.width};")
        lines.append(f"height: {record.height};")
    return lines


def _render(selectors: Iterable[str], records: Sequence[IconRecord]) -> str:
    blocks = [HEADER]
    for selector, record in zip(selectors, records):
        body = "\n".join(f"  {d}" for d in _declarations(record))
        blocks.append(f"{selector} {{\n{body}\n}}")
    return "\n\n".join(blocks) + "\n"


def render_rules(records: Sequence[IconRecord], prefix: str) -> str:
    return _render((f".{prefix}{r.identifier}" for r in records), records)


def render_mixins(records: Sequence[IconRecord], prefix: str) -> str:
    # A mixin with parentheses produces no CSS until it is called.
    return _render((f".{prefix}{r.identifier}()" for r in records), records)


def get_renderer(config: SvgLessConfig) -> Renderer:
    return render_mixins if config.output_mixin else render_rules


class StreamState(Enum):
    COLLECTING = "collecting"
    FLUSHED = "flushed"


class IconStream:
    """
    Collects icons one at a time and emits a single LESS artifact at the end.

    Icons are rendered in the order they were written. When two files map to the
    same identifier the later one replaces the earlier. A minifier failure closes
    the stream without producing anything.
    """

    def __init__(self, config: Optional[SvgLessConfig] = None, minify: Minifier = minify_svg):
        self.config = config or SvgLessConfig()
        self.minify = minify
        self.render = get_renderer(self.config)
        self.state = StreamState.COLLECTING
        self._records: Dict[str, IconRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def _check_open(self):
        if self.state is StreamState.FLUSHED:
            raise StreamClosedError("Icon stream has already been flushed")

    def _flush(self):
        self.state = StreamState.FLUSHED
        self._records = {}

    def write(self, source: IconSource):
        self._check_open()

        name = parse_icon_name(source.name)
        size = resolve_size(name, extract_svg_size(source.content), self.config)

        try:
            minified = self.minify(source.content)
        except Exception as e:
            self._flush()
            raise MinifyError(source.name, str(e)) from e

        record = build_record(name.identifier, size, escape_svg(minified))
        if record.identifier in self._records:
            logging.warning(
                f"Icon {record.identifier} duplicately defined, {source.name} replaces the earlier one."
            )
        self._records[record.identifier] = record
        logging.debug(f"Packed {source.name} as {record.identifier} ({len(minified)} bytes)")

    def end(self) -> Optional[Artifact]:
        self._check_open()
        records = list(self._records.values())
        self._flush()

        if not records:
            logging.info("No icons received, nothing to write.")
            return None

        content = self.render(records, self.config.mixin_prefix)
        return Artifact(self.config.artifact_name, content.encode("utf-8"))


def svgless(
    sources: Iterable[IconSource],
    config: Optional[SvgLessConfig] = None,
    minify: Minifier = minify_svg,
) -> Optional[Artifact]:
    stream = IconStream(config, minify)
    for source in sources:
        stream.write(source)
    return stream.end()
