import logging

import pytest

from utils import ColorFormatter, ParsedName, SvgLessConfig, parse_icon_name


@pytest.mark.parametrize(
    "file_name, expected",
    [
        ("collapsed.16x16.svg", ParsedName("collapsed", "16", "16")),
        ("icon.32X24.svg", ParsedName("icon", "32", "24")),
        ("foo.svg", ParsedName("foo")),
        ("arrow.left.svg", ParsedName("arrow-left")),
        ("arrow.left.8x8.svg", ParsedName("arrow-left", "8", "8")),
        ("16x16.svg", ParsedName("16x16")),
        ("foo.16x.svg", ParsedName("foo-16x")),
        ("my icon (copy).svg", ParsedName("my-icon-copy")),
        ("nested/dir/pic.8x8.svg", ParsedName("pic", "8", "8")),
    ],
)
def test_parse_icon_name(file_name, expected):
    assert parse_icon_name(file_name) == expected


@pytest.mark.parametrize("file_name", ["", ".", "...", "()", ".svg", "\x00.svg", "x" * 1000])
def test_parse_icon_name_never_raises(file_name):
    parsed = parse_icon_name(file_name)
    assert parsed.identifier
    assert "." not in parsed.identifier


def test_config_defaults():
    config = SvgLessConfig()
    assert config.add_size is False
    assert config.output_mixin is False
    assert config.artifact_name == "icons.less"
    assert SvgLessConfig(file_name="common").artifact_name == "common.less"


@pytest.mark.parametrize("field", ["default_width", "default_height"])
@pytest.mark.parametrize("value", ["32", "", "px", "auto"])
def test_config_rejects_default_size_without_unit(field, value):
    with pytest.raises(ValueError, match=field):
        SvgLessConfig(**{field: value})


def test_config_accepts_other_units():
    config = SvgLessConfig(default_width="1.5em", default_height="100%")
    assert config.default_width == "1.5em"


def test_config_rejects_empty_file_name():
    with pytest.raises(ValueError):
        SvgLessConfig(file_name="")


def test_color_formatter_colours_level():
    record = logging.LogRecord("svgless", logging.WARNING, __file__, 1, "careful", None, None)
    line = ColorFormatter("%(levelname)s %(message)s").format(record)
    assert line == "\033[33mWARNING\033[0m careful"


@pytest.mark.parametrize("prefix", ["", "a b", "x{", "1-", "-", "icon.", "-9"])
def test_config_rejects_invalid_mixin_prefix(prefix):
    with pytest.raises(ValueError, match="mixin_prefix"):
        SvgLessConfig(mixin_prefix=prefix)


@pytest.mark.parametrize("prefix", ["icon-", "X-", "_x", "-moz-", "icons-list-"])
def test_config_accepts_class_name_prefix(prefix):
    assert SvgLessConfig(mixin_prefix=prefix).mixin_prefix == prefix
