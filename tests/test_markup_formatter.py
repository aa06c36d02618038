from __future__ import annotations

import pytest

from mcdu.markup.formatter import FormatterTag
from mcdu.utils.exceptions import MarkupError, UnknownTagError


@pytest.mark.parametrize("token,tag", [
    ("left", FormatterTag.LEFT),
    ("right", FormatterTag.RIGHT),
    ("amber", FormatterTag.AMBER),
    ("inop", FormatterTag.INOP),
    ("big", FormatterTag.BIG),
    ("small", FormatterTag.SMALL),
    ("sp", FormatterTag.SPACE),
    ("end", FormatterTag.CLOSE),
])
def test_known_tokens_decode(token, tag):
    assert FormatterTag.from_token(token) is tag


def test_unknown_token_is_an_error_by_default():
    with pytest.raises(UnknownTagError) as ei:
        FormatterTag.from_token("blue")
    assert ei.value.token == "blue"
    assert isinstance(ei.value, MarkupError)


def test_lenient_mode_maps_unknown_token_to_close(caplog):
    with caplog.at_level("WARNING"):
        assert FormatterTag.from_token("blue", strict=False) is FormatterTag.CLOSE
    assert "blue" in caplog.text


def test_tokens_are_case_sensitive():
    with pytest.raises(UnknownTagError):
        FormatterTag.from_token("GREEN")


def test_tag_kinds():
    colors = [t for t in FormatterTag if t.is_color]
    assert len(colors) == 8
    assert FormatterTag.LEFT.is_alignment and not FormatterTag.LEFT.is_color
    assert FormatterTag.BIG.is_font
    assert not FormatterTag.CLOSE.opens_scope
    assert not FormatterTag.SPACE.opens_scope
    assert FormatterTag.GREEN.opens_scope
