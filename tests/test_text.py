import pytest

from epaper.buffer import BLACK, FrameCanvas, add_layer
from epaper.errors import FontLoadError
from epaper.text import TextRenderer, load_font


@pytest.fixture(scope="module")
def text():
    return TextRenderer(font_size=12)


def test_render_fills_requested_width(text):
    source = text.render("Hi", 40)
    assert source.width == 40
    assert source.height >= 1


def test_render_draws_dark_text_on_white(text):
    source = text.render("Hi", 40)
    canvas = FrameCanvas(source.width, source.height)
    add_layer(canvas, source, 0, 0)
    blacks = sum(
        canvas.get_pixel(x, y) == BLACK
        for y in range(canvas.height)
        for x in range(canvas.width)
    )
    assert blacks > 0
    # Right edge is background
    assert all(canvas.get_pixel(39, y) != BLACK for y in range(canvas.height))


def test_wrap_on_word_boundaries(text):
    limit = text.measure_width("aaaa bbbb")
    assert text.wrap("aaaa bbbb cccc", limit) == ["aaaa bbbb", "cccc"]


def test_wrap_keeps_paragraphs(text):
    assert text.wrap("one\n\ntwo", 1000) == ["one", "", "two"]


def test_long_word_is_split(text):
    limit = text.measure_width("WWW")
    lines = text.wrap("W" * 10, limit)
    assert len(lines) > 1
    assert "".join(lines) == "W" * 10
    assert all(text.measure_width(line) <= limit for line in lines)


def test_more_lines_make_taller_image(text):
    one = text.render_image("word", 200)
    two = text.render_image("word\nword", 200)
    assert two.height > one.height


def test_render_rejects_empty_width(text):
    with pytest.raises(ValueError):
        text.render("x", 0)


def test_missing_font_raises(tmp_path):
    with pytest.raises(FontLoadError):
        load_font(str(tmp_path / "nope.ttf"), 8)
    with pytest.raises(FontLoadError):
        TextRenderer(str(tmp_path / "nope.ttf"))
