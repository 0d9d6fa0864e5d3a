import pytest

from memerender.services.layout import LINE_SPACING, layout_block, line_positions, wrap_text


def test_wrap_keeps_words_that_fit(measure):
    assert wrap_text("HELLO WORLD", 200, measure) == ["HELLO WORLD"]


def test_wrap_breaks_when_line_would_overflow(measure):
    # "HELLO WORLD" is exactly 110px and still fits
    assert wrap_text("HELLO WORLD FOO", 110, measure) == ["HELLO WORLD", "FOO"]


def test_wide_word_is_not_split(measure):
    lines = wrap_text("SUPERCALIFRAGILISTIC A", 50, measure)
    assert lines == ["SUPERCALIFRAGILISTIC", "A"]


def test_wide_first_word_sits_alone(measure):
    assert wrap_text("ANTIDISESTABLISHMENT", 30, measure) == ["ANTIDISESTABLISHMENT"]


def test_empty_text_gives_one_empty_line(measure):
    assert wrap_text("", 100, measure) == [""]


@pytest.mark.parametrize(
    "text,max_width",
    [
        ("one does not simply walk into mordor", 80),
        ("a b c d e f g h i j k", 30),
        ("when the build passes on the first try", 120),
        ("x", 1),
    ],
)
def test_wrap_preserves_word_sequence(measure, text, max_width):
    lines = wrap_text(text, max_width, measure)
    assert len(lines) >= 1
    assert " ".join(lines).split(" ") == text.split(" ")


def test_wrap_is_deterministic(measure):
    text = "the same text wrapped twice gives the same lines"
    assert wrap_text(text, 90, measure) == wrap_text(text, 90, measure)


def test_single_line_is_centred():
    assert line_positions(1, 100.0, 40) == [pytest.approx(100.0)]


@pytest.mark.parametrize("count", [1, 2, 3, 7])
def test_block_is_centred_on_target(count):
    center, font = 300.0, 50
    step = font * LINE_SPACING
    positions = line_positions(count, center, font)
    
    assert len(positions) == count
    assert positions[0] == pytest.approx(center - count * step / 2 + font / 2)
    for a, b in zip(positions, positions[1:]):
        assert b - a == pytest.approx(step)
    midpoint = (positions[0] + positions[-1]) / 2
    assert abs(midpoint - center) <= step
    assert abs(positions[0] - (center - (count - 1) * step / 2)) <= step


def test_layout_block(measure):
    block = layout_block("ONE TWO THREE", 200.0, 40, 80, measure)
    assert block.lines == ["ONE TWO", "THREE"]
    assert block.line_height == pytest.approx(42.0)
    assert block.positions == line_positions(2, 200.0, 40)
