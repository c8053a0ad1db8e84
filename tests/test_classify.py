import pytest

from buildbar.classify import MAX_PERCENT, LineKind, classify


@pytest.mark.parametrize(
    "line,percent",
    [
        ("[ 42%] Building CXX object foo.o\n", 42),
        ("[100%] Built target bar\n", 100),
        ("[  7%] Linking C static library libz.a\n", 7),
        ("[0%]\n", 0),
        ("[ 150%] Out of range values are kept\n", 150),
    ],
)
def test_progress_lines(line, percent):
    c = classify(line)
    assert c.kind is LineKind.PROGRESS
    assert c.percent == percent
    assert c.text == line


@pytest.mark.parametrize(
    "line",
    [
        "Some unrelated text\n",
        " [ 42%] indented\n",
        "Building [ 42%] not at start\n",
        "[42 %] space before percent\n",
        "[ -5%] signed\n",
        "[ 4.2%] fractional\n",
        "[ ٤٢%] non-ASCII digits\n",
        "",
    ],
)
def test_passthrough_lines(line):
    c = classify(line)
    assert c.kind is LineKind.PASSTHROUGH
    assert c.percent is None


@pytest.mark.parametrize(
    "digits",
    [
        str(MAX_PERCENT + 1),
        "9" * 20,
        "9" * 400,
        "9" * 5000,
    ],
)
def test_out_of_range_percent_is_passthrough(digits):
    """Percentages beyond a 64-bit integer fall back to plain text"""
    c = classify(f"[{digits}%] junk\n")
    assert c.kind is LineKind.PASSTHROUGH
    assert c.percent is None


def test_largest_percent_and_leading_zeros():
    assert classify(f"[{MAX_PERCENT}%] x\n").percent == MAX_PERCENT
    assert classify("[" + "0" * 30 + "42%] x\n").percent == 42


def test_failure_marker():
    c = classify("Failed Modules: foo\n")
    assert c.kind is LineKind.FAILURE
    assert c.percent is None
    assert classify("  Failed Modules: foo\n").kind is LineKind.PASSTHROUGH
    assert classify("failed modules\n").kind is LineKind.PASSTHROUGH
