import pytest

from storagecalc.commands import CreateImage, GroupImages, Quit, parse_command
from storagecalc.exceptions import MalformedCommandError, UnknownCommandError
from storagecalc.models.imagerecord import ImageFormat


@pytest.mark.parametrize(
    "line,fmt",
    [
        ("jpg 10 20", ImageFormat.BASELINE),
        ("J 10 20", ImageFormat.BASELINE),
        ("jp2 10 20", ImageFormat.JP2),
        ("JPEG2000 10 20", ImageFormat.JP2),
        ("Bmp 10 20", ImageFormat.BMP),
    ],
)
def test_format_keywords(line, fmt):
    assert parse_command(line) == CreateImage(fmt, 10, 20)


def test_extra_whitespace_and_trailing_newline():
    assert parse_command("  bmp\t640   480 \n") == CreateImage(ImageFormat.BMP, 640, 480)


def test_group_indices():
    assert parse_command("g 1 2 3") == GroupImages([1, 2, 3])
    assert parse_command("G 1, 2,3") == GroupImages([1, 2, 3])
    assert parse_command("g") == GroupImages([])


def test_group_stops_at_first_non_integer():
    assert parse_command("g 4 x 5") == GroupImages([4])


def test_quit_and_blank():
    assert parse_command("q") == Quit()
    assert parse_command("Q\n") == Quit()
    assert parse_command("   ") is None


def test_unknown_keyword():
    with pytest.raises(UnknownCommandError):
        parse_command("xyz 10 10")


@pytest.mark.parametrize("line", ["jpg", "jpg 10", "bmp ten 10", "jp2 10 1.5", "bmp -1 10"])
def test_malformed_dimensions(line):
    with pytest.raises(MalformedCommandError):
        parse_command(line)


@pytest.mark.parametrize("line", ["bmp 1_0 1", "jpg １０ 10", "jp2 0x10 10", "bmp 10 1e3"])
def test_only_plain_ascii_integers_are_dimensions(line):
    with pytest.raises(MalformedCommandError):
        parse_command(line)


def test_dimension_above_unsigned_64_bit_rejected():
    with pytest.raises(MalformedCommandError):
        parse_command(f"bmp {2**64} 10")
    assert parse_command(f"bmp {2**64 - 1} 1") == CreateImage(ImageFormat.BMP, 2**64 - 1, 1)


def test_group_index_with_underscore_ends_collection():
    assert parse_command("g 2 1_0 3") == GroupImages([2])
