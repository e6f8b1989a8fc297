import io
import os

import pytest
from PIL import Image

from examplekit.thumbnail import (
    image,
    image_file,
    image_file2,
    image_stream,
    make_thumbnails,
)

RED = (255, 0, 0)
BLUE = (0, 0, 255)


def _two_tone(size):
    width, height = size
    src = Image.new("RGB", size, RED)
    src.paste(Image.new("RGB", (width - width // 2, height), BLUE), (width // 2, 0))
    return src


def _save(path, size=(256, 128)):
    _two_tone(size).save(path, format="PNG")
    return str(path)


@pytest.mark.parametrize(
    "size, expected",
    [((256, 128), (128, 64)), ((100, 200), (64, 128)), ((300, 300), (128, 128))],
)
def test_thumbnail_size(size, expected):
    assert image(_two_tone(size)).size == expected


def test_thumbnail_samples_source_pixels():
    thumb = image(_two_tone((256, 128)))
    assert thumb.getpixel((0, 0)) == RED + (255,)
    assert thumb.getpixel((127, 63)) == BLUE + (255,)


def test_image_stream_writes_jpeg():
    src = io.BytesIO()
    _two_tone((256, 128)).save(src, format="PNG")
    src.seek(0)
    out = io.BytesIO()
    image_stream(out, src)
    out.seek(0)
    with Image.open(out) as result:
        assert result.format == "JPEG"
        assert result.size == (128, 64)


def test_image_stream_rejects_non_image():
    with pytest.raises(OSError):
        image_stream(io.BytesIO(), io.BytesIO(b"not an image"))


def test_image_file_names_output(tmp_path):
    infile = _save(tmp_path / "cat.png")
    outfile = image_file(infile)
    assert outfile == str(tmp_path / "cat.thumb.png")
    with Image.open(outfile) as result:
        assert result.format == "JPEG"
        assert result.size == (128, 64)


def test_image_file_without_extension(tmp_path):
    infile = _save(tmp_path / "cat")
    assert image_file(infile) == str(tmp_path / "cat.thumb")


def test_image_file2_explicit_output(tmp_path):
    infile = _save(tmp_path / "in.png", size=(64, 256))
    outfile = str(tmp_path / "out.jpg")
    image_file2(outfile, infile)
    with Image.open(outfile) as result:
        assert result.size == (32, 128)


def test_image_file_bad_content(tmp_path):
    infile = tmp_path / "bad.jpg"
    infile.write_bytes(b"not an image")
    with pytest.raises(OSError, match="scaling"):
        image_file(str(infile))


def test_image_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        image_file(str(tmp_path / "missing.jpg"))


def test_make_thumbnails(tmp_path):
    files = [_save(tmp_path / f"{name}.png") for name in ("a", "b", "c")]
    thumbs = make_thumbnails(files)
    assert sorted(thumbs) == sorted(str(tmp_path / f"{name}.thumb.png") for name in ("a", "b", "c"))
    assert all(os.path.getsize(thumb) > 0 for thumb in thumbs)


def test_make_thumbnails_empty():
    assert make_thumbnails([]) == []


def test_make_thumbnails_reports_failure(tmp_path):
    good = _save(tmp_path / "good.png")
    with pytest.raises(FileNotFoundError):
        make_thumbnails([good, str(tmp_path / "missing.png")])