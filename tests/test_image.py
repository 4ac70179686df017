import numpy as np
import pytest
from PIL import Image as PILImage

from ascii_art.errors import InvalidResolution
from ascii_art.image import Image, load_image, next_power_of_two, pad_to_power_of_two


def test_next_power_of_two():
    assert [next_power_of_two(n) for n in (1, 2, 3, 5, 8, 9, 100)] == [1, 2, 4, 8, 8, 16, 128]


def test_pad_centers_on_white():
    src = PILImage.new("RGB", (6, 3), (0, 0, 0))
    padded = pad_to_power_of_two(src)
    assert padded.size == (8, 4)
    arr = np.asarray(padded)
    assert (arr[0, 0] == 255).all()
    assert (arr[1, 1] == 0).all()
    assert (arr[:, 7] == 255).all()


def test_pad_keeps_power_of_two_size():
    src = PILImage.new("RGB", (16, 8), (1, 2, 3))
    assert pad_to_power_of_two(src).size == (16, 8)


def test_load_image_pads(tmp_path):
    path = tmp_path / "in.png"
    PILImage.new("RGB", (10, 5), (20, 30, 40)).save(path)
    img = load_image(str(path))
    assert (img.width, img.height) == (16, 8)
    raw = load_image(str(path), pad=False)
    assert (raw.width, raw.height) == (10, 5)


def test_load_image_converts_to_rgb(tmp_path):
    path = tmp_path / "grey.png"
    PILImage.new("L", (4, 4), 100).save(path)
    img = load_image(str(path))
    assert img.pixels().tolist() == [[100, 100, 100]] * 16


def test_pixels_row_major():
    arr = np.arange(2 * 3 * 3, dtype=np.uint8).reshape(2, 3, 3)
    img = Image.from_array(arr)
    assert (img.width, img.height) == (3, 2)
    assert img.pixels().shape == (6, 3)
    assert img.pixels()[1].tolist() == [3, 4, 5]


def test_immutable():
    img = Image.solid(2, 2, (0, 0, 0))
    with pytest.raises(ValueError):
        img.array[0, 0] = 1


def test_square_sub_images_tile_row_major():
    arr = np.zeros((4, 4, 3), dtype=np.uint8)
    arr[0:2, 2:4] = 1
    arr[2:4, 0:2] = 2
    arr[2:4, 2:4] = 3
    tiles = list(Image.from_array(arr).square_sub_images(2))
    assert [int(t.pixels()[0, 0]) for t in tiles] == [0, 1, 2, 3]
    assert all((t.width, t.height) == (2, 2) for t in tiles)


def test_square_sub_images_requires_divisor():
    with pytest.raises(InvalidResolution):
        list(Image.solid(6, 4, (0, 0, 0)).square_sub_images(4))


def test_fingerprint_tracks_content():
    a = Image.solid(2, 2, (5, 5, 5))
    b = Image.solid(2, 2, (5, 5, 5))
    c = Image.solid(2, 2, (6, 5, 5))
    assert a.fingerprint == b.fingerprint
    assert a == b and hash(a) == hash(b)
    assert a.fingerprint != c.fingerprint
    assert a != c


def test_rejects_bad_shape():
    with pytest.raises(ValueError):
        Image(np.zeros((2, 2), dtype=np.uint8))


def test_caller_array_changes_do_not_leak_in():
    arr = np.zeros((2, 2, 3), dtype=np.uint8)
    img = Image(arr)
    before = img.fingerprint
    arr[...] = 255
    assert img.pixels().max() == 0
    assert img.fingerprint == before


def test_sub_images_are_read_only():
    tile = next(Image.solid(4, 4, (1, 1, 1)).square_sub_images(2))
    with pytest.raises(ValueError):
        tile.array[0, 0] = 9
