from random import choice, randint
from string import ascii_lowercase

import pytest

import rawstr
from rawstr import RawStr, RawString


def test_unit_construct():
    native = "aaaaa"
    big = RawStr(native)
    assert len(big) == len(native)


def test_unit_count():
    native = "aaaaa"
    big = RawStr(native)
    assert big.count("a") == 5
    assert big.count("aa") == 2


def test_unit_contains():
    big = RawStr("abcdef")
    assert "a" in big
    assert "ab" in big
    assert "xxx" not in big
    assert b"cd" in big


def test_unit_rich_comparisons():
    assert RawStr("aa") == "aa"
    assert RawStr("aa") < "b"
    assert RawString("aa") == RawStr("aa")


def test_unit_buffer_protocol():
    np = pytest.importorskip("numpy")

    array = np.frombuffer(b"hello", dtype=np.uint8)
    big = RawStr(array, encoding="posix")
    assert big == "hello"


def test_unit_split():
    native = "token1\ntoken2\ntoken3"
    big = RawStr(native)
    assert native.split("\n") == [str(piece) for piece in big.split("\n")]
    assert native.split("token3") == [str(piece) for piece in big.split("token3")]

    words = list(big.split("\n"))
    assert len(words) == 3
    assert str(words[0]) == "token1"
    assert str(words[2]) == "token3"

    assert [str(piece) for piece in big.rsplitn(2, "\n")] == ["token3", "token1\ntoken2"]


def test_unit_invalid_bytes():
    big = RawStr(b"token1\n\xfftoken2", encoding="posix")
    assert [bytes(piece) for piece in big.split("\n")] == [b"token1", b"\xfftoken2"]
    assert big.to_str() is None
    assert big.find("token2") == 8


def test_unit_globals():
    """Validates that the module-level helpers are visible from the package."""

    assert rawstr.find_raw(b"abcdef", b"bcdef") == 1
    assert rawstr.find_raw(b"abcdef", b"x") == -1
    assert rawstr.contains_raw(b"a\xffb", b"\xff")
    assert rawstr.concat(["a", "b"]) == "ab"
    assert rawstr.to_os(rawstr.from_os("abc")) == "abc"


def random_token(length: int, alphabet: str = ascii_lowercase) -> str:
    return "".join(choice(alphabet) for _ in range(length))


@pytest.mark.parametrize("repetitions", range(1, 10))
def test_unit_find_like_str(repetitions: int):
    separator = ","
    native = ",".join(random_token(randint(0, 5), "ab") for _ in range(repetitions))
    big = RawStr(native)
    needle: str = choice(["a", "ab", "ba", separator])
    assert big.find(needle) == native.find(needle)
    assert big.rfind(needle) == native.rfind(needle)
    assert [str(piece) for piece in big.split(separator)] == native.split(separator)
