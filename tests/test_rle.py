import pytest  # type: ignore

from knit.rle import rle_encode, rle_decode, encode, decode


def test_rle_encode() -> None:
    assert rle_encode("WWWaaBBBBBc") == ("3W2a5B1c", "")
    assert rle_encode("") == ("", "")


def test_rle_decode() -> None:
    assert rle_decode("3W2a5B1c") == ("WWWaaBBBBBc", "")
    assert rle_decode("3W2a5B1cABC") == ("WWWaaBBBBBc", "ABC")
    assert rle_decode("12x") == ("x" * 12, "")


@pytest.mark.parametrize(
    "string",
    ["", "a", "WWWaaBBBBBc", "abc", "aaaaaaaaaaaaaaab", "  \n\n!!", "ééé"],
)
def test_round_trip(string: str) -> None:
    assert decode(encode(string)) == string
