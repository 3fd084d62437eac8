"""Unit tests: free-form input coercion."""
import pytest

from utils.coercion import MAX_INT, coerce_like, to_bool, to_non_negative_float, to_non_negative_int

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "raw,expected",
    [(42, 42), ("17", 17), ("12s", 12), ("  8 ", 8), ("abc", 0), ("", 0), (None, 0), (-5, 0), ("-3", 0), (7.9, 7)],
)
def test_to_non_negative_int(raw, expected):
    """Junk text becomes 0 and negatives are clamped; leading digits are kept."""
    assert to_non_negative_int(raw) == expected


def test_to_non_negative_float_handles_text_and_nan():
    """Leading numeric text is used; NaN and negatives become 0.0."""
    assert to_non_negative_float("0.25") == 0.25
    assert to_non_negative_float(".5x") == 0.5
    assert to_non_negative_float("junk") == 0.0
    assert to_non_negative_float(float("nan")) == 0.0
    assert to_non_negative_float(-1.5) == 0.0


def test_to_bool_strings():
    """Only true/1/yes/on strings count as checked."""
    assert to_bool("true") is True
    assert to_bool("On") is True
    assert to_bool("false") is False
    assert to_bool("0") is False
    assert to_bool(1) is True


def test_coerce_like_follows_current_type():
    """The field's current type picks the coercion."""
    assert coerce_like(10, "25") == 25
    assert coerce_like(True, "no") is False
    assert coerce_like(0.1, "0.3") == 0.3
    assert coerce_like("old", 5) == "5"
    assert coerce_like("old", None) == ""


@pytest.mark.parametrize(
    "raw",
    ["99999999999999999999", 10**20, 1e300, float("inf"), "9" * 5000, "0000000000002147483648"],
)
def test_to_non_negative_int_clamps_oversized_input(raw):
    """Numbers beyond the storable range clamp to MAX_INT instead of overflowing."""
    assert to_non_negative_int(raw) == MAX_INT


def test_to_non_negative_int_keeps_max_and_zero_padded():
    """The bound itself and zero-padded small numbers pass through unchanged."""
    assert to_non_negative_int(str(MAX_INT)) == MAX_INT
    assert to_non_negative_int("000000000000042") == 42


def test_to_non_negative_float_huge_int():
    """A huge integer coerces to a finite float."""
    assert to_non_negative_float(10**400) == float(MAX_INT)
