import pytest

from fluenthttp.utils import check, not_blank, not_null


def test_not_null_returns_value():
    assert not_null(0, "value") == 0


def test_not_null_names_the_argument():
    with pytest.raises(ValueError, match="uri must not be None"):
        not_null(None, "uri")


@pytest.mark.parametrize("value", [None, "", "   "])
def test_not_blank_rejects(value):
    with pytest.raises(ValueError):
        not_blank(value, "name")


def test_check():
    check(True, "unused")
    with pytest.raises(ValueError, match="odd"):
        check(False, "odd")
