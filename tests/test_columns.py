import pytest

from epr.spreadsheet.columns import column_letter_to_number, column_number_to_letter, offset_column


@pytest.mark.parametrize(
    "number, letters",
    [(1, "A"), (26, "Z"), (27, "AA"), (52, "AZ"), (53, "BA"), (702, "ZZ"), (703, "AAA"), (18278, "ZZZ")],
)
def test_column_number_and_letters_convert_both_ways(number, letters):
    assert column_number_to_letter(number) == letters
    assert column_letter_to_number(letters) == number


def test_every_column_up_to_zzz_survives_a_round_trip():
    for number in range(1, 18279):
        assert column_letter_to_number(column_number_to_letter(number)) == number


@pytest.mark.parametrize("number", [0, -1])
def test_column_number_must_be_positive(number):
    with pytest.raises(ValueError):
        column_number_to_letter(number)


@pytest.mark.parametrize("letters", ["", "a", "A1", "Ä"])
def test_column_label_must_be_uppercase_letters(letters):
    with pytest.raises(ValueError):
        column_letter_to_number(letters)


def test_offset_column():
    assert offset_column("B", 0) == "B"
    assert offset_column("B", 2) == "D"
    assert offset_column("Z", 1) == "AA"
    with pytest.raises(ValueError):
        offset_column("B", -1)
