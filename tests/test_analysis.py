from fourd.analysis import number_frequencies, top_numbers
from fourd.scraper.models import DrawRecord


def _record(first, second="", third="", special=(), consolation=()):
    return DrawRecord(date="", company="magnum", first=first, second=second, third=third,
                      special=tuple(special), consolation=tuple(consolation))


def test_ties_keep_first_encounter_order():
    # C is seen first but only 3 times; B is seen before A and both appear 5 times
    records = [_record("C", "B", "A")] + [_record("B", "A", "C")] * 2 + [_record("A", "B")] * 2

    assert top_numbers(records, 3) == [("B", 5), ("A", 5), ("C", 3)]


def test_counts_all_fields_and_skips_blanks():
    records = [_record("1234", special=["1111", "1234"], consolation=["1111"])]

    counts = number_frequencies(records)

    assert counts == {"1234": 2, "1111": 2}
    assert "" not in counts


def test_limit():
    records = [_record(str(n)) for n in range(20)]

    assert len(top_numbers(records)) == 10
    assert top_numbers(records, 2) == [("0", 1), ("1", 1)]
