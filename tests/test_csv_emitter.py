from fourd.scraper.models import Company, DrawRecord
from fourd.storage.csv_emitter import partition_records, read_partition, write_partitions

HEADER = "Date,Company,First,Second,Third,Special,Consolation"


def _records(rows):
    return [DrawRecord.from_row(row) for row in rows]


def test_magnum_scenario(tmp_path, sample_rows):
    counts = write_partitions(tmp_path, _records(sample_rows))

    assert counts == {"magnum": 1, "toto": 0, "damacai": 0}
    assert (tmp_path / "magnum.csv").read_text(encoding="utf-8").splitlines() == [
        HEADER,
        "2024-01-01,Magnum,1234,5678,9012,1111|2222,3333|4444",
    ]
    assert (tmp_path / "toto.csv").read_text(encoding="utf-8").splitlines() == [HEADER]
    assert (tmp_path / "damacai.csv").read_text(encoding="utf-8").splitlines() == [HEADER]


def test_partition_is_a_filter_preserving_order():
    rows = [
        {"Company": "TOTO", "Date": "d1"},
        {"Company": "Sports Toto", "Date": "d2"},
        {"Company": "magnum", "Date": "d3"},
        {"Date": "d4"},
        {"Company": "Toto", "Date": "d5"},
        {"Company": "DAMACAI", "Date": "d6"},
    ]

    partitions = partition_records(_records(rows))

    assert list(partitions) == ["magnum", "toto", "damacai"]
    assert [r.date for r in partitions["toto"]] == ["d1", "d5"]
    assert [r.date for r in partitions["magnum"]] == ["d3"]
    assert sum(len(p) for p in partitions.values()) == 4


def test_partition_with_subset_of_companies():
    rows = [{"Company": "Magnum"}, {"Company": "Toto"}]

    partitions = partition_records(_records(rows), [Company.TOTO])

    assert list(partitions) == ["toto"]
    assert len(partitions["toto"]) == 1


def test_rewrite_is_byte_identical(tmp_path, sample_rows):
    rows = sample_rows + [{"Company": "toto", "Date": "2024-01-02", "Special": "1, 2"}]
    write_partitions(tmp_path, _records(rows))
    first = {p.name: p.read_bytes() for p in tmp_path.glob("*.csv")}

    write_partitions(tmp_path, _records(rows))
    second = {p.name: p.read_bytes() for p in tmp_path.glob("*.csv")}

    assert first == second


def test_fields_with_commas_and_quotes_are_quoted(tmp_path):
    rows = [{"Company": "Magnum", "Date": "Sat, 6 Jan 2024", "First": 'say "hi"'}]

    write_partitions(tmp_path, _records(rows))
    lines = (tmp_path / "magnum.csv").read_text(encoding="utf-8").splitlines()

    assert lines[1] == '"Sat, 6 Jan 2024",Magnum,"say ""hi""",,,,'
    back = read_partition(tmp_path / "magnum.csv")
    assert back[0].date == "Sat, 6 Jan 2024"
    assert back[0].first == 'say "hi"'


def test_read_back_reconstructs_sub_values(tmp_path):
    rows = [{"Company": "damacai", "Special": " 0001 ,0002,  0003", "Consolation": "9999"}]
    original = _records(rows)

    write_partitions(tmp_path, original)
    back = read_partition(tmp_path / "damacai.csv")

    assert back == original
    assert back[0].special == ("0001", "0002", "0003")
    assert back[0].consolation == ("9999",)


def test_overwrites_stale_file(tmp_path, sample_rows):
    (tmp_path / "toto.csv").write_text("old content\n", encoding="utf-8")

    write_partitions(tmp_path, _records(sample_rows))

    assert (tmp_path / "toto.csv").read_text(encoding="utf-8") == HEADER + "\n"
