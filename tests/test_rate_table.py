"""
tests/test_rate_table.py - RateTable construction, lookup and dataset loading.
"""

import pandas as pd
import pytest

from src.data.rates import load_rate_table, records_from_frame
from src.rating.currency import NOT_APPLICABLE
from src.rating.table import Benefit, ContractType, Gender, RateRecord, build_rate_table, rate_key

from conftest import SAMPLE_RATES_PATH, row

MAIN = Benefit.MAIN.value
IND = ContractType.INDEPENDENT.value
BUN = ContractType.BUNDLED.value
M = Gender.MALE.value
F = Gender.FEMALE.value


class TestBuildRateTable:

    def test_one_entry_per_sample_row(self, rate_table):
        rows = len(pd.read_csv(SAMPLE_RATES_PATH))
        assert len(rate_table) == rows

    def test_key_is_age_benefit_contract_gender(self, rate_table):
        assert (25, MAIN, IND, M) in rate_table

    def test_empty_input_gives_empty_table(self):
        table = build_rate_table([])
        assert len(table) == 0
        assert table.lookup(25, Benefit.MAIN, ContractType.INDEPENDENT, Gender.MALE) is None

    def test_later_duplicate_wins(self):
        first = row(25, MAIN, IND, M, "1", "2", "3", "4", "5")
        second = row(25, MAIN, IND, M, "10", "20", "30", "40", "50")
        table = build_rate_table([first, second])
        assert len(table) == 1
        assert table.lookup(25, MAIN, IND, M) is second

    def test_records_are_immutable(self):
        record = row(25, MAIN, IND, M, "1", "2", "3", "4", "5")
        with pytest.raises(AttributeError):
            record.package1 = "9"  # type: ignore[misc]


class TestLookup:

    def test_enum_and_label_lookups_agree(self, rate_table):
        by_enum = rate_table.lookup(25, Benefit.MAIN, ContractType.INDEPENDENT, Gender.MALE)
        by_label = rate_table.lookup(25, MAIN, IND, M)
        assert by_enum is not None
        assert by_enum is by_label

    def test_record_has_five_package_cells(self, rate_table):
        record = rate_table.lookup(25, MAIN, IND, M)
        assert [record.package_cell(t) for t in range(1, 6)] == [
            "963,000", "1,284,000", "1,926,000", "2,247,000", "2,889,000",
        ]

    @pytest.mark.parametrize("age", [0, 66, 200, -1])
    def test_missing_age_is_absent(self, rate_table, age):
        assert rate_table.lookup(age, MAIN, IND, M) is None

    def test_no_nearest_age_matching(self, rate_table):
        # 26 sits between covered sample ages 25 and 35
        assert rate_table.lookup(26, MAIN, IND, M) is None

    def test_unknown_benefit_is_absent(self, rate_table):
        assert rate_table.lookup(25, "INVALID_BENEFIT", IND, M) is None

    def test_package_cell_outside_range_raises(self):
        record = row(25, MAIN, IND, M, "1", "2", "3", "4", "5")
        with pytest.raises(KeyError):
            record.package_cell(6)

    def test_rate_key_uses_plain_labels(self):
        assert rate_key(25, Benefit.MAIN, ContractType.BUNDLED, Gender.FEMALE) == (25, MAIN, BUN, F)


class TestLoadRates:

    def test_sample_sheet_loads(self):
        table = load_rate_table(SAMPLE_RATES_PATH)
        assert table.ages() == [1, 10, 18, 19, 25, 35, 50, 51, 61, 65]

    def test_not_applicable_cells_survive_loading(self, rate_table):
        record = rate_table.lookup(61, MAIN, IND, M)
        assert record.package3 == NOT_APPLICABLE

    def test_legacy_column_names_are_accepted(self):
        df = pd.DataFrame(
            [{"age": "25", "benefit": MAIN, "type": IND, "gender": M, "ageBand": "19-30 tuổi",
              "package1": "963,000", "package2": "1,284,000", "package3": "1,926,000",
              "package4": "2,247,000", "package5": "2,889,000"}]
        )
        records = records_from_frame(df)
        assert records == [
            RateRecord(25, MAIN, IND, M, "963,000", "1,284,000", "1,926,000", "2,247,000", "2,889,000", "19-30 tuổi")
        ]

    def test_missing_columns_raise(self):
        df = pd.DataFrame([{"age": 25, "benefit": MAIN}])
        with pytest.raises(ValueError, match="Missing required columns"):
            records_from_frame(df)

    def test_non_integer_age_raises(self):
        df = pd.DataFrame(
            [{"age": "twenty", "benefit": MAIN, "contract_type": IND, "gender": M,
              "package1": "1", "package2": "2", "package3": "3", "package4": "4", "package5": "5"}]
        )
        with pytest.raises(ValueError, match="age must be an integer"):
            records_from_frame(df)

    def test_parquet_round_trip(self, tmp_path):
        df = pd.read_csv(SAMPLE_RATES_PATH, dtype=str)
        path = tmp_path / "rates.parquet"
        df.to_parquet(path, index=False)
        table = load_rate_table(path)
        assert len(table) == len(df)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_rate_table(tmp_path / "nope.csv")

    def test_env_path_is_used_when_no_path_given(self, monkeypatch):
        monkeypatch.setenv("RATES_PATH", str(SAMPLE_RATES_PATH))
        monkeypatch.delenv("RATES_S3_URI", raising=False)
        assert len(load_rate_table()) > 0

    def test_missing_env_file_without_s3_uri_raises(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RATES_PATH", str(tmp_path / "absent.csv"))
        monkeypatch.delenv("RATES_S3_URI", raising=False)
        with pytest.raises(FileNotFoundError, match="RATES_S3_URI"):
            load_rate_table()
