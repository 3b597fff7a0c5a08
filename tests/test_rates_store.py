import shutil

import pytest

from src.data.rates import load_rate_table
from src.utils import rates_store
from src.utils.rates_store import ensure_rates_downloaded, parse_s3_uri

from conftest import SAMPLE_RATES_PATH


class TestParseS3Uri:

    def test_bucket_and_key(self):
        assert parse_s3_uri("s3://rates-bucket/vbi/premium_rates.csv") == ("rates-bucket", "vbi/premium_rates.csv")

    @pytest.mark.parametrize("uri", ["https://example.com/rates.csv", "s3:///no-bucket.csv", "rates.csv"])
    def test_rejects_non_s3(self, uri):
        with pytest.raises(ValueError, match="s3://"):
            parse_s3_uri(uri)


class TestEnsureRatesDownloaded:

    def test_existing_file_is_not_downloaded(self, monkeypatch):
        def _fail(*args, **kwargs):
            raise AssertionError("should not download")

        monkeypatch.setattr(rates_store, "s3_download_file", _fail)
        assert ensure_rates_downloaded(local_path=SAMPLE_RATES_PATH, rates_s3_uri="s3://b/k.csv") == SAMPLE_RATES_PATH

    def test_downloads_missing_file(self, monkeypatch, tmp_path):
        calls = []

        def _download(bucket, key, local_path, region=None):
            calls.append((bucket, key, region))
            shutil.copy(SAMPLE_RATES_PATH, local_path)

        monkeypatch.setattr(rates_store, "s3_download_file", _download)
        target = tmp_path / "rates.csv"
        path = ensure_rates_downloaded(local_path=target, rates_s3_uri="s3://b/rates/premium_rates.csv", aws_region="ap-southeast-1")

        assert path == target and target.exists()
        assert calls == [("b", "rates/premium_rates.csv", "ap-southeast-1")]

    def test_loader_falls_back_to_s3(self, monkeypatch, tmp_path):
        def _download(bucket, key, local_path, region=None):
            shutil.copy(SAMPLE_RATES_PATH, local_path)

        monkeypatch.setattr(rates_store, "s3_download_file", _download)
        monkeypatch.setenv("RATES_PATH", str(tmp_path / "cache" / "rates.csv"))
        monkeypatch.setenv("RATES_S3_URI", "s3://b/premium_rates.csv")

        assert len(load_rate_table()) == 76
