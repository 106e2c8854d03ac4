"""Tests for the concordance aggregator."""

import pytest

import hetcor.io
from hetcor.config import RunConfig
from hetcor.exceptions import FetchError, MalformedInterval, RecordDecodeError, UnknownSample
from hetcor.io.regions import Region, iter_regions
from hetcor.io.vcf_reader import resolve_samples
from hetcor.metrics.concordance import ConcordanceTally, compute_concordance, run_concordance

from conftest import FakeReader, FakeRecord


class TestWholeDataset:

    def test_reference_scenario(self, fake_reader):
        tally = compute_concordance(fake_reader, 0, 1)
        assert tally.as_pair() == (3, 1)
        assert tally.finalized
        assert fake_reader.pulled == 3
        assert fake_reader.fetched == []

    def test_breakdown_per_contig(self):
        reader = FakeReader(["A", "B"], [
            FakeRecord("chr1", 1, ["0/1", "0/1"]),
            FakeRecord("chr2", 1, ["1|0", "1|0"]),
            FakeRecord("chr2", 5, ["0/0", "0/0"]),
        ])
        df = compute_concordance(reader, 0, 1).to_frame()
        assert df["Region"].tolist() == ["chr1", "chr2"]
        assert df["TotalVariants"].tolist() == [1, 2]
        assert df["ConcordantHets"].tolist() == [1, 1]
        assert df["ConcordanceRate"].tolist() == [1.0, 0.5]

    def test_unequal_renderings_never_count(self):
        reader = FakeReader(["A", "B"], [
            FakeRecord("chr1", 1, ["0/1", "1/0"]),
            FakeRecord("chr1", 2, ["0|1", "0/1"]),
            FakeRecord("chr1", 3, ["0/1", "0/0"]),
        ])
        assert compute_concordance(reader, 0, 1).as_pair() == (3, 0)

    def test_equal_non_het_never_counts(self):
        reader = FakeReader(["A", "B"], [
            FakeRecord("chr1", 1, ["1/1", "1/1"]),
            FakeRecord("chr1", 2, ["./.", "./."]),
            FakeRecord("chr1", 3, ["1/2", "1/2"]),  # multi-allelic het is not counted
        ])
        assert compute_concordance(reader, 0, 1).as_pair() == (3, 0)

    def test_sample_order_selects_columns(self):
        reader = FakeReader(["A", "B", "C"], [
            FakeRecord("chr1", 1, ["0/1", "1/1", "0/1"]),
        ])
        assert compute_concordance(reader, 0, 2).as_pair() == (1, 1)
        assert compute_concordance(reader, 0, 1).as_pair() == (1, 0)

    def test_decode_error_aborts_run(self):
        reader = FakeReader(["A", "B"], [
            FakeRecord("chr1", 1, ["0/1", "0/1"]),
            FakeRecord("chr1", 2, [], broken=True),
            FakeRecord("chr1", 3, ["0/1", "0/1"]),
        ])
        with pytest.raises(RecordDecodeError) as excinfo:
            compute_concordance(reader, 0, 1)
        assert excinfo.value.position == 2
        assert reader.pulled == 2

    def test_empty_dataset(self):
        tally = compute_concordance(FakeReader(["A", "B"], []), 0, 1)
        assert tally.as_pair() == (0, 0)
        assert tally.concordance_rate == 0.0
        assert tally.to_frame().empty


class TestIntervalList:

    def test_full_span_matches_whole_dataset(self, fake_reader, scenario_records):
        whole = compute_concordance(fake_reader, 0, 1)
        regions = [Region("chr1", 0, 50)]
        by_interval = compute_concordance(FakeReader(["A", "B"], scenario_records), 0, 1, regions)
        assert by_interval.as_pair() == whole.as_pair()

    def test_overlapping_intervals_double_count(self, fake_reader):
        regions = [Region("chr1", 0, 15), Region("chr1", 5, 12)]
        tally = compute_concordance(fake_reader, 0, 1, regions)
        # record at position 10 is visited once per interval
        assert tally.as_pair() == (2, 2)
        assert [r.label for r in tally.regions] == ["chr1:0-15", "chr1:5-12"]

    def test_regions_processed_in_given_order(self, fake_reader):
        regions = [Region("chr1", 25, 35), Region("chr1", 0, 15)]
        tally = compute_concordance(fake_reader, 0, 1, regions)
        assert fake_reader.fetched == regions
        assert [(r.total_variants, r.concordant_hets) for r in tally.regions] == [(1, 0), (1, 1)]

    def test_empty_interval_contributes_nothing(self, fake_reader):
        tally = compute_concordance(fake_reader, 0, 1, [Region("chr1", 40, 45)])
        assert tally.as_pair() == (0, 0)
        assert len(tally.regions) == 1

    def test_malformed_line_fails_before_its_fetch(self, fake_reader, write_bed):
        path = write_bed(["chr1\t0\t15", "chr1\t100"])
        with pytest.raises(MalformedInterval):
            compute_concordance(fake_reader, 0, 1, iter_regions(path))
        # only the first, well-formed interval was fetched
        assert [r.label for r in fake_reader.fetched] == ["chr1:0-15"]

    def test_first_line_malformed_means_no_fetch(self, fake_reader, write_bed):
        path = write_bed(["chr1\t100"])
        with pytest.raises(MalformedInterval):
            compute_concordance(fake_reader, 0, 1, iter_regions(path))
        assert fake_reader.fetched == []
        assert fake_reader.pulled == 0

    def test_fetch_error_propagates(self, fake_reader):
        class FailingReader(FakeReader):
            def fetch(self, region):
                raise FetchError(region, "no index")

        reader = FailingReader(["A", "B"], [])
        with pytest.raises(FetchError):
            compute_concordance(reader, 0, 1, [Region("chr1", 0, 10)])


class TestTally:

    def test_invariant_holds_after_every_update(self):
        tally = ConcordanceTally()
        bucket = tally.open_region("chr1")
        for concordant in [True, False, True, False, False]:
            tally.record(bucket, concordant)
            assert tally.concordant_hets <= tally.total_variants
        assert tally.as_pair() == (5, 2)

    def test_finalized_tally_is_read_only(self):
        tally = ConcordanceTally()
        bucket = tally.open_region("chr1")
        tally.finalize()
        with pytest.raises(RuntimeError):
            tally.record(bucket, True)


class TestRunConcordance:

    def test_unknown_sample_fails_before_iteration(self, monkeypatch, scenario_records):
        opened = []

        def factory(path, require_index=True):
            reader = FakeReader(["A", "B"], scenario_records)
            opened.append(reader)
            return reader

        monkeypatch.setattr(hetcor.io, "IndexedVCFReader", factory)
        with pytest.raises(UnknownSample) as excinfo:
            run_concordance(RunConfig(vcf="any.vcf.gz", first="A", second="Z"))
        assert excinfo.value.sample == "Z"
        assert opened[0].pulled == 0
        assert opened[0].closed

    def test_resolve_samples_checks_both(self, fake_reader):
        assert resolve_samples(fake_reader, "B", "A") == (1, 0)
        with pytest.raises(UnknownSample):
            resolve_samples(fake_reader, "X", "A")
        assert fake_reader.pulled == 0

    def test_run_with_regions(self, monkeypatch, scenario_records, write_bed):
        seen = {}

        def factory(path, require_index=True):
            seen["require_index"] = require_index
            return FakeReader(["A", "B"], scenario_records)

        monkeypatch.setattr(hetcor.io, "IndexedVCFReader", factory)
        bed = write_bed(["chr1\t0\t50"])
        tally = run_concordance(RunConfig(vcf="any.vcf.gz", first="A", second="B", regions=bed))
        assert tally.as_pair() == (3, 1)
        assert seen["require_index"] is True
