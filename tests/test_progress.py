"""Tests for progress reporters."""

from src.domain.interfaces import ProgressReporter
from src.shared.progress import (
    CompositeProgressReporter,
    CountingProgressReporter,
    NullProgressReporter,
    TqdmProgressReporter,
    make_progress_reporter,
)


class TestCountingProgressReporter:
    """Test the callback-forwarding reporter."""

    def test_forwards_counts(self, progress_log):
        reporter = CountingProgressReporter(progress_log)
        reporter.set_total(10)
        reporter.update(4)
        reporter.finish()

        assert progress_log == [(4, 10), (10, 10)]
        assert reporter.finished

    def test_set_total_resets(self):
        reporter = CountingProgressReporter()
        reporter.set_total(5)
        reporter.finish()
        reporter.set_total(8)

        assert reporter.current == 0
        assert reporter.total == 8
        assert not reporter.finished

    def test_callback_errors_are_logged(self, caplog):
        def callback(current, total):
            raise ValueError("bad sink")

        reporter = CountingProgressReporter(callback)
        reporter.set_total(1)
        reporter.finish()

        assert "Progress callback failed: bad sink" in caplog.text


class TestMakeProgressReporter:
    """Test reporter selection from options."""

    def test_null_by_default(self):
        assert isinstance(make_progress_reporter(), NullProgressReporter)

    def test_callback_only(self, progress_log):
        assert isinstance(make_progress_reporter(progress_log), CountingProgressReporter)

    def test_bar_only(self):
        assert isinstance(make_progress_reporter(print_progress=True), TqdmProgressReporter)

    def test_both(self, progress_log):
        reporter = make_progress_reporter(progress_log, print_progress=True)

        assert isinstance(reporter, CompositeProgressReporter)
        reporter.set_total(3)
        reporter.update(2)
        reporter.finish()
        assert progress_log == [(2, 3), (3, 3)]

    def test_all_satisfy_protocol(self, progress_log):
        for reporter in (
            NullProgressReporter(),
            CountingProgressReporter(progress_log),
            TqdmProgressReporter(disable=True),
            CompositeProgressReporter([]),
        ):
            assert isinstance(reporter, ProgressReporter)


class TestTqdmProgressReporter:
    def test_update_before_total_is_ignored(self):
        reporter = TqdmProgressReporter(disable=True)
        reporter.update(5)
        reporter.finish()

    def test_runs_to_completion(self, capsys):
        reporter = TqdmProgressReporter(desc="Testing", disable=False)
        reporter.set_total(3)
        reporter.update(1)
        reporter.finish()

        assert "Testing" in capsys.readouterr().err

    def test_close_without_finish(self, capsys):
        reporter = TqdmProgressReporter(desc="Aborted", disable=False)
        reporter.set_total(10)
        reporter.update(4)
        reporter.close()
        reporter.close()
        reporter.finish()

        assert "Aborted" in capsys.readouterr().err


class TestCompositeProgressReporter:
    def test_close_fans_out(self, progress_log):
        counting = CountingProgressReporter(progress_log)
        reporter = CompositeProgressReporter([counting, NullProgressReporter()])
        reporter.set_total(5)
        reporter.close()

        assert counting.closed
        assert not counting.finished
        assert progress_log == []
