import csv
import json
import tempfile
import unittest
from pathlib import Path

from gravity_sandbox.core.logging_utils import RunLogger


class TestRunLogger(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name) / "runs"

    def tearDown(self):
        self._tmp.cleanup()

    def test_creates_run_folder_and_last_run_pointer(self):
        with RunLogger(self.root, run_id="demo") as recorder:
            self.assertTrue(recorder.run_dir.is_dir())
            self.assertEqual(recorder.run_dir, self.root / "demo")
        pointer = self.root / RunLogger.LAST_RUN_FILENAME
        self.assertEqual(pointer.read_text(encoding="utf-8"), "demo")

    def test_existing_run_id_gets_suffix(self):
        RunLogger(self.root, run_id="demo").close()
        second = RunLogger(self.root, run_id="demo")
        second.close()
        self.assertEqual(second.run_id, "demo_01")
        self.assertEqual((self.root / RunLogger.LAST_RUN_FILENAME).read_text(encoding="utf-8"), "demo_01")

    def test_rows_are_flushed_on_close(self):
        recorder = RunLogger(self.root, run_id="ts", timeseries_flush_threshold=100)
        for i in range(3):
            recorder.log_ts([i * 0.5, 1.0, 2.0, 3.0, 4.0, -5.0, 0.0, 0.0, 0.1, 250.0, 0])
        recorder.close()
        recorder.close()

        with recorder.timeseries_path.open(newline="") as fh:
            rows = list(csv.DictReader(fh))
        self.assertEqual(len(rows), 3)
        self.assertEqual(list(rows[0]), RunLogger.TIMESERIES_HEADER)
        self.assertEqual(float(rows[2]["t"]), 1.0)
        self.assertEqual(int(float(rows[0]["focus"])), 0)

    def test_rows_reach_disk_at_flush_threshold(self):
        recorder = RunLogger(self.root, run_id="batch", timeseries_flush_threshold=2)
        row = [0.0, 1.0, 2.0, 3.0, 4.0, -5.0, 0.0, 0.0, 0.1, 250.0, 0]
        recorder.log_ts(row)
        recorder.log_ts(row)
        with recorder.timeseries_path.open(newline="") as fh:
            self.assertEqual(len(list(csv.DictReader(fh))), 2)
        recorder.close()

    def test_nan_values_are_written(self):
        with RunLogger(self.root, run_id="nan") as recorder:
            nan = float("nan")
            recorder.log_ts([0.0, 1.0, 2.0, 3.0, 4.0, -5.0, 0.0, 0.0, nan, nan, -1])
        with recorder.timeseries_path.open(newline="") as fh:
            row = next(csv.DictReader(fh))
        self.assertEqual(row["e"], "nan")

    def test_wrong_value_count_raises(self):
        with RunLogger(self.root, run_id="bad") as recorder:
            with self.assertRaises(ValueError):
                recorder.log_ts([0.0, 1.0])
            with self.assertRaises(ValueError):
                recorder.log_event([0.0, "orbit_lost"])

    def test_event_details_survive_csv_quoting(self):
        details = json.dumps({"from": 0, "to": -1})
        with RunLogger(self.root, run_id="events") as recorder:
            recorder.log_event([1.5, "orbit_lost", -1, float("nan"), details])
        with recorder.events_path.open(newline="") as fh:
            rows = list(csv.DictReader(fh))
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["type"], "orbit_lost")
        self.assertEqual(json.loads(rows[0]["details"]), {"from": 0, "to": -1})

    def test_write_meta(self):
        with RunLogger(self.root, run_id="meta") as recorder:
            recorder.write_meta({"G": 1.0, "seed": 7})
        with recorder.meta_path.open(encoding="utf-8") as fh:
            self.assertEqual(json.load(fh), {"G": 1.0, "seed": 7})


if __name__ == '__main__':
    unittest.main()
