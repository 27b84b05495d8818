import json
import os
import tempfile
import threading
import unittest

from charter_survey.records import DEFAULT_OFFICES, SurveyRecord, with_changes
from charter_survey.record_store import JsonFileBackend, MemoryBackend, RecordStore


def _record(record_id, **fields):
    return SurveyRecord(id=record_id, timestamp="2025-03-01T08:00:00Z", **fields)


class TestRecordStore(unittest.TestCase):
    def setUp(self):
        self.backend = MemoryBackend()
        self.store = RecordStore(self.backend)
        self.record1 = _record("r1", office="HR", sqd0="SA")
        self.record2 = _record("r2", office="ICT", sqd0="D")

    def test_append_and_load(self):
        self.store.append(self.record1)
        self.store.append(self.record2)
        self.assertEqual(self.store.load(), [self.record1, self.record2])
        self.assertEqual(self.store.count(), 2)
        self.assertEqual(self.store.get("r2"), self.record2)
        self.assertIsNone(self.store.get("nope"))

    def test_append_duplicate_id_raises_value_error(self):
        self.store.append(self.record1)
        with self.assertRaisesRegex(ValueError, "Record with ID r1 already exists."):
            self.store.append(_record("r1"))
        self.assertEqual(self.store.count(), 1)

    def test_load_returns_snapshot(self):
        self.store.append(self.record1)
        snapshot = self.store.load()
        snapshot.clear()
        self.assertEqual(self.store.count(), 1)

    def test_update_replaces_in_place(self):
        self.store.append(self.record1)
        self.store.append(self.record2)
        fixed = with_changes(self.record1, sqd0="A")
        self.store.update(fixed)
        self.assertEqual(self.store.load(), [fixed, self.record2])

    def test_update_unknown_record_raises_value_error(self):
        with self.assertRaisesRegex(ValueError, "Record with ID r1 not found for update."):
            self.store.update(self.record1)

    def test_replace_all_and_clear(self):
        self.store.append(self.record1)
        self.store.replace_all([self.record2])
        self.assertEqual(self.store.load(), [self.record2])
        self.store.add_office("Library")
        self.store.clear()
        self.assertEqual(self.store.count(), 0)
        self.assertIn("Library", self.store.offices())

    def test_writes_through_to_backend(self):
        self.store.append(self.record1)
        payload = self.backend.read()
        self.assertEqual(payload["records"], [self.record1.to_dict()])
        self.assertEqual(payload["offices"], list(DEFAULT_OFFICES))

    def test_loads_existing_payload(self):
        backend = MemoryBackend({"records": [self.record1.to_dict()], "offices": ["HR"]})
        store = RecordStore(backend)
        self.assertEqual(store.load(), [self.record1])
        self.assertEqual(store.offices(), ["HR"])

    def test_office_list(self):
        self.assertEqual(self.store.offices(), list(DEFAULT_OFFICES))
        self.store.add_office("  Library ")
        self.store.add_office("Library")
        self.assertEqual(self.store.offices().count("Library"), 1)
        with self.assertRaises(ValueError):
            self.store.add_office("   ")
        self.assertTrue(self.store.remove_office("Library"))
        self.assertFalse(self.store.remove_office("Library"))

    def test_concurrent_appends(self):
        def worker(start):
            for i in range(start, start + 25):
                self.store.append(_record(f"r{i}"))

        threads = [threading.Thread(target=worker, args=(n * 25,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(self.store.count(), 100)
        self.assertEqual(len({r.id for r in self.store.load()}), 100)


class TestJsonFileBackend(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "store", "records.json")

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_missing_file_reads_empty(self):
        self.assertEqual(JsonFileBackend(self.path).read(), {})

    def test_persists_across_instances(self):
        store = RecordStore(JsonFileBackend(self.path))
        store.append(_record("r1", client_type="C, B", comments="Salamat po"))

        reopened = RecordStore(JsonFileBackend(self.path))
        self.assertEqual(reopened.load(), store.load())
        with open(self.path, encoding="utf-8") as fh:
            data = json.load(fh)
        self.assertEqual(data["records"][0]["clientType"], ["C", "B"])
        self.assertFalse(os.path.exists(self.path + ".tmp"))

    def test_rejects_non_object_payload(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump([1, 2, 3], fh)
        with self.assertRaises(ValueError):
            RecordStore(JsonFileBackend(self.path))


if __name__ == "__main__":
    unittest.main()
