import sys
import unittest
from pathlib import Path

_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from core.domain.models import MovieDetail, WatchedRecord
from core.errors import DuplicateWatchedError, InvalidRatingError
from core.services.aggregates import mean
from core.services.watched_store import WatchedListStore


def _record(imdb_id: str, imdb_rating: float, user_rating: int, runtime: float) -> WatchedRecord:
    return WatchedRecord(
        imdb_id=imdb_id,
        title=f"Movie {imdb_id}",
        imdb_rating=imdb_rating,
        user_rating=user_rating,
        runtime=runtime,
    )


class TestMean(unittest.TestCase):
    def test_empty_is_zero(self):
        self.assertEqual(mean([]), 0)

    def test_arithmetic_mean(self):
        self.assertEqual(mean([2, 4, 6]), 4)
        self.assertAlmostEqual(mean([8.8, 7.5]), 8.15)

    def test_accepts_generators(self):
        self.assertEqual(mean(x for x in (1, 2)), 1.5)


class TestWatchedListStore(unittest.TestCase):
    def test_insertion_order_and_summary(self):
        store = WatchedListStore()
        records = [
            _record("tt1375666", 8.8, 10, 148),
            _record("tt0088763", 8.5, 9, 116),
            _record("tt0133093", 8.7, 8, 136),
        ]
        for record in records:
            store.add(record)

        self.assertEqual(store.all(), tuple(records))
        self.assertEqual(len(store), 3)

        summary = store.summary()
        self.assertEqual(summary.count, 3)
        self.assertAlmostEqual(summary.avg_imdb_rating, (8.8 + 8.5 + 8.7) / 3)
        self.assertAlmostEqual(summary.avg_user_rating, 9)
        self.assertAlmostEqual(summary.avg_runtime, (148 + 116 + 136) / 3)

    def test_empty_summary_is_zeros(self):
        summary = WatchedListStore().summary()
        self.assertEqual(summary.count, 0)
        self.assertEqual(summary.avg_imdb_rating, 0)
        self.assertEqual(summary.avg_user_rating, 0)
        self.assertEqual(summary.avg_runtime, 0)

    def test_summary_follows_mutations(self):
        store = WatchedListStore([_record("tt1", 8.0, 6, 100)])
        self.assertEqual(store.summary().avg_user_rating, 6)
        store.add(_record("tt2", 6.0, 10, 120))
        self.assertEqual(store.summary().avg_user_rating, 8)
        store.remove("tt1")
        self.assertEqual(store.summary().count, 1)
        self.assertEqual(store.summary().avg_runtime, 120)

    def test_rating_above_scale_rejected(self):
        store = WatchedListStore(max_rating=10)
        with self.assertRaises(InvalidRatingError):
            store.add(_record("tt1", 8.0, 50, 100))
        self.assertEqual(len(store), 0)
        store.add(_record("tt1", 8.0, 10, 100))
        self.assertEqual(len(store), 1)

    def test_duplicate_id_rejected(self):
        store = WatchedListStore()
        store.add(_record("tt1", 8.0, 6, 100))
        with self.assertRaises(DuplicateWatchedError):
            store.add(_record("tt1", 8.0, 9, 100))
        self.assertEqual(len(store), 1)

    def test_lookup_and_remove(self):
        store = WatchedListStore([_record("tt1", 8.0, 6, 100), _record("tt2", 7.0, 5, 90)])
        self.assertIn("tt2", store)
        self.assertEqual(store.get("tt2").user_rating, 5)
        self.assertIsNone(store.get("tt3"))
        self.assertTrue(store.remove("tt1"))
        self.assertFalse(store.remove("tt1"))
        self.assertEqual([r.imdb_id for r in store], ["tt2"])

    def test_all_is_a_snapshot(self):
        store = WatchedListStore()
        snapshot = store.all()
        store.add(_record("tt1", 8.0, 6, 100))
        self.assertEqual(snapshot, ())


class TestWatchedRecordFromDetail(unittest.TestCase):
    def test_numbers_are_parsed(self):
        detail = MovieDetail(imdbID="tt0372784", Title="Batman Begins", Runtime="140 min", imdbRating="8.2")
        record = WatchedRecord.from_detail(detail, user_rating=9)
        self.assertEqual(record.runtime, 140)
        self.assertEqual(record.imdb_rating, 8.2)
        self.assertEqual(record.user_rating, 9)
        self.assertEqual(record.title, "Batman Begins")

    def test_missing_values_become_zero(self):
        detail = MovieDetail(imdbID="tt1", Runtime="N/A", imdbRating="N/A")
        record = WatchedRecord.from_detail(detail, user_rating=1)
        self.assertEqual(record.runtime, 0)
        self.assertEqual(record.imdb_rating, 0)


if __name__ == "__main__":
    unittest.main()
