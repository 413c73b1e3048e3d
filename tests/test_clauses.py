import unittest

from sudoku_sat.core.constants import CLAUSES, LITERALS, TruthCode
from sudoku_sat.core.exceptions import CapacityError, ClauseBookkeepingError, UnsatisfiableError
from sudoku_sat.core.index import Variable, negative, positive
from sudoku_sat.engine.clauses import ClauseStore
from sudoku_sat.engine.cnf import generate_clauses
from sudoku_sat.engine.propagation import propagate, reduce_clauses, try_insert
from sudoku_sat.engine.units import Units


class ClauseStoreTests(unittest.TestCase):
    def test_clause_extent_is_implicit(self) -> None:
        store = ClauseStore()
        store.append([2, 4, 6], 3)
        store.append([8, 10], 2)
        self.assertEqual(store.bounds(0), (0, 3))
        self.assertEqual(store.bounds(1), (3, 5))
        self.assertEqual(list(store), [(2, 4, 6), (8, 10)])
        self.assertEqual(store.literal(4), 10)

    def test_clause_pool_overflow(self) -> None:
        store = ClauseStore()
        for _ in range(CLAUSES):
            store.append([0, 2], 2)
        with self.assertRaises(CapacityError):
            store.append([0, 2], 2)

    def test_literal_pool_overflow(self) -> None:
        store = ClauseStore()
        clause = list(range(0, 18, 2))
        for _ in range(LITERALS // len(clause)):
            store.append(clause, len(clause))
        self.assertEqual(store.literal_count, LITERALS)
        with self.assertRaises(CapacityError):
            store.append([0, 2], 2)


class TryInsertTests(unittest.TestCase):
    def setUp(self) -> None:
        self.units = Units()
        self.clauses = ClauseStore()

    def test_satisfied_clause_is_dropped(self) -> None:
        self.units.set(0, True)
        try_insert(self.units, self.clauses, [positive(0), positive(1)])
        self.assertEqual(self.clauses.clause_count, 0)

    def test_false_literals_are_removed(self) -> None:
        self.units.set(0, False)
        try_insert(self.units, self.clauses, [positive(0), positive(1), positive(2)])
        self.assertEqual(list(self.clauses), [(positive(1), positive(2))])

    def test_positive_unit_places_the_value(self) -> None:
        self.units.set(0, False)
        try_insert(self.units, self.clauses, [positive(0), positive(1)])
        self.assertEqual(self.clauses.clause_count, 0)
        self.assertEqual(self.units.get(1), TruthCode.TRUE)
        self.assertEqual(self.units.get(2), TruthCode.FALSE)
        self.assertEqual(self.units.get(Variable.of(5, 0, 1)), TruthCode.FALSE)

    def test_negative_unit_excludes_the_value(self) -> None:
        self.units.set(0, True)
        try_insert(self.units, self.clauses, [negative(0), negative(1)])
        self.assertEqual(self.units.get(1), TruthCode.FALSE)
        self.assertEqual(self.clauses.clause_count, 0)

    def test_falsified_clause_raises(self) -> None:
        self.units.set(0, False)
        self.units.set(1, False)
        with self.assertRaises(UnsatisfiableError):
            try_insert(self.units, self.clauses, [positive(0), positive(1)])


class GenerationTests(unittest.TestCase):
    def test_empty_grid_fills_exact_capacity(self) -> None:
        units = Units()
        clauses = ClauseStore()
        generate_clauses(units, clauses)
        self.assertEqual(clauses.clause_count, 11_988)
        self.assertEqual(clauses.literal_count, 26_244)
        self.assertFalse(units.pending)

    def test_regeneration_starts_from_empty(self) -> None:
        units = Units()
        clauses = ClauseStore()
        generate_clauses(units, clauses)
        generate_clauses(units, clauses)
        self.assertEqual(clauses.clause_count, CLAUSES)

    def test_clue_shrinks_generated_clauses(self) -> None:
        units = Units()
        clauses = ClauseStore()
        units.assign(3, 4, 8)
        generate_clauses(units, clauses)
        self.assertLess(clauses.clause_count, CLAUSES)
        self.assertLess(clauses.literal_count, LITERALS)

    def test_propagation_fixpoint_is_sound(self) -> None:
        units = Units()
        clauses = ClauseStore()
        for row, column, value in ((0, 0, 0), (1, 3, 1), (4, 4, 4), (8, 7, 2)):
            units.assign(row, column, value)
        generate_clauses(units, clauses)
        passes = propagate(units, clauses)
        self.assertGreaterEqual(passes, 1)
        self.assertFalse(units.pending)
        self.assertGreater(clauses.clause_count, 0)
        for clause in clauses:
            self.assertGreaterEqual(len(clause), 2)
            for literal in clause:
                self.assertEqual(units.get(literal >> 1), TruthCode.UNKNOWN)

    def test_reduce_matches_full_regeneration(self) -> None:
        units = Units()
        clauses = ClauseStore()
        generate_clauses(units, clauses)
        units.assign(0, 0, 0)
        propagate(units, clauses)
        reduced = list(clauses)

        fresh = ClauseStore()
        generate_clauses(units, fresh)
        propagate(units, fresh)
        self.assertEqual(sorted(reduced), sorted(fresh))

    def test_reduce_rejects_broken_offsets(self) -> None:
        units = Units()
        clauses = ClauseStore()
        clauses.append([positive(0), positive(1)], 2)
        clauses.append([positive(2), positive(3)], 2)
        clauses.starts[1] = 0
        with self.assertRaises(ClauseBookkeepingError):
            reduce_clauses(units, clauses)

    def test_contradictory_grid_fails_generation(self) -> None:
        units = Units()
        clauses = ClauseStore()
        for column in range(1, 9):
            units.assign(0, column, column - 1)
        units.assign(1, 0, 8)
        with self.assertRaises(UnsatisfiableError):
            generate_clauses(units, clauses)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
