import os
import tempfile
import unittest
from unittest.mock import patch

from db_helpers import make_session_factory, seed_location, seed_product
from warehouse.core.errors import CapacityExceeded, ConcurrencyConflict, InsufficientStock
from warehouse.database.uow import UnitOfWork
from warehouse.repositories.location_repository import LocationRepository
from warehouse.repositories.movement_repository import MovementRepository
from warehouse.services.movement_service import location_stock, record_movement


class ConcurrentMovementTest(unittest.TestCase):
    """A competing request commits between our reads and our writes."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        url = "sqlite:///" + os.path.join(self._tmp.name, "race.db")
        self.engine, self.session_factory = make_session_factory(url)

    def tearDown(self):
        self.engine.dispose()
        self._tmp.cleanup()

    def _record(self, *args, **kwargs):
        with UnitOfWork(self.session_factory) as uow:
            return record_movement(uow, *args, **kwargs)

    def _quantity(self, product_id):
        with UnitOfWork(self.session_factory) as uow:
            return uow.products.get_by_id(product_id).quantity

    def _movement_count(self):
        with UnitOfWork(self.session_factory) as uow:
            return uow.movements.count()

    def test_stale_product_write_is_a_conflict(self):
        product = seed_product(self.session_factory, quantity=10)
        with UnitOfWork(self.session_factory) as first, UnitOfWork(self.session_factory) as second:
            mine = first.products.get_by_id(product.id)
            theirs = second.products.get_by_id(product.id)
            theirs.increase_stock(5)
            second.products.update(theirs)
            second.commit()

            mine.decrease_stock(3)
            with self.assertRaises(ConcurrencyConflict):
                first.products.update(mine)
        self.assertEqual(self._quantity(product.id), 15)

    def test_location_claim_detects_concurrent_bump(self):
        location = seed_location(self.session_factory)
        with UnitOfWork(self.session_factory) as first, UnitOfWork(self.session_factory) as second:
            mine = first.locations.get_by_id(location.id)
            theirs = second.locations.get_by_id(location.id)
            second.locations.claim(theirs)
            second.commit()
            with self.assertRaises(ConcurrencyConflict):
                first.locations.claim(mine)

    def test_location_edit_after_concurrent_claim_is_a_conflict(self):
        location = seed_location(self.session_factory, capacity=100)
        with UnitOfWork(self.session_factory) as first, UnitOfWork(self.session_factory) as second:
            mine = first.locations.get_by_id(location.id)
            theirs = second.locations.get_by_id(location.id)
            second.locations.claim(theirs)
            second.commit()

            mine.capacity = 50
            with self.assertRaises(ConcurrencyConflict):
                first.locations.update(mine)

        with UnitOfWork(self.session_factory) as uow:
            current = uow.locations.get_by_id(location.id)
            self.assertEqual((current.capacity, current.version), (100, 2))

    def _race_outbound(self, product_id, location_id, quantity):
        original = LocationRepository.get_by_id
        state = {"raced": False}

        def racing_get_by_id(repo, location_id_, *, for_update=False):
            if not state["raced"]:
                state["raced"] = True
                self._record(product_id, location_id, "OUT", quantity)
            return original(repo, location_id_, for_update=for_update)

        return patch.object(LocationRepository, "get_by_id", racing_get_by_id)

    def test_two_outbounds_never_overdraw(self):
        product = seed_product(self.session_factory, quantity=100)
        location = seed_location(self.session_factory)

        with self._race_outbound(product.id, location.id, 60):
            with self.assertRaises(InsufficientStock):
                self._record(product.id, location.id, "OUT", 60)

        self.assertEqual(self._quantity(product.id), 40)
        self.assertEqual(self._movement_count(), 1)

    def test_conflict_surfaces_when_retries_are_exhausted(self):
        product = seed_product(self.session_factory, quantity=100)
        location = seed_location(self.session_factory)

        with self._race_outbound(product.id, location.id, 10):
            with self.assertRaises(ConcurrencyConflict):
                self._record(product.id, location.id, "OUT", 10, max_attempts=1)

        self.assertEqual(self._quantity(product.id), 90)
        self.assertEqual(self._movement_count(), 1)

    def test_retry_succeeds_when_state_still_allows_it(self):
        product = seed_product(self.session_factory, quantity=100)
        location = seed_location(self.session_factory)

        with self._race_outbound(product.id, location.id, 30):
            self._record(product.id, location.id, "OUT", 30)

        self.assertEqual(self._quantity(product.id), 40)
        self.assertEqual(self._movement_count(), 2)

    def test_two_inbounds_respect_capacity(self):
        first = seed_product(self.session_factory, sku_name="SKU-A", quantity=0)
        second = seed_product(self.session_factory, sku_name="SKU-B", quantity=0)
        location = seed_location(self.session_factory, capacity=100)

        original = MovementRepository.get_by_location
        state = {"raced": False}

        def racing_get_by_location(repo, location_id_):
            movements = original(repo, location_id_)
            if not state["raced"]:
                state["raced"] = True
                self._record(second.id, location.id, "IN", 60)
            return movements

        with patch.object(MovementRepository, "get_by_location", racing_get_by_location):
            with self.assertRaises(CapacityExceeded):
                self._record(first.id, location.id, "IN", 60)

        with UnitOfWork(self.session_factory) as uow:
            self.assertEqual(location_stock(uow, location.id)["occupancy"], 60)
        self.assertEqual(self._quantity(first.id), 0)
        self.assertEqual(self._quantity(second.id), 60)


if __name__ == "__main__":
    unittest.main()
