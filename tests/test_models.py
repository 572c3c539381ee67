import unittest

from warehouse.core.errors import InsufficientStock, InvalidInput, StructuralInvalid
from warehouse.models.location import Location
from warehouse.models.product import Product
from warehouse.models.stock_movement import StockMovement


class ProductStockTest(unittest.TestCase):
    def test_new_validates_fields(self):
        product = Product.new(" SKU-1 ", 5)
        self.assertEqual(product.sku_name, "SKU-1")
        self.assertEqual(product.quantity, 5)
        with self.assertRaises(InvalidInput):
            Product.new("", 5)
        with self.assertRaises(InvalidInput):
            Product.new("SKU-1", -1)

    def test_increase_and_decrease(self):
        product = Product.new("SKU-1", 10)
        product.increase_stock(5)
        product.decrease_stock(15)
        self.assertEqual(product.quantity, 0)

    def test_rejects_non_positive_delta(self):
        product = Product.new("SKU-1", 10)
        for delta in (0, -3):
            with self.subTest(delta=delta):
                with self.assertRaises(InvalidInput):
                    product.increase_stock(delta)
                with self.assertRaises(InvalidInput):
                    product.decrease_stock(delta)
        self.assertEqual(product.quantity, 10)

    def test_decrease_beyond_quantity(self):
        product = Product.new("SKU-1", 10)
        with self.assertRaises(InsufficientStock):
            product.decrease_stock(11)
        self.assertEqual(product.quantity, 10)


class LocationTest(unittest.TestCase):
    def test_new_requires_positive_capacity(self):
        with self.assertRaises(InvalidInput):
            Location.new("A1", "Shelf", 0)

    def test_can_accommodate(self):
        location = Location.new("A1", "Shelf", 100)
        self.assertTrue(location.can_accommodate(80, 20))
        self.assertFalse(location.can_accommodate(80, 21))


class StockMovementTest(unittest.TestCase):
    def test_direction_flags(self):
        inbound = StockMovement.new(1, 1, "IN", 5)
        outbound = StockMovement.new(1, 1, "OUT", 5)
        self.assertTrue(inbound.is_inbound)
        self.assertFalse(inbound.is_outbound)
        self.assertTrue(outbound.is_outbound)

    def test_structural_checks(self):
        with self.assertRaises(StructuralInvalid):
            StockMovement.new(1, 1, "in", 5)
        with self.assertRaises(StructuralInvalid):
            StockMovement.new(1, 0, "IN", 5)


if __name__ == "__main__":
    unittest.main()
