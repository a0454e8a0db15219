import unittest
from datetime import date, timedelta

from kitcha.domain.Pantry import PantryItem
from kitcha.logic.pantry.analysis import compute_expiring_soon, compute_low_stock, compute_pantry_snapshots

TODAY = date(2024, 3, 14)


class TestPantryAnalysis(unittest.TestCase):
    def setUp(self):
        self.items = [
            PantryItem(name='Milk', quantity=1, unit='liters', category='dairy', expiry_date=TODAY + timedelta(days=2)),
            PantryItem(name='Yogurt', quantity=4, unit='pieces', expiry_date=TODAY - timedelta(days=1)),
            PantryItem(name='Cheese', quantity=150, unit='grams', expiry_date=TODAY + timedelta(days=6)),
            PantryItem(name='Rice', quantity=2000, unit='grams', expiry_date=TODAY + timedelta(days=60)),
            PantryItem(name='Eggs', quantity=2, unit='pieces'),
        ]

    def test_expiring_soon(self):
        expiring = compute_expiring_soon(self.items, window=7, today=TODAY)
        self.assertEqual([e['name'] for e in expiring], ['Yogurt', 'Milk', 'Cheese'])
        self.assertEqual(expiring[0]['days_left'], -1)
        self.assertEqual(expiring[0]['priority'], 'urgent')
        self.assertEqual(expiring[2]['priority'], 'high')
        self.assertEqual(expiring[1]['exp'], '2024-03-16')

    def test_window(self):
        self.assertEqual(len(compute_expiring_soon(self.items, window=0, today=TODAY)), 1)

    def test_low_stock(self):
        low = compute_low_stock(self.items)
        self.assertEqual([i['name'] for i in low], ['Eggs', 'Cheese'])
        self.assertEqual(low[0]['threshold'], 3)

    def test_snapshots(self):
        expiring, low = compute_pantry_snapshots(iter(self.items), window=3, today=TODAY)
        self.assertEqual([e['name'] for e in expiring], ['Yogurt', 'Milk'])
        self.assertEqual(len(low), 2)
