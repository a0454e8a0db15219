import unittest
from datetime import date, datetime, timedelta

from kitcha.domain.Budget import BudgetConfiguration, BudgetHealth, CostRecord
from kitcha.domain.errors import InvalidConfiguration
from kitcha.logic.budget.evaluator import classify, compare_weeks, evaluate, should_alert, week_bounds

MONDAY = datetime(2024, 3, 11)
NOW = datetime(2024, 3, 14, 18, 30)   # Thursday


def _config(budget=100000, enabled=True, threshold=80):
    return BudgetConfiguration(weekly_budget_cents=budget, alert_enabled=enabled,
                               alert_threshold_percentage=threshold)


def _spent(amount, when=NOW):
    return CostRecord(amount_cents=amount, occurred_at=when)


class TestWeekBounds(unittest.TestCase):
    def test_monday_to_sunday(self):
        start, end = week_bounds(NOW)
        self.assertEqual(start, MONDAY)
        self.assertEqual(end, datetime(2024, 3, 17, 23, 59, 59, 999999))

    def test_reference_on_sunday_and_monday(self):
        self.assertEqual(week_bounds(date(2024, 3, 17))[0], MONDAY)
        self.assertEqual(week_bounds(MONDAY)[0], MONDAY)


class TestEvaluate(unittest.TestCase):
    def test_warning_at_85_percent(self):
        status = evaluate(_config(), [_spent(60000), _spent(25000)], now=NOW)
        self.assertEqual(status.spent_this_week_cents, 85000)
        self.assertEqual(status.remaining_cents, 15000)
        self.assertEqual(status.percentage_used, 85.0)
        self.assertEqual(status.status, BudgetHealth.WARNING)
        decision = should_alert(status, _config())
        self.assertTrue(decision.should_alert)
        self.assertEqual(decision.severity, BudgetHealth.WARNING)
        self.assertEqual(decision.title, 'Budget Threshold Reached')
        self.assertEqual(decision.message, 'You have used 85.0% of your weekly budget')

    def test_zero_budget_is_invalid(self):
        with self.assertRaises(InvalidConfiguration):
            evaluate(_config(budget=0), [_spent(1000)], now=NOW)
        with self.assertRaises(InvalidConfiguration):
            evaluate(_config(budget=-500), [], now=NOW)

    def test_band_boundaries(self):
        cfg = _config(budget=10000)
        self.assertEqual(evaluate(cfg, [_spent(8000)], now=NOW).status, BudgetHealth.WARNING)
        self.assertEqual(evaluate(cfg, [_spent(7999)], now=NOW).status, BudgetHealth.HEALTHY)
        self.assertEqual(evaluate(cfg, [_spent(10000)], now=NOW).status, BudgetHealth.EXCEEDED)
        self.assertEqual(evaluate(cfg, [_spent(9999)], now=NOW).status, BudgetHealth.WARNING)
        self.assertEqual(classify(79.999), BudgetHealth.HEALTHY)
        self.assertEqual(classify(80.0), BudgetHealth.WARNING)
        self.assertEqual(classify(100.0), BudgetHealth.EXCEEDED)

    def test_overspend_is_not_clamped(self):
        status = evaluate(_config(budget=10000), [_spent(15000)], now=NOW)
        self.assertEqual(status.remaining_cents, -5000)
        self.assertEqual(status.percentage_used, 150.0)
        self.assertEqual(status.status, BudgetHealth.EXCEEDED)

    def test_no_records(self):
        status = evaluate(_config(), [], now=NOW)
        self.assertEqual(status.spent_this_week_cents, 0)
        self.assertEqual(status.remaining_cents, 100000)
        self.assertEqual(status.percentage_used, 0.0)
        self.assertEqual(status.status, BudgetHealth.HEALTHY)

    def test_window_is_inclusive(self):
        records = [
            _spent(100, MONDAY),                                            # first instant
            _spent(200, datetime(2024, 3, 17, 23, 59, 59, 999999)),         # last instant
            _spent(400, MONDAY - timedelta(microseconds=1)),                # previous week
            _spent(800, datetime(2024, 3, 18)),                             # next week
        ]
        status = evaluate(_config(), records, now=NOW)
        self.assertEqual(status.spent_this_week_cents, 300)

    def test_explicit_week_start(self):
        records = [_spent(5000, datetime(2024, 3, 5, 12)), _spent(7000, NOW)]
        status = evaluate(_config(budget=10000), records, week_start=date(2024, 3, 4))
        self.assertEqual(status.spent_this_week_cents, 5000)
        self.assertEqual(status.week_start, datetime(2024, 3, 4))

    def test_week_start_must_be_monday(self):
        with self.assertRaises(InvalidConfiguration):
            evaluate(_config(), [], week_start=date(2024, 3, 12))
        with self.assertRaises(InvalidConfiguration):
            evaluate(_config(), [], week_start=datetime(2024, 3, 11, 9, 0))

    def test_monotonic_in_spending(self):
        cfg = _config(budget=20000)
        previous = None
        for amount in range(0, 30001, 1500):
            status = evaluate(cfg, [_spent(amount)], now=NOW)
            if previous is not None:
                self.assertGreaterEqual(status.percentage_used, previous.percentage_used)
                self.assertGreaterEqual(status.status.severity, previous.status.severity)
            previous = status

    def test_serialization(self):
        data = evaluate(_config(budget=30000), [_spent(10000)], now=NOW).to_dict()
        self.assertEqual(data['weeklyBudgetCents'], 30000)
        self.assertEqual(data['spentThisWeekCents'], 10000)
        self.assertEqual(data['remainingCents'], 20000)
        self.assertEqual(data['percentageUsed'], 33.33)
        self.assertEqual(data['status'], 'healthy')
        self.assertEqual(data['weekStart'], '2024-03-11')
        self.assertEqual(data['weekEnd'], '2024-03-17')


class TestShouldAlert(unittest.TestCase):
    def test_exceeded_message(self):
        cfg = _config(budget=100000)
        decision = should_alert(evaluate(cfg, [_spent(150075)], now=NOW), cfg)
        self.assertTrue(decision.should_alert)
        self.assertEqual(decision.severity, BudgetHealth.EXCEEDED)
        self.assertEqual(decision.title, 'Budget Exceeded')
        self.assertIn('500.75', decision.message)

    def test_below_threshold(self):
        cfg = _config(threshold=90)
        decision = should_alert(evaluate(cfg, [_spent(85000)], now=NOW), cfg)
        self.assertFalse(decision.should_alert)
        self.assertIsNone(decision.severity)
        self.assertEqual(decision.status, BudgetHealth.WARNING)

    def test_threshold_independent_of_warning_band(self):
        cfg = _config(threshold=50)
        status = evaluate(cfg, [_spent(60000)], now=NOW)
        self.assertEqual(status.status, BudgetHealth.HEALTHY)
        decision = should_alert(status, cfg)
        self.assertTrue(decision.should_alert)
        self.assertEqual(decision.severity, BudgetHealth.WARNING)

    def test_disabled_alerts(self):
        cfg = _config(enabled=False)
        decision = should_alert(evaluate(cfg, [_spent(200000)], now=NOW), cfg)
        self.assertFalse(decision.should_alert)

    def test_idempotent(self):
        cfg = _config()
        status = evaluate(cfg, [_spent(90000)], now=NOW)
        self.assertEqual(should_alert(status, cfg), should_alert(status, cfg))
        self.assertEqual(evaluate(cfg, [_spent(90000)], now=NOW), status)


class TestCompareWeeks(unittest.TestCase):
    def test_recent_weeks(self):
        records = [
            _spent(9000, NOW),                          # current week: 90%
            _spent(10000, datetime(2024, 3, 6)),        # previous: 100%
            _spent(12000, datetime(2024, 2, 27)),       # two weeks ago: 120%
        ]
        weeks = compare_weeks(_config(budget=10000), records, count=4, now=NOW)
        self.assertEqual(len(weeks), 4)
        self.assertEqual(weeks[0].label, 'Week of 2024-03-11')
        self.assertEqual([w.status for w in weeks],
                         ['under_budget', 'on_budget', 'over_budget', 'under_budget'])
        self.assertEqual(weeks[2].difference_cents, -2000)
        self.assertEqual(weeks[3].actual_spent_cents, 0)

    def test_invalid_count(self):
        with self.assertRaises(InvalidConfiguration):
            compare_weeks(_config(), [], count=0, now=NOW)


class TestBudgetConfiguration(unittest.TestCase):
    def test_threshold_range(self):
        for bad in (0, 101, -5):
            with self.assertRaises(InvalidConfiguration):
                _config(threshold=bad)
        self.assertEqual(_config(threshold=100).alert_threshold_percentage, 100)

    def test_zero_budget_can_be_stored(self):
        cfg = BudgetConfiguration.from_dict({'weekly_budget_cents': 0})
        self.assertEqual(cfg.weekly_budget_cents, 0)
        self.assertEqual(cfg.alert_threshold_percentage, 80)
