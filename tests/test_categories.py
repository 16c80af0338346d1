import unittest

from daymod.utils.categories import (
    MAX_CODE,
    N_CATEGORIES,
    ActivityCategory,
    all_categories_excluding_sentinel,
    category_for_raw_code,
    category_from_compact_code,
    compact_code,
    display_label,
)


class TestRawCodes(unittest.TestCase):
    def test_sleeping(self):
        self.assertEqual(category_for_raw_code(10101), ActivityCategory.SLEEPING)
        self.assertEqual(category_for_raw_code(10199), ActivityCategory.SLEEPING)

    def test_range_bounds(self):
        self.assertEqual(category_for_raw_code(10200), ActivityCategory.PERSONAL_CARE)
        self.assertEqual(category_for_raw_code(19999), ActivityCategory.PERSONAL_CARE)
        self.assertEqual(category_for_raw_code(30399), ActivityCategory.CHILDCARE)
        self.assertEqual(category_for_raw_code(30400), ActivityCategory.ADULT_CARE)
        self.assertEqual(category_for_raw_code(40301), ActivityCategory.CHILDCARE)
        self.assertEqual(category_for_raw_code(40401), ActivityCategory.ADULT_CARE)

    def test_first_range_wins(self):
        # 100000 is also in the services range
        self.assertEqual(
            category_for_raw_code(100000), ActivityCategory.PERSONAL_CARE
        )
        self.assertEqual(category_for_raw_code(100001), ActivityCategory.SERVICES)

    def test_civic_duties_and_services(self):
        self.assertEqual(category_for_raw_code(100201), ActivityCategory.CIVIC_DUTIES)
        self.assertEqual(category_for_raw_code(100303), ActivityCategory.CIVIC_DUTIES)
        self.assertEqual(category_for_raw_code(100399), ActivityCategory.CIVIC_DUTIES)
        self.assertEqual(category_for_raw_code(100304), ActivityCategory.SERVICES)
        self.assertEqual(category_for_raw_code(100401), ActivityCategory.SERVICES)

    def test_leisure_and_exercise(self):
        self.assertEqual(category_for_raw_code(120303), ActivityCategory.LEISURE)
        self.assertEqual(category_for_raw_code(130301), ActivityCategory.LEISURE)
        self.assertEqual(category_for_raw_code(130101), ActivityCategory.EXERCISE)
        self.assertEqual(category_for_raw_code(130499), ActivityCategory.EXERCISE)

    def test_other_categories(self):
        expected = {
            20101: ActivityCategory.HOUSEHOLD_CHORES,
            50101: ActivityCategory.WORK,
            60101: ActivityCategory.CLASSES,
            60201: ActivityCategory.EXTRACURRICULAR,
            60301: ActivityCategory.HOMEWORK,
            60401: ActivityCategory.OTHER_EDUCATION,
            70101: ActivityCategory.SHOPPING,
            80101: ActivityCategory.SERVICES,
            110101: ActivityCategory.EATING_DRINKING,
            140101: ActivityCategory.RELIGIOUS_ACTIVITIES,
            150101: ActivityCategory.VOLUNTEERING,
            160101: ActivityCategory.CALLS,
            180101: ActivityCategory.TRAVEL,
            500101: ActivityCategory.MISSING_DATA,
        }
        for code, category in expected.items():
            self.assertEqual(category_for_raw_code(code), category, code)

    def test_unknown_codes(self):
        for code in [0, 10099, 170101, 190000, 499999, 510000]:
            self.assertIsNone(category_for_raw_code(code), code)

    def test_not_a_number(self):
        for code in ['abc', '', None, '10101.5']:
            self.assertIsNone(category_for_raw_code(code), code)

    def test_accepts_strings(self):
        self.assertEqual(category_for_raw_code('010101'), ActivityCategory.SLEEPING)


class TestCompactCodes(unittest.TestCase):
    def test_round_trip(self):
        for code in range(N_CATEGORIES):
            category = category_from_compact_code(code)
            self.assertEqual(
                category_from_compact_code(compact_code(category)), category
            )

    def test_image(self):
        codes = [compact_code(c) for c in ActivityCategory]
        self.assertEqual(sorted(codes), list(range(21)))
        self.assertEqual(len(set(codes)), len(codes))

    def test_sentinel_is_max(self):
        self.assertEqual(compact_code(ActivityCategory.MISSING_DATA), 20)
        self.assertEqual(MAX_CODE, 20)

    def test_out_of_range(self):
        self.assertIsNone(category_from_compact_code(21))
        self.assertIsNone(category_from_compact_code(-1))


class TestSelectableCategories(unittest.TestCase):
    def test_excludes_sentinel(self):
        categories = list(all_categories_excluding_sentinel())
        self.assertEqual(len(categories), 20)
        self.assertNotIn(ActivityCategory.MISSING_DATA, categories)
        self.assertEqual([int(c) for c in categories], list(range(20)))

    def test_restarts(self):
        first = list(all_categories_excluding_sentinel())
        second = list(all_categories_excluding_sentinel())
        self.assertEqual(first, second)

    def test_labels(self):
        self.assertEqual(display_label(ActivityCategory.SLEEPING), 'Sleeping')
        self.assertEqual(
            display_label(ActivityCategory.EATING_DRINKING),
            'Eating and Drinking'
        )
        labels = [display_label(c) for c in ActivityCategory]
        self.assertEqual(len(set(labels)), N_CATEGORIES)


if __name__ == '__main__':
    unittest.main()
