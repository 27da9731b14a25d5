import unittest
from pathlib import Path
import sys

DIR = Path(__file__).parent if "__file__" in locals() else Path.cwd()
sys.path.append(str(DIR / "../src"))

from numthy.utils import iroot, cdiv, rank, bsearch  # noqa: E402


class TestUtils(unittest.TestCase):
    def test_iroot(self):
        for k in range(1, 7):
            for m in range(0, 200):
                for n in (m**k - 1, m**k, m**k + 1):
                    if n < 0:
                        continue
                    with self.subTest(n=n, k=k):
                        r = iroot(n, k)
                        self.assertLessEqual(r**k, n)
                        self.assertGreater((r + 1) ** k, n)

    def test_irootLarge(self):
        big = 10**134
        self.assertEqual(iroot(big**3, 3), big)
        self.assertEqual(iroot(big**3 - 1, 3), big - 1)
        self.assertEqual(iroot(big**4 + 1, 4), big)
        self.assertEqual(iroot(10**30, 3), 10**10)
        self.assertEqual(iroot((10**10 + 1) ** 3 - 1, 3), 10**10)

    def test_irootInvalid(self):
        with self.assertRaises(ValueError):
            iroot(-1, 2)
        with self.assertRaises(ValueError):
            iroot(8, 0)
        with self.assertRaises(TypeError):
            iroot(8.0, 3)

    def test_cdiv(self):
        testData = ((0, 2, 0), (1, 2, 1), (4, 2, 2), (5, 2, 3), (-5, 2, -2))
        for n, k, ans in testData:
            with self.subTest(n=n, k=k):
                self.assertEqual(cdiv(n, k), ans)

    def test_rank(self):
        a = [2, 3, 5, 7, 11]
        testData = ((0, 0), (2, 1), (4, 2), (7, 4), (11, 5), (100, 5))
        for x, ans in testData:
            with self.subTest(x=x):
                self.assertEqual(rank(a, x), ans)

    def test_bsearch(self):
        a = [2, 3, 5, 7, 11]
        testData = ((2, 0), (7, 3), (11, 4), (1, -1), (4, -3), (12, -6))
        for x, ans in testData:
            with self.subTest(x=x):
                self.assertEqual(bsearch(a, x), ans)


if __name__ == "__main__":
    unittest.main()
