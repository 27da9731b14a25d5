import unittest
from pathlib import Path
import sys
import threading

import pyrsistent as pyr

DIR = Path(__file__).parent if "__file__" in locals() else Path.cwd()
sys.path.append(str(DIR / "../src"))

import numthy as nt  # noqa: E402


class TestPiCache(unittest.TestCase):
    def test_mapping(self):
        cache = nt.PiCache({100: 25, 10: 4})
        cache[1000] = 168
        self.assertEqual(len(cache), 3)
        self.assertEqual(list(cache), [10, 100, 1000])
        self.assertIn(10, cache)
        self.assertNotIn(11, cache)
        self.assertNotIn("10", cache)
        self.assertEqual(cache.get(11), None)
        del cache[10]
        self.assertEqual(list(cache.items()), [(100, 25), (1000, 168)])

    def test_invalidValue(self):
        cache = nt.PiCache()
        with self.assertRaises(ValueError):
            cache[10] = -1
        with self.assertRaises(TypeError):
            cache[10.5] = 4

    def test_getOrCompute(self):
        cache = nt.PiCache()
        calls = []

        def compute(n):
            calls.append(n)
            return nt.countPrimes(n, nt.primes(101))

        self.assertEqual(cache.getOrCompute(10000, compute), 1229)
        self.assertEqual(cache.getOrCompute(10000, compute), 1229)
        self.assertEqual(calls, [10000])

    def test_known(self):
        cache = nt.PiCache()
        nt.countPrimesMemoized(10000, nt.primes(101), cache)
        pairs = cache.known(50, 5000)
        self.assertTrue(pairs)
        self.assertEqual(pairs, sorted(pairs))
        self.assertTrue(all(50 <= n <= 5000 for n, _ in pairs))
        self.assertEqual(cache.known()[-1], (10000, 1229))

    def test_snapshot(self):
        cache = nt.PiCache({100: 25})
        snap = cache.snapshot()
        self.assertIsInstance(snap, pyr.PMap)
        cache[1000] = 168
        self.assertEqual(dict(snap), {100: 25})
        self.assertEqual(nt.PiCache(snap).snapshot(), snap)

    def test_lock(self):
        cache = nt.PiCache()
        with cache.lock:
            cache[2] = 1
            self.assertEqual(cache[2], 1)

    def test_lenWaitsForLock(self):
        cache = nt.PiCache({2: 1})
        sizes = []
        with cache.lock:
            reader = threading.Thread(target=lambda: sizes.append(len(cache)))
            reader.start()
            reader.join(0.2)
            self.assertTrue(reader.is_alive())
            cache[3] = 2
        reader.join()
        self.assertEqual(sizes, [2])


if __name__ == "__main__":
    unittest.main()
