from mfem_apps import mf

from ..base import FEMTestCase


class util_test(FEMTestCase):
    def test_reduce(self):
        self.assertEqual(mf.getMax(mf.mfem_orig.rank), mf.mfem_orig.size - 1)
        self.assertEqual(mf.getSum(1), mf.mfem_orig.size)
        self.assertEqual(mf.getSum(2.5), 2.5 * mf.mfem_orig.size)
