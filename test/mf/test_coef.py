import numpy as np
import sympy as sp

from mfem_apps import mf
from mfem_apps.mf.coef import x, y, SympyCoefficient, VectorArrayCoefficient, MatrixArrayCoefficient

from ..base import FEMTestCase


class coef_test(FEMTestCase):
    def test_constant(self):
        c = mf.generateCoefficient(2)
        self.assertIsInstance(c, mf.ConstantCoefficient)
        gf = self.project(self.generateSimpleMesh(), c)
        self.assert_array_almost_equal(gf.GetDataArray(), 2)

    def test_sympy(self):
        c = mf.generateCoefficient(x + 2 * y)
        self.assertIsInstance(c, SympyCoefficient)
        self.assertAlmostEqual(c(0.5, 0.25), 1.0)
        self.assertAlmostEqual(c(1.0), 1.0)

        mesh = self.generateSimpleMesh()
        gf = self.project(mesh, c)
        coords = mf.vertexCoordinates(mesh)
        self.assert_array_almost_equal(mf.nodalValues(gf), coords[:, 0] + 2 * coords[:, 1])
        self.assertAlmostEqual(gf.ComputeL2Error(c), 0)

    def test_sympy_constant_expression(self):
        c = mf.generateCoefficient(sp.pi)
        self.assertAlmostEqual(c(0.3, 0.1), np.pi)

    def test_piecewise(self):
        c = mf.generateCoefficient({1: 3 * x, "default": 0})
        gf = self.project(self.generateSimpleMesh(), c)
        mesh = gf.FESpace().GetMesh()
        coords = mf.vertexCoordinates(mesh)
        self.assert_array_almost_equal(mf.nodalValues(gf), 3 * coords[:, 0])

        c = mf.generateCoefficient({2: 3 * x, "default": 1})
        gf = self.project(self.generateSimpleMesh(), c)
        self.assert_array_almost_equal(gf.GetDataArray(), 1)

    def test_arithmetic(self):
        c1 = mf.generateCoefficient(1)
        c2 = mf.generateCoefficient(2)
        mesh = self.generateSimpleMesh()
        self.assert_array_almost_equal(self.project(mesh, (c1 + c2) * 2).GetDataArray(), 6)
        self.assert_array_almost_equal(self.project(mesh, c1 - c2).GetDataArray(), -1)
        self.assert_array_almost_equal(self.project(mesh, -c2).GetDataArray(), -2)
        self.assert_array_almost_equal(self.project(mesh, c2**3).GetDataArray(), 8)
        self.assert_array_almost_equal(self.project(mesh, 1 / c2).GetDataArray(), 0.5)
        self.assert_array_almost_equal(self.project(mesh, c1 / c2).GetDataArray(), 0.5)

    def test_vector(self):
        c = mf.generateCoefficient([x, 2 * y])
        self.assertIsInstance(c, VectorArrayCoefficient)
        self.assertEqual(len(c), 2)
        self.assertEqual(c.GetVDim(), 2)
        self.assertAlmostEqual(c[1](0, 0.5), 1.0)

    def test_matrix(self):
        c = mf.generateCoefficient([[1, 0], [0, x]])
        self.assertIsInstance(c, MatrixArrayCoefficient)
        self.assertAlmostEqual(c[1, 1](2, 0), 2.0)

    def test_gridFunction(self):
        gf = self.project(self.generateSimpleMesh(), mf.generateCoefficient(x * y))
        c = mf.generateCoefficient(gf)
        self.assertAlmostEqual(gf.ComputeL2Error(c), 0)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            mf.generateCoefficient({})
