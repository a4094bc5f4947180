import numpy as np

from mfem_apps import mf
from mfem_apps.mf import mfem_orig as mfem

from ..base import FEMTestCase


class solvers_test(FEMTestCase):
    def _massSystem(self):
        mesh = self.generateSimpleMesh(4)
        fec = mfem.H1_FECollection(1, 2)
        space = mf.FiniteElementSpace(mesh, fec)
        m = mf.BilinearForm(space)
        m.AddDomainIntegrator(mfem.MassIntegrator())
        m.Assemble()
        b = mf.LinearForm(space)
        one = mf.ConstantCoefficient(1.0)
        b.AddDomainIntegrator(mfem.DomainLFIntegrator(one))
        b.Assemble()
        x = mf.GridFunction(space)
        x.Assign(0.0)
        M, B, X = mf.SystemMatrix(), mfem.Vector(), mfem.Vector()
        m.FormLinearSystem(mfem.intArray(), x, b, M, X, B)
        # X refers to the memory of x, which must outlive the solve
        return (mesh, fec, space, m, b, one, x), M, B, X

    def test_cg(self):
        objs, M, B, X = self._massSystem()
        for prec in ["GS", "D", None]:
            X.Assign(0.0)
            it, converged, norm = mf.getSolver("CG", prec, rel_tol=1e-12, print_level=0).solve(M, B, X)
            self.assertTrue(converged)
            self.assertTrue(it > 0)
            self.assert_array_almost_equal(X.GetDataArray(), np.ones(X.Size()))

    def test_gmres(self):
        objs, M, B, X = self._massSystem()
        X.Assign(0.0)
        it, converged, norm = mf.getSolver("GMRES", "D", rel_tol=1e-12, print_level=0).solve(M, B, X)
        self.assertTrue(converged)
        self.assert_array_almost_equal(X.GetDataArray(), np.ones(X.Size()))

    def test_invalid(self):
        with self.assertRaises(ValueError):
            mf.getSolver("LU")
        with self.assertRaises(ValueError):
            mf.getSolver("CG", "ILU")

    def test_integrate(self):
        mesh = mf.rectangleMesh(4, 4, (0, 2), (0, 3))
        fec = mfem.H1_FECollection(2, 2)
        space = mf.FiniteElementSpace(mesh, fec)
        self.assertAlmostEqual(mf.integrate(space, mf.ConstantCoefficient(1.0)), 6.0)
        self.assertAlmostEqual(mf.integrate(space, mf.generateCoefficient(mf.coef.x)), 6.0)

    def test_solve(self):
        objs, M, B, X = self._massSystem()
        X.Assign(0.0)
        it, converged, norm = mf.solve(M, B, X, prec="D", rel_tol=1e-12, print_level=0)
        self.assertTrue(converged)
        self.assertTrue(it > 0)
        self.assert_array_almost_equal(X.GetDataArray(), np.ones(X.Size()))
        with self.assertRaises(ValueError):
            mf.solve(M, B, X, solver="LU")
