import os
import numpy as np

from mfem_apps import mf
from mfem_apps.mhd import generateInitialCondition, MHDInitialState
from mfem_apps.mhd import run

from ..base import FEMTestCase


class fields_test(FEMTestCase):
    def _state(self, icase, n=16, order=2, **kwargs):
        c = generateInitialCondition(icase, **kwargs)
        (x0, x1), (y0, y1) = c.domain(c.params)
        mesh = mf.rectangleMesh(int(n * (x1 - x0)), int(n * (y1 - y0)), (x0, x1), (y0, y1))
        return MHDInitialState(mesh, c, order)

    def test_projection(self):
        for icase, n, tol in [(1, 8, 1e-3), (2, 16, 2e-2)]:
            state = self._state(icase, n=n)
            errors, norms = state.errors(), state.norms()
            for key in MHDInitialState.fieldNames:
                self.assertTrue(errors[key] <= tol * max(norms[key], 1))
            self.assertAlmostEqual(norms["phi"], 0)
            self.assertAlmostEqual(norms["w"], 0)

    def test_norm(self):
        # || -y ||^2 over [0, 3] x [0, 1] is 1
        state = self._state(1, n=8)
        self.assertAlmostEqual(state.norms()["backPsi"], 1.0, places=6)

    def test_updateJ(self):
        state = self._state(1, n=16, order=3, beta=0.1)
        j_exact = state.coefficient("j")
        norm = state.norms()["j"]
        j = state.updateJ()
        self.assertTrue(j.ComputeL2Error(j_exact) < 0.1 * norm)

    def test_E0rhs(self):
        state = self._state(2, n=4, resistivity=0.1)
        self.assertAlmostEqual(state.E0rhs(0, 0.5), 0.5)

    def test_save(self):
        state = self._state(3, n=4)
        files = state.save("out")
        self.assertEqual(len(files), 7)
        for file in files:
            self.assertTrue(os.path.exists(file))
        data = np.load(os.path.join("out", "initial.npz"))
        for key in MHDInitialState.fieldNames:
            self.assertEqual(data[key].shape, (data["coords"].shape[0],))

    def test_invalid(self):
        c = generateInitialCondition(1)
        with self.assertRaises(ValueError):
            MHDInitialState(mf.rectangleMesh(2, 2), c, order=0)

    def test_main(self):
        self.assertEqual(run.main(["-i", "4", "-n", "4", "-o", "1", "-out", "out"]), 0)
        for key in MHDInitialState.fieldNames:
            self.assertTrue(os.path.exists(os.path.join("out", key + ".gf")))
        mesh = mf.loadMesh(os.path.join("out", "mhd.mesh"))
        self.assertEqual(mesh.GetNE(), 64)

        state = run.run(run.parseArgs(["-i", "2", "-n", "2", "-beta", "0.01", "-lambda", "4", "-no-vis"]))
        self.assertEqual(state.condition.params.lam, 4.0)
        self.assertEqual(state.condition.params.beta, 0.01)
