import os
import numpy as np

from mfem_apps import mf
from mfem_apps.mf.coef import x, y

from ..base import FEMTestCase


class output_test(FEMTestCase):
    def test_exportNumpy(self):
        mesh = self.generateSimpleMesh(2)
        gf = self.project(mesh, mf.generateCoefficient(x + y))
        file = mf.exportNumpy("fields.npz", mesh, u=gf)
        self.assertEqual(file, "fields.npz")
        self.assertTrue(os.path.exists(file))
        data = np.load(file)
        self.assertEqual(data["coords"].shape, (9, 2))
        self.assertEqual(data["quad"].shape, (4, 4))
        self.assert_array_almost_equal(data["u"], data["coords"][:, 0] + data["coords"][:, 1])

    def test_exportNumpy_extension(self):
        mesh = self.generateSimpleMesh(2)
        file = mf.exportNumpy("fields", mesh)
        self.assertEqual(file, "fields.npz")
        self.assertTrue(os.path.exists(file))

    def test_exportSolution(self):
        mesh = self.generateSimpleMesh(2)
        gf = self.project(mesh, mf.generateCoefficient(x))
        files = mf.exportSolution(mesh, gf, "m.mesh", "u.gf")
        self.assertEqual(files, ("m.mesh", "u.gf"))
        for file in files:
            self.assertTrue(os.path.exists(file))
        self.assertEqual(mf.loadMesh("m.mesh").GetNE(), 4)

    def test_prepareDirectory(self):
        self.assertEqual(mf.prepareDirectory(None), ".")
        self.assertEqual(mf.prepareDirectory("a"), "a")
        self.assertTrue(os.path.isdir("a"))

    def test_glvis_unavailable(self):
        mesh = self.generateSimpleMesh(2)
        gf = self.project(mesh, mf.generateCoefficient(x))
        # nothing listens on port 1
        self.assertFalse(mf.sendToGLVis(mesh, gf, port=1))
