import os

from mfem_apps import mf
from mfem_apps.mf import mfem_orig as mfem, print_


class MHDInitialState:
    """
    Finite element representation of the MHD initial condition.
    All fields live in the same H1 space of the given order.

    Args:
        mesh(Mesh): The mesh.
        condition(MHDInitialCondition): The analytic initial condition.
        order(int): Polynomial degree of the H1 space.
    """
    fieldNames = ["phi", "psi", "w", "j", "backPsi"]

    def __init__(self, mesh, condition, order=2):
        if order < 1:
            raise ValueError("Order of the MHD fields should be positive.")
        self._mesh = mesh
        self._condition = condition
        self._fec = mfem.H1_FECollection(order, mesh.Dimension())
        self._space = mf.FiniteElementSpace(mesh, self._fec)
        self._coefs = {key: mf.generateCoefficient(value) for key, value in condition.fields.items()}
        self._E0rhs = mf.generateCoefficient(condition.E0rhs)
        self._fields = {}
        for key in self.fieldNames:
            gf = mf.GridFunction(self._space)
            gf.ProjectCoefficient(self._coefs[key])
            self._fields[key] = gf

    def __getitem__(self, key):
        return self._fields[key]

    @property
    def space(self):
        return self._space

    @property
    def condition(self):
        return self._condition

    @property
    def E0rhs(self):
        """Coefficient of the equilibrium source term of the resistive Ohm's law."""
        return self._E0rhs

    def coefficient(self, key):
        return self._coefs[key]

    def updateJ(self):
        """
        Recompute the current density from psi by the weak Laplacian M j = -K psi.
        Boundary values of j are kept as projected from the analytic field.
        """
        ess_tdof_list = mfem.intArray()
        if self._mesh.bdr_attributes.Size() > 0:
            ess_bdr = mfem.intArray(self._mesh.bdr_attributes.Max())
            ess_bdr.Assign(1)
            self._space.GetEssentialTrueDofs(ess_bdr, ess_tdof_list)

        k = mf.BilinearForm(self._space)
        k.AddDomainIntegrator(mfem.DiffusionIntegrator())
        k.Assemble()
        k.Finalize()
        z = mfem.Vector(self._space.GetVSize())
        k.Mult(self._fields["psi"], z)
        z *= -1.0

        m = mf.BilinearForm(self._space)
        m.AddDomainIntegrator(mfem.MassIntegrator())
        m.Assemble()

        j = self._fields["j"]
        M, B, X = mf.SystemMatrix(), mfem.Vector(), mfem.Vector()
        m.FormLinearSystem(ess_tdof_list, j, z, M, X, B)
        solver = mf.getSolver("CG", "D", rel_tol=1e-12, max_iter=2000, print_level=0)
        solver.solve(M, B, X)
        m.RecoverFEMSolution(X, z, j)
        return j

    def errors(self):
        """L2 errors of the fields against the analytic initial condition."""
        return {key: self._fields[key].ComputeL2Error(self._coefs[key]) for key in self.fieldNames}

    def norms(self):
        """L2 norms of the fields."""
        zero = mf.ConstantCoefficient(0.0)
        return {key: self._fields[key].ComputeL2Error(zero) for key in self.fieldNames}

    def save(self, dirname=".", precision=8):
        dirname = mf.prepareDirectory(dirname)
        files = [mf.output.exportMesh(self._mesh, os.path.join(dirname, "mhd.mesh"), precision)]
        for key in self.fieldNames:
            files.append(mf.output.exportGridFunction(self._fields[key], os.path.join(dirname, key + ".gf"), precision))
        files.append(mf.exportNumpy(os.path.join(dirname, "initial.npz"), self._mesh, **self._fields))
        print_("Initial condition saved in", dirname)
        return files
