from . import mfem_orig

if mfem_orig.isParallel():

    class LinearForm(mfem_orig.ParLinearForm):
        def GetTrueDofs(self, vector):
            self.ParallelAssemble(vector)

    BilinearForm = mfem_orig.ParBilinearForm

    SystemMatrix = mfem_orig.HypreParMatrix

else:

    class LinearForm(mfem_orig.LinearForm):
        def GetTrueDofs(self, vector):
            P = self.FESpace().GetConformingProlongation()
            if P is None:
                vector.Assign(self)
            else:
                vector.SetSize(P.Width())
                P.MultTranspose(self, vector)

    BilinearForm = mfem_orig.BilinearForm

    SystemMatrix = mfem_orig.SparseMatrix


def integrate(space, coef):
    """
    Integral of the coefficient over the whole mesh, computed from the assembled dual vector.
    """
    from .util import getSum
    b = LinearForm(space)
    b.AddDomainIntegrator(mfem_orig.DomainLFIntegrator(coef))
    b.Assemble()
    B = mfem_orig.Vector()
    b.GetTrueDofs(B)
    return getSum(B.Sum())
