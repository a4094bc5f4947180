from . import mfem_orig

if mfem_orig.isParallel():
    from mpi4py import MPI
    args = [MPI.COMM_WORLD]

    def _preconditioner(prec):
        if prec == "GS":
            amg = mfem_orig.HypreBoomerAMG()
            amg.SetPrintLevel(0)
            return amg
        elif prec == "D":
            return mfem_orig.HypreSmoother()
        return None
else:
    args = []

    def _preconditioner(prec):
        if prec == "GS":
            return mfem_orig.GSSmoother()
        elif prec == "D":
            return mfem_orig.DSmoother()
        return None


_solvers = {"CG": mfem_orig.CGSolver, "GMRES": mfem_orig.GMRESSolver, "MINRES": mfem_orig.MINRESSolver}
_preconditioners = ["GS", "D", None]


class KrylovSolver:
    """
    Krylov solver with an optional preconditioner.

    Args:
        solver(str): "CG", "GMRES" or "MINRES".
        prec(str): "GS" (Gauss-Seidel, BoomerAMG in parallel), "D" (Jacobi type smoother) or None.
        rel_tol(float): Relative tolerance of the residual.
        abs_tol(float): Absolute tolerance of the residual.
        max_iter(int): Maximum number of iterations.
        print_level(int): Print level passed to MFEM.
    """

    def __init__(self, solver="CG", prec="GS", rel_tol=1e-6, abs_tol=0.0, max_iter=1000, print_level=1):
        if solver not in _solvers:
            raise ValueError("Unknown solver " + str(solver) + ". Choose from " + str(list(_solvers.keys())))
        if prec not in _preconditioners:
            raise ValueError("Unknown preconditioner " + str(prec) + ". Choose from " + str(_preconditioners))
        self._solver = _solvers[solver](*args)
        self._solver.iterative_mode = True
        self._solver.SetRelTol(rel_tol)
        self._solver.SetAbsTol(abs_tol)
        self._solver.SetMaxIter(max_iter)
        self._solver.SetPrintLevel(print_level)
        self._precName = prec
        self._prec = None

    def setOperator(self, A):
        self._A = A
        self._prec = _preconditioner(self._precName)
        if self._prec is not None:
            self._prec.SetOperator(A)
            self._solver.SetPreconditioner(self._prec)
        self._solver.SetOperator(A)

    def solve(self, A, B, X):
        """
        Solve A X = B in place. X is used as the initial guess.
        Returns the number of iterations, the convergence flag and the final residual norm.
        """
        self.setOperator(A)
        self._solver.Mult(B, X)
        return self._solver.GetNumIterations(), self._solver.GetConverged(), self._solver.GetFinalNorm()

    @property
    def iterations(self):
        return self._solver.GetNumIterations()


def getSolver(solver="CG", prec="GS", **kwargs):
    return KrylovSolver(solver, prec, **kwargs)


def solve(A, B, X, solver="CG", prec="GS", **kwargs):
    """
    Solve A X = B in place by a new Krylov solver. See :class:`KrylovSolver` for the arguments.
    Returns the number of iterations, the convergence flag and the final residual norm.
    """
    return getSolver(solver, prec, **kwargs).solve(A, B, X)
