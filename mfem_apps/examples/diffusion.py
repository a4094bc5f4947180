"""
Diffusion example.

Finite element discretization of the Poisson problem -Delta u = f with the manufactured solution
u = sin(2 pi x) sin(2 pi y) on the unit square. The boundary is either natural, with the normal
derivative of u as Neumann data, or essential, with u itself as Dirichlet data.
The FE space is H1 of the specified order, or the isoparametric space of the mesh if order < 1.

Sample runs:
    python -m mfem_apps.examples.diffusion
    python -m mfem_apps.examples.diffusion -n 32 -o 2
    python -m mfem_apps.examples.diffusion -bc dirichlet -t -r 1
    python -m mfem_apps.examples.diffusion -m square.msh -sc -no-vis
"""

import sys
import argparse
import os

import numpy as np
import sympy as sp

from mfem_apps import mf
from mfem_apps.mf import mfem_orig as mfem, print_
from mfem_apps.mf.coef import x, y, z


class ManufacturedSolution:
    """
    Exact solution u given as sympy expression of x, y (and z), together with the data derived from it.

    Args:
        u(sympy expression): The exact solution. Defaults to sin(2 pi x) sin(2 pi y).
        dim(int): Number of spatial coordinates u depends on.
    """

    def __init__(self, u=None, dim=2):
        if u is None:
            u = sp.sin(2 * sp.pi * x) * sp.sin(2 * sp.pi * y)
        self._u = sp.sympify(u)
        self._dim = dim
        self._vars = [x, y, z][:dim]
        self._grad = [sp.diff(self._u, v) for v in self._vars]
        self._rhs = -sum(sp.diff(self._u, v, 2) for v in self._vars)
        self._func = sp.lambdify((x, y, z), self._u, "numpy")

    @property
    def dimension(self):
        return self._dim

    @property
    def u(self):
        return self._u

    @property
    def gradient(self):
        return self._grad

    @property
    def rhs(self):
        """Source term f = -Delta u."""
        return self._rhs

    def evaluate(self, coords):
        coords = np.atleast_2d(coords)
        cols = [coords[:, i] if i < coords.shape[1] else np.zeros(len(coords)) for i in range(3)]
        return np.broadcast_to(self._func(*cols), (len(coords),)).astype(float)

    def neumannFlux(self, px, py, tol=1e-12):
        """
        Outward normal derivative of u on the boundary of the unit square.
        Corners are assigned to the vertical edges.
        """
        ux, uy = self._grad[0], self._grad[1]
        subs = {x: px, y: py, z: 0}
        if abs(px) < tol:
            return -float(ux.evalf(subs=subs))
        elif abs(px - 1) < tol:
            return float(ux.evalf(subs=subs))
        elif abs(py) < tol:
            return -float(uy.evalf(subs=subs))
        elif abs(py - 1) < tol:
            return float(uy.evalf(subs=subs))
        raise ValueError("Point (" + str(px) + ", " + str(py) + ") is not on the boundary of the unit square.")


class DiffusionProblem:
    """
    Poisson problem -Delta u = f discretized on the given mesh.

    Args:
        mesh(Mesh): The mesh.
        order(int): Polynomial degree. If order < 1, the isoparametric space of the mesh is used.
        bc(str): "neumann" or "dirichlet".
        static_cond(bool): Enable static condensation.
        solution(ManufacturedSolution): The exact solution. Defaults to sin(2 pi x) sin(2 pi y).
        solver(str): Krylov solver name (see :class:`mfem_apps.mf.KrylovSolver`).
        prec(str): Preconditioner name.
        rel_tol(float): Relative tolerance of the linear solver.
        max_iter(int): Maximum number of iterations of the linear solver.
        print_level(int): Print level of the linear solver.
    """
    _bcTypes = ["neumann", "dirichlet"]

    def __init__(self, mesh, order=1, bc="neumann", static_cond=False, solution=None, solver="CG", prec="GS", rel_tol=1e-6, max_iter=1000, print_level=1):
        if bc not in self._bcTypes:
            raise ValueError("Unknown boundary condition " + str(bc) + ". Choose from " + str(self._bcTypes))
        if solution is None:
            solution = ManufacturedSolution()
        if mesh.SpaceDimension() != solution.dimension:
            raise ValueError("The exact solution is defined in " + str(solution.dimension) + "D, but the mesh is embedded in " + str(mesh.SpaceDimension()) + "D.")
        self._mesh = mesh
        self._bc = bc
        self._static_cond = static_cond
        self._solution = solution
        self._solver = mf.getSolver(solver, prec, rel_tol=rel_tol, max_iter=max_iter, print_level=print_level)

        self._fec, self._space, self._order = self.__createSpace(mesh, order)
        self._ess_bdr, self._nat_bdr = self.__boundaryMarkers(mesh, bc)
        self._ess_tdof_list = mfem.intArray()
        if self._ess_bdr.Size() > 0:
            self._space.GetEssentialTrueDofs(self._ess_bdr, self._ess_tdof_list)

        self._u = mf.generateCoefficient(solution.u)
        self._f = mf.generateCoefficient(solution.rhs)
        self._g = mf.generateCoefficient(solution.gradient)
        self._one = mf.ConstantCoefficient(1.0)

        self._x = mf.GridFunction(self._space)
        self._x.Assign(0.0)
        self._solved = False

    def __createSpace(self, mesh, order):
        dim = mesh.Dimension()
        if order > 0:
            fec = mfem.H1_FECollection(order, dim)
        elif mesh.GetNodes() is not None:
            fec = mesh.GetNodes().OwnFEC()
            order = fec.GetOrder()
            print_("Using isoparametric FEs:", fec.Name())
        else:
            order = 1
            fec = mfem.H1_FECollection(order, dim)
        return fec, mf.FiniteElementSpace(mesh, fec), order

    def __boundaryMarkers(self, mesh, bc):
        nbdr = mesh.bdr_attributes.Max() if mesh.bdr_attributes.Size() > 0 else 0
        ess_bdr = mfem.intArray(nbdr)
        nat_bdr = mfem.intArray(nbdr)
        if nbdr > 0:
            ess_bdr.Assign(1 if bc == "dirichlet" else 0)
            nat_bdr.Assign(1 if bc == "neumann" else 0)
        return ess_bdr, nat_bdr

    @property
    def space(self):
        return self._space

    @property
    def order(self):
        return self._order

    @property
    def solution(self):
        return self._x

    @property
    def unknowns(self):
        if mf.isParallel():
            return self._space.GlobalTrueVSize()
        return self._space.GetTrueVSize()

    def assembleLinearForm(self):
        b = mf.LinearForm(self._space)
        b.AddDomainIntegrator(mfem.DomainLFIntegrator(self._f))
        if self._bc == "neumann":
            b.AddBoundaryIntegrator(mfem.BoundaryNormalLFIntegrator(self._g), self._nat_bdr)
        b.Assemble()
        return b

    def assembleBilinearForm(self):
        a = mf.BilinearForm(self._space)
        a.AddDomainIntegrator(mfem.DiffusionIntegrator(self._one))
        if self._static_cond:
            a.EnableStaticCondensation()
        a.Assemble()
        return a

    def solve(self):
        self._x.Assign(0.0)
        if self._bc == "dirichlet":
            self._x.ProjectBdrCoefficient(self._u, self._ess_bdr)
        self._b = self.assembleLinearForm()
        self._a = self.assembleBilinearForm()

        A, B, X = mf.SystemMatrix(), mfem.Vector(), mfem.Vector()
        self._a.FormLinearSystem(self._ess_tdof_list, self._x, self._b, A, X, B)
        self._systemSize = A.GetGlobalNumRows() if mf.isParallel() else A.Height()
        print_("Size of linear system:", self._systemSize)

        self._iterations, self._converged, _ = self._solver.solve(A, B, X)
        if not self._converged:
            print_("Linear solver did not converge in", self._iterations, "iterations")
        self._a.RecoverFEMSolution(X, self._b, self._x)

        if self._bc == "neumann":
            self.__fixConstant()
        self._solved = True
        return self._x

    def __fixConstant(self):
        # The pure Neumann solution is unique up to a constant. Match the mean of the exact solution.
        area = mf.integrate(self._space, self._one)
        mean_h = mf.integrate(self._space, mf.generateCoefficient(self._x)) / area
        mean = mf.integrate(self._space, self._u) / area
        self._x.GetDataArray()[:] -= mean_h - mean

    def errors(self):
        """
        Returns dictionary of the L2 error, the maximum error at vertices, the maximum nodal value,
        the number of unknowns and the size of the linear system.
        """
        if not self._solved:
            raise RuntimeError("solve() must be called before errors().")
        values = mf.nodalValues(self._x)
        exact = self._solution.evaluate(mf.vertexCoordinates(self._mesh))
        return {
            "L2": self._x.ComputeL2Error(self._u),
            "max": mf.getMax(float(np.max(np.abs(values - exact)))),
            "max_value": mf.getMax(float(np.max(values))),
            "unknowns": self.unknowns,
            "system_size": self._systemSize,
            "iterations": self._iterations,
        }


def parseArgs(argv=None):
    parser = argparse.ArgumentParser(prog="mfem_apps.examples.diffusion", description="Poisson problem with manufactured solution.")
    parser.add_argument("-m", "--mesh", help="Mesh file to use. The unit square is generated if omitted.", type=str, default=None)
    parser.add_argument("-n", "--elements", help="Number of elements per side of the generated unit square mesh.", type=int, default=16)
    parser.add_argument("-t", "--triangles", help="Use triangles for the generated mesh.", action="store_true")
    parser.add_argument("-r", "--refine", help="Number of uniform refinements.", type=int, default=0)
    parser.add_argument("-o", "--order", help="Finite element order (polynomial degree) or -1 for isoparametric space.", type=int, default=1)
    parser.add_argument("-bc", "--boundary", help="Boundary condition type.", choices=DiffusionProblem._bcTypes, default="neumann")
    parser.add_argument("-sc", "--static-condensation", help="Enable static condensation.", dest="static_cond", action="store_true")
    parser.add_argument("-no-sc", "--no-static-condensation", help="Disable static condensation.", dest="static_cond", action="store_false")
    parser.add_argument("-vis", "--visualization", help="Enable GLVis visualization.", dest="visualization", action="store_true")
    parser.add_argument("-no-vis", "--no-visualization", help="Disable GLVis visualization.", dest="visualization", action="store_false")
    parser.add_argument("-out", "--output", help="Output directory.", type=str, default=".")
    parser.set_defaults(static_cond=False, visualization=True)
    return parser.parse_args(argv)


def printOptions(args):
    print_("Options used:")
    for key, value in vars(args).items():
        print_("   --" + key.replace("_", "-"), value)


def run(args):
    mf.print_initialize("diffusion example")
    printOptions(args)

    if args.mesh is None:
        etype = "triangle" if args.triangles else "quad"
        mesh = mf.rectangleMesh(args.elements, args.elements, elementType=etype, refine=args.refine)
    else:
        mesh = mf.loadMesh(args.mesh, refine=args.refine)
    mf.printMeshInfo(mesh)

    problem = DiffusionProblem(mesh, args.order, args.boundary, args.static_cond)
    print_("Number of finite element unknowns:", problem.unknowns)
    x = problem.solve()

    err = problem.errors()
    print_("\n|| u_h - u ||_{L^2} =", err["L2"], "\n")
    print_("max parameter:", err["max_value"])
    print_("max error at vertices:", err["max"])

    dirname = mf.prepareDirectory(args.output)
    mf.exportSolution(mesh, x, os.path.join(dirname, "refined.mesh"), os.path.join(dirname, "sol.gf"))
    mf.exportNumpy(os.path.join(dirname, "solution.npz"), mesh, u=x)

    if args.visualization:
        mf.sendToGLVis(mesh, x)
    return problem


def main(argv=None):
    try:
        args = parseArgs(argv)
    except SystemExit as e:
        # argparse has already printed the usage
        return 0 if e.code in (0, None) else 1
    run(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
