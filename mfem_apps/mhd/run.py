import argparse
import time

from mfem_apps import mf
from mfem_apps.mf import print_
from .initialConditions import conditionList, generateInitialCondition
from .fields import MHDInitialState


def parseArgs(argv=None):
    parser = argparse.ArgumentParser(prog="mfem_apps.mhd", description="Setup of the reduced MHD initial conditions.")
    parser.add_argument("-i", "--icase", help="Initial condition: 1 wave, 2 tearing mode, 3 island coalescence, 4 localized island coalescence.", type=int, choices=sorted(conditionList.keys()), default=1)
    parser.add_argument("-o", "--order", help="Finite element order (polynomial degree).", type=int, default=2)
    parser.add_argument("-n", "--elements", help="Number of elements per unit length in each direction.", type=int, default=16)
    parser.add_argument("-r", "--refine", help="Number of uniform refinements.", type=int, default=0)
    parser.add_argument("-beta", "--beta", help="Perturbation magnitude. Case default if omitted.", type=float, default=None)
    parser.add_argument("-Lx", "--Lx", help="Size of the x domain. Case default if omitted.", type=float, default=None)
    parser.add_argument("-lambda", "--lambda", help="Width of the current sheet or the islands. Case default if omitted.", dest="lam", type=float, default=None)
    parser.add_argument("-resi", "--resistivity", help="Resistivity.", type=float, default=None)
    parser.add_argument("-vis", "--visualization", help="Send psi to GLVis.", dest="visualization", action="store_true")
    parser.add_argument("-no-vis", "--no-visualization", help="Disable GLVis visualization.", dest="visualization", action="store_false")
    parser.add_argument("-out", "--output", help="Output directory.", type=str, default=".")
    parser.set_defaults(visualization=False)
    return parser.parse_args(argv)


def run(args):
    mf.print_initialize("MHD initial condition setup")
    overrides = {key: value for key, value in [("beta", args.beta), ("Lx", args.Lx), ("lam", args.lam), ("resistivity", args.resistivity)] if value is not None}
    cond = generateInitialCondition(args.icase, **overrides)
    print_("Initial condition", args.icase, "(" + type(cond).__name__ + ") with", cond.params.dictionary())

    (x0, x1), (y0, y1) = cond.domain(cond.params)
    nx = max(1, int(round(args.elements * (x1 - x0))))
    ny = max(1, int(round(args.elements * (y1 - y0))))
    mesh = mf.rectangleMesh(nx, ny, (x0, x1), (y0, y1), refine=args.refine)
    mf.printMeshInfo(mesh)

    start = time.time()
    state = MHDInitialState(mesh, cond, args.order)
    print_("Fields projected in", "{:.3f}".format(time.time() - start), "s")
    for key, value in state.norms().items():
        print_("   ||" + key + "||_{L^2} =", value)

    state.save(args.output)
    if args.visualization:
        mf.sendToGLVis(mesh, state["psi"], keys="mj")
    return state


def main(argv=None):
    run(parseArgs(argv))
    return 0
