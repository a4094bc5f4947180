from . import mfem_orig
from .mfem_orig import isParallel, isRoot
from .util import print_, print_initialize, wait, getMax, getSum
from .coef import generateCoefficient, SympyCoefficient, ConstantCoefficient, VectorArrayCoefficient
from .forms import LinearForm, BilinearForm, SystemMatrix, integrate
from .gridFunction import FiniteElementSpace, GridFunction, nodalValues, vertexCoordinates
from .mesh import loadMesh, rectangleMesh, createRectangleMsh, meshInfo, printMeshInfo
from .solvers import KrylovSolver, getSolver, solve
from .output import exportSolution, exportNumpy, sendToGLVis, prepareDirectory
