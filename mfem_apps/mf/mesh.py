import os
import numpy as np

from . import mfem_orig
from .util import print_

if mfem_orig.isParallel():
    from mpi4py import MPI


_elementTypes = {"quad": "QUADRILATERAL", "triangle": "TRIANGLE"}


def loadMesh(file, refine=0):
    """
    Load mesh file (MFEM, gmsh, VTK, ...) and refine it uniformly.
    In parallel mode, the refined serial mesh is distributed as ParMesh.
    """
    if not os.path.exists(file):
        raise FileNotFoundError("Mesh file " + str(file) + " does not exist.")
    mesh = mfem_orig.Mesh(file, 1, 1)
    if len([i for i in mesh.bdr_attributes]) == 0 and mesh.Dimension() == 1:  # For 1D mesh, we have to set boundary manually.
        _createBoundaryFor1D(mesh, file)
    return _finalize(mesh, refine)


def rectangleMesh(nx, ny, xrange=(0, 1), yrange=(0, 1), elementType="quad", refine=0):
    """
    Cartesian mesh of the rectangle xrange x yrange with nx x ny cells.
    Triangular meshes split each cell into two triangles.
    Boundary attributes are 1 (bottom), 2 (right), 3 (top) and 4 (left).
    """
    if elementType not in _elementTypes:
        raise ValueError("Unknown element type " + str(elementType) + ". Choose from " + str(list(_elementTypes.keys())))
    sx, sy = xrange[1] - xrange[0], yrange[1] - yrange[0]
    if sx <= 0 or sy <= 0:
        raise ValueError("Invalid rectangle " + str(xrange) + " x " + str(yrange))
    etype = getattr(mfem_orig.Element, _elementTypes[elementType])
    mesh = mfem_orig.Mesh.MakeCartesian2D(nx, ny, etype, True, sx, sy)
    if xrange[0] != 0 or yrange[0] != 0:
        _translate(mesh, xrange[0], yrange[0])
    return _finalize(mesh, refine)


def _translate(mesh, x0, y0):
    from .coef import generateCoefficient, x, y
    shift = generateCoefficient([x + x0, y + y0])
    mesh.Transform(shift)


def _finalize(mesh, refine):
    for _ in range(refine):
        mesh.UniformRefinement()
    if mfem_orig.isParallel():
        pmesh = mfem_orig.ParMesh(MPI.COMM_WORLD, mesh)
        pmesh._mesh = mesh
        return pmesh
    else:
        return mesh


def _createBoundaryFor1D(mesh, file):
    import gmsh
    if not gmsh.isInitialized():
        gmsh.initialize()

    # Load file by gmsh
    model = gmsh.model()
    model.add("Default")
    model.setCurrent("Default")
    gmsh.merge(file)

    # Get all boundary nodes
    s = set(np.array([model.mesh.getNodes(*obj, includeBoundary=True)[0][:2] for obj in model.getEntities(1)]).flatten())

    # Set the boundary nodes to mesh object.
    for i, v in enumerate(sorted(s)):
        mesh.AddBdrPoint(int(v) - 1, i + 1)
    mesh.SetAttributes()
    model.remove()


def createRectangleMsh(file, xrange=(0, 1), yrange=(0, 1), size=0.1):
    """
    Generate triangular mesh of a rectangle by gmsh and save it as MSH 2.2 file readable by MFEM.
    Each edge gets its own physical group (boundary attribute) in the order bottom, right, top, left.
    """
    import gmsh
    if not gmsh.isInitialized():
        gmsh.initialize()
    gmsh.option.setNumber("General.Terminal", 0)
    model = gmsh.model()
    model.add("Rectangle")
    model.setCurrent("Rectangle")
    model.occ.addRectangle(xrange[0], yrange[0], 0, xrange[1] - xrange[0], yrange[1] - yrange[0])
    model.occ.synchronize()
    for i, obj in enumerate(model.getEntities(2)):
        model.addPhysicalGroup(2, [obj[1]], i + 1)
    for i, obj in enumerate(model.getEntities(1)):
        model.addPhysicalGroup(1, [obj[1]], i + 1)
    gmsh.option.setNumber("Mesh.MeshSizeMax", size)
    model.mesh.generate(2)
    gmsh.option.setNumber("Mesh.MshFileVersion", 2.2)
    gmsh.write(file)
    model.remove()
    return file


def meshInfo(mesh):
    if mfem_orig.isParallel():
        ne, nv = mesh.GetGlobalNE(), mesh.GetGlobalNV()
    else:
        ne, nv = mesh.GetNE(), mesh.GetNV()
    return {"dimension": mesh.Dimension(), "elements": ne, "vertices": nv,
            "domains": len([1 for _ in mesh.attributes]), "boundaries": len([1 for _ in mesh.bdr_attributes])}


def printMeshInfo(mesh):
    info = meshInfo(mesh)
    print_("Mesh generated: ", str(info["domains"]), "domains,", str(info["boundaries"]), "boundaries,", str(info["vertices"]), "nodes,", str(info["elements"]), "elements")
    print_("dimension of mesh:", info["dimension"])
