import os
import numpy as np

from . import mfem_orig
from .util import print_
from .gridFunction import nodalValues, vertexCoordinates, elementGroups


def _rankSuffix(file):
    if mfem_orig.isParallel():
        return file + "." + "{:0>6d}".format(mfem_orig.rank)
    return file


def exportMesh(mesh, file, precision=8):
    file = _rankSuffix(file)
    mesh.Print(file, precision)
    return file


def exportGridFunction(gf, file, precision=8):
    file = _rankSuffix(file)
    gf.Save(file, precision)
    return file


def exportSolution(mesh, gf, mesh_file="refined.mesh", sol_file="sol.gf", precision=8):
    """
    Save the mesh and the solution in MFEM format. They can be viewed by "glvis -m refined.mesh -g sol.gf".
    In parallel mode, each processor writes its own part with the rank suffix.
    """
    return exportMesh(mesh, mesh_file, precision), exportGridFunction(gf, sol_file, precision)


def exportNumpy(file, mesh, **fields):
    """
    Save vertex coordinates, element connectivity and nodal values of the fields in npz format.
    """
    data = {"coords": vertexCoordinates(mesh)}
    data.update(elementGroups(mesh))
    for key, gf in fields.items():
        data[key] = nodalValues(gf)
    # np.savez appends .npz, so the rank goes before the extension
    root, ext = os.path.splitext(file)
    if ext != ".npz":
        root, ext = file, ".npz"
    file = _rankSuffix(root) + ext
    np.savez(file, **data)
    return file


def prepareDirectory(dirname):
    if dirname is None or dirname == "":
        return "."
    os.makedirs(dirname, exist_ok=True)
    return dirname


def sendToGLVis(mesh, gf, host="localhost", port=19916, keys=None):
    """
    Send the solution to GLVis server by socket.
    Returns False if the server is not available.
    """
    sock = mfem_orig.socketstream(host, port)
    if not sock.is_open():
        print_("Unable to connect to GLVis server at " + host + ":" + str(port))
        return False
    sock.precision(8)
    if mfem_orig.isParallel():
        sock.send_text("parallel " + str(mfem_orig.size) + " " + str(mfem_orig.rank))
    sock.send_solution(mesh, gf)
    if keys is not None:
        sock.send_text("keys " + keys)
    sock.flush()
    return True
