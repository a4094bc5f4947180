import numpy as np
from . import mfem_orig

if mfem_orig.isParallel():
    FiniteElementSpace = mfem_orig.ParFiniteElementSpace
    GridFunction = mfem_orig.ParGridFunction
else:
    FiniteElementSpace = mfem_orig.FiniteElementSpace
    GridFunction = mfem_orig.GridFunction


def _localNodalValues(x):
    res = []
    v = mfem_orig.Vector()
    for d in range(x.VectorDim()):
        x.GetNodalValues(v, d + 1)
        res.append(np.array(v.GetDataArray()))
    return res


def nodalValues(gf):
    """
    Values of a scalar grid function at the local mesh vertices, ordered as the vertices.
    """
    return _localNodalValues(gf)[0]


def vertexCoordinates(mesh):
    """
    Coordinates of the local mesh vertices as (number of vertices, dimension) array.
    """
    coords = mfem_orig.Vector()
    mesh.GetVertices(coords)
    return np.array(coords.GetDataArray()).reshape(mesh.SpaceDimension(), -1).T


_key_list = {0: "point", 1: "line", 2: "triangle", 3: "quad", 4: "tetra", 5: "hexa", 6: "prism", 7: "pyramid"}
_num_list = {"point": 1, "line": 2, "triangle": 3, "quad": 4, "tetra": 4, "hexa": 8, "prism": 6, "pyramid": 5}


def elementGroups(mesh):
    """
    Vertex connectivity of the local elements grouped by element type, e.g. {"triangle": array of shape (N, 3)}.
    """
    groups = {}
    for n, key in _key_list.items():
        vtx = mfem_orig.intArray()
        mesh.GetElementData(n, vtx, mfem_orig.intArray())
        vtx = np.array([v for v in vtx]).reshape(-1, _num_list[key])
        if len(vtx) == 0:
            continue
        groups[key] = vtx
    return groups
