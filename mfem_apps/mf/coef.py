import sympy as sp
import numpy as np

from . import mfem_orig

domain = sp.Symbol("domain")
x, y, z = sp.symbols("x,y,z")


def generateCoefficient(coefs):
    """
    Generate MFEM coefficient from sympy expression, number, grid function or their lists.
    Dictionaries such as {1: x, 2: y, "default": 0} give piecewise coefficients,
    where the keys indicate domain/boundary attributes and "default" is used for the rest.
    Lists give vector coefficients, nested lists give matrix coefficients.
    """
    from .gridFunction import GridFunction
    if isinstance(coefs, _ScalarCoefBase):
        return coefs
    if isinstance(coefs, dict):
        return generateCoefficient(_parseDictToSympy(coefs))
    elif isinstance(coefs, (int, float, sp.Integer, sp.Float, sp.Rational)):
        return ConstantCoefficient(float(coefs))
    elif isinstance(coefs, GridFunction):
        return GridFunctionCoefficient(coefs)

    shape = np.shape(coefs)
    if len(shape) == 0:
        return SympyCoefficient(coefs)
    if len(shape) == 1:
        return VectorArrayCoefficient(coefs)
    elif len(shape) == 2:
        return MatrixArrayCoefficient(coefs)
    raise ValueError("Coefficient of shape " + str(shape) + " is not supported.")


def _parseDictToSympy(coefs):
    if len(coefs) == 0:
        raise ValueError("Empty coefficient dictionary.")
    shape = np.shape(coefs[list(coefs.keys())[0]])
    if len(shape) == 0:
        tuples = [(value, sp.Eq(domain, sp.Integer(key))) for key, value in coefs.items() if key != "default"]
        if "default" in coefs:
            tuples = tuples + [(coefs["default"], True)]
        else:
            tuples = tuples + [(tuples[0][0], True)]
        return sp.Piecewise(*tuples)
    else:
        return [_parseDictToSympy({key: value[i] for key, value in coefs.items()}) for i in range(shape[0])]


class _ScalarCoefBase:
    def __neg__(self):
        return -1.0 * self

    def __pow__(self, value):
        return PowerCoefficient(self, float(value))

    def __add__(self, value):
        return SumCoefficient(self, _asCoefficient(value))

    def __radd__(self, value):
        return SumCoefficient(_asCoefficient(value), self)

    def __sub__(self, value):
        return SumCoefficient(self, _asCoefficient(value), 1.0, -1.0)

    def __rsub__(self, value):
        return SumCoefficient(_asCoefficient(value), self, 1.0, -1.0)

    def __mul__(self, value):
        if isinstance(value, (int, float)):
            return ProductCoefficient(float(value), self)
        return ProductCoefficient(self, value)

    def __rmul__(self, value):
        if isinstance(value, (int, float)):
            return ProductCoefficient(float(value), self)
        return ProductCoefficient(value, self)

    def __truediv__(self, value):
        return self * value**(-1)

    def __rtruediv__(self, value):
        return value * self**(-1)


def _asCoefficient(value):
    if isinstance(value, (int, float)):
        return ConstantCoefficient(value)
    return value


class GridFunctionCoefficient(mfem_orig.GridFunctionCoefficient, _ScalarCoefBase):
    def __init__(self, gf):
        super().__init__(gf)
        self._gf = gf


class ConstantCoefficient(mfem_orig.ConstantCoefficient, _ScalarCoefBase):
    def __init__(self, value):
        super().__init__(float(value))
        self._value = float(value)


class SumCoefficient(mfem_orig.SumCoefficient, _ScalarCoefBase):
    def __init__(self, v1, v2, *args):
        super().__init__(v1, v2, *args)
        self._v1 = v1
        self._v2 = v2


class ProductCoefficient(mfem_orig.ProductCoefficient, _ScalarCoefBase):
    def __init__(self, v1, v2):
        super().__init__(v1, v2)
        self._v1 = v1
        self._v2 = v2


class PowerCoefficient(mfem_orig.PowerCoefficient, _ScalarCoefBase):
    def __init__(self, v1, v2):
        super().__init__(v1, v2)
        self._v1 = v1
        self._v2 = v2


class SympyCoefficient(mfem_orig.PyCoefficient, _ScalarCoefBase):
    """
    Scalar coefficient evaluating a sympy expression of domain, x, y, z at physical points.
    """

    def __init__(self, expr):
        super().__init__()
        self._expr = sp.sympify(expr)
        self._funcs = sp.lambdify((domain, x, y, z), self._expr, "numpy")
        self._attr = 0

    @property
    def expression(self):
        return self._expr

    def Eval(self, T, ip):
        self._attr = T.Attribute
        return super().Eval(T, ip)

    def EvalValue(self, p):
        p = list(p) + [0.0] * (3 - len(p))
        return float(self._funcs(self._attr, *p))

    def __call__(self, *p):
        return self.EvalValue(p)


class VectorArrayCoefficient(mfem_orig.VectorArrayCoefficient):
    def __init__(self, coefs):
        super().__init__(len(coefs))
        self._coefs = [generateCoefficient(c) for c in coefs]
        for i, c in enumerate(self._coefs):
            self.Set(i, c, own=False)

    def __getitem__(self, index):
        return self._coefs[index]

    def __len__(self):
        return len(self._coefs)


class MatrixArrayCoefficient(mfem_orig.MatrixArrayCoefficient):
    def __init__(self, coefs):
        super().__init__(len(coefs))
        self._coefs = [[generateCoefficient(c) for c in cs] for cs in coefs]
        for i, cs in enumerate(self._coefs):
            for j, c in enumerate(cs):
                self.Set(i, j, c, own=False)

    def __getitem__(self, index):
        return self._coefs[index[0]][index[1]]
