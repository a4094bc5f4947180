"""
Initial conditions of the reduced (two-field) resistive MHD model.

The state consists of the stream function phi, the flux function psi, the vorticity w = Delta phi
and the current density j = Delta psi. Each case gives these fields as sympy expressions of x and y,
together with the background flux (for post-processing) and the source term E0rhs that keeps the
equilibrium steady against resistive decay.
"""

import sympy as sp

from mfem_apps.mf.coef import x, y

conditionList = {}


def addInitialCondition(icase, condition):
    condition.icase = icase
    conditionList[icase] = condition


def generateInitialCondition(icase, params=None, **kwargs):
    """
    Create the initial condition of the given case.

    Args:
        icase(int): 1 (wave), 2 (tearing mode), 3 (island coalescence) or 4 (island coalescence with localized perturbation).
        params(MHDParameters): Parameters. If omitted, the case defaults updated by kwargs are used.
    """
    if icase not in conditionList:
        raise ValueError("Unknown initial condition case " + str(icase) + ". Choose from " + str(sorted(conditionList.keys())))
    cond = conditionList[icase]
    if params is None:
        params = cond.defaultParameters(**kwargs)
    return cond(params)


class MHDParameters:
    """
    Parameters of the MHD initial conditions.

    Args:
        beta(float): Magnitude of the perturbation.
        Lx(float): Size of the x domain.
        lam(float): Width of the equilibrium current sheet/islands.
        resistivity(float): Resistivity used in the equilibrium source term.
        ep(float): Island parameter of the coalescence problem.
        tau(float): Localization of the perturbation in case 4.
    """

    def __init__(self, beta=1e-3, Lx=3.0, lam=5.0, resistivity=1e-3, ep=0.2, tau=15.0):
        self.beta = beta
        self.Lx = Lx
        self.lam = lam
        self.resistivity = resistivity
        self.ep = ep
        self.tau = tau

    def dictionary(self):
        return {"beta": self.beta, "Lx": self.Lx, "lambda": self.lam, "resistivity": self.resistivity, "ep": self.ep, "tau": self.tau}


class MHDInitialCondition:
    """
    Base class of the initial conditions. Subclasses define psi, j and backPsi.
    """
    _defaults = {}

    def __init__(self, params):
        self._params = params

    @classmethod
    def defaultParameters(cls, **kwargs):
        d = dict(cls._defaults)
        d.update(kwargs)
        return MHDParameters(**d)

    @classmethod
    def domain(cls, params):
        """Computational domain as (xrange, yrange)."""
        raise NotImplementedError

    @property
    def params(self):
        return self._params

    @property
    def phi(self):
        return sp.Integer(0)

    @property
    def w(self):
        return sp.Integer(0)

    @property
    def psi(self):
        raise NotImplementedError

    @property
    def j(self):
        raise NotImplementedError

    @property
    def backPsi(self):
        raise NotImplementedError

    @property
    def E0rhs(self):
        return sp.Integer(0)

    @property
    def fields(self):
        return {"phi": self.phi, "psi": self.psi, "w": self.w, "j": self.j, "backPsi": self.backPsi}


class _SinusoidalPerturbation(MHDInitialCondition):
    @classmethod
    def domain(cls, params):
        return (0, params.Lx), (0, 1)

    @property
    def perturbation(self):
        p = self._params
        return p.beta * sp.sin(sp.pi * y) * sp.cos(2 * sp.pi / p.Lx * x)

    @property
    def perturbationJ(self):
        p = self._params
        return -sp.pi**2 * (1 + 4 / p.Lx**2) * p.beta * sp.sin(sp.pi * y) * sp.cos(2 * sp.pi / p.Lx * x)


class WaveCondition(_SinusoidalPerturbation):
    """Uniform field psi = -y with a sinusoidal perturbation."""
    _defaults = {"beta": 1e-3, "Lx": 3.0, "lam": 5.0}

    @property
    def psi(self):
        return -y + self.perturbation

    @property
    def j(self):
        return self.perturbationJ

    @property
    def backPsi(self):
        return -y


class TearingModeCondition(_SinusoidalPerturbation):
    """Harris current sheet centered at y = 1/2 with a sinusoidal perturbation."""
    _defaults = {"beta": 1e-3, "Lx": 3.0, "lam": 5.0}

    @property
    def equilibriumJ(self):
        lam = self._params.lam
        return lam / sp.cosh(lam * (y - sp.Rational(1, 2)))**2

    @property
    def psi(self):
        return self.backPsi + self.perturbation

    @property
    def j(self):
        return self.equilibriumJ + self.perturbationJ

    @property
    def backPsi(self):
        lam = self._params.lam
        return sp.log(sp.cosh(lam * (y - sp.Rational(1, 2)))) / lam

    @property
    def E0rhs(self):
        return self._params.resistivity * self.equilibriumJ


class IslandCoalescenceCondition(MHDInitialCondition):
    """Chain of magnetic islands (Fadeev equilibrium) with a perturbation merging neighboring islands."""
    _defaults = {"beta": 1e-3, "Lx": 2.0, "lam": 0.2}

    @classmethod
    def domain(cls, params):
        return (-params.Lx / 2, params.Lx / 2), (-1, 1)

    @property
    def _denominator(self):
        p = self._params
        return sp.cosh(y / p.lam) + p.ep * sp.cos(x / p.lam)

    @property
    def equilibriumJ(self):
        p = self._params
        return (p.ep**2 - 1) / p.lam / self._denominator**2

    @property
    def perturbation(self):
        return self._params.beta * sp.cos(sp.pi * y / 2) * sp.cos(sp.pi * x)

    @property
    def perturbationJ(self):
        return -sp.pi**2 * sp.Rational(5, 4) * self._params.beta * sp.cos(sp.pi * y / 2) * sp.cos(sp.pi * x)

    @property
    def psi(self):
        return self.backPsi + self.perturbation

    @property
    def j(self):
        return self.equilibriumJ + self.perturbationJ

    @property
    def backPsi(self):
        return -self._params.lam * sp.log(self._denominator)

    @property
    def E0rhs(self):
        return self._params.resistivity * self.equilibriumJ


class LocalizedIslandCoalescenceCondition(IslandCoalescenceCondition):
    """Island coalescence with the perturbation localized around y = 0."""

    @property
    def perturbation(self):
        p = self._params
        return p.beta * sp.exp(-p.tau * y**2) * sp.cos(sp.pi * x)

    @property
    def perturbationJ(self):
        p = self._params
        return p.beta * sp.exp(-p.tau * y**2) * sp.cos(sp.pi * x) * ((2 * p.tau * y)**2 - sp.pi**2 - 2 * p.tau)


addInitialCondition(1, WaveCondition)
addInitialCondition(2, TearingModeCondition)
addInitialCondition(3, IslandCoalescenceCondition)
addInitialCondition(4, LocalizedIslandCoalescenceCondition)
