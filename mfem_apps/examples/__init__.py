from .diffusion import ManufacturedSolution, DiffusionProblem
