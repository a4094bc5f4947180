from .initialConditions import MHDParameters, MHDInitialCondition, generateInitialCondition, addInitialCondition
from .fields import MHDInitialState
