from .datatypes import uint64_t, float64_t
from .utils import bitcast
from .errors import TrigcheckError, ConfigError, OracleStartError
from .config import OracleConfig, SweepConfig, POINTS_IN_ONE_RANGE
from .kernel import SinCosOmc, sincos1cos
from .functions import Function, libm_sincos1cos
from .ulp import ulp_distance, about
from .oracle import FricasOracle
from .compare import FunctionValue, InterestingPoint, check_point, quite_interesting
from .report import MicroReport, RangeReport, Scores, build_reports, scores_of
from .sweep import Range, Sweep, SweepResult

__version__ = "1.0.0"

__all__ = [
    "uint64_t",
    "float64_t",
    "bitcast",
    "TrigcheckError",
    "ConfigError",
    "OracleStartError",
    "OracleConfig",
    "SweepConfig",
    "POINTS_IN_ONE_RANGE",
    "SinCosOmc",
    "sincos1cos",
    "Function",
    "libm_sincos1cos",
    "ulp_distance",
    "about",
    "FricasOracle",
    "FunctionValue",
    "InterestingPoint",
    "check_point",
    "quite_interesting",
    "MicroReport",
    "RangeReport",
    "Scores",
    "build_reports",
    "scores_of",
    "Range",
    "Sweep",
    "SweepResult",
]
