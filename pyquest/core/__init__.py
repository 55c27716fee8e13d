from .covariance import (
    QCovConfig,
    QorConfig,
    Strategy,
    assemble_covariance,
    qcov,
    reciprocal_density,
)
from .density import DensityConfig, KernelDensityCurve
from .kernels import epanechnikov, kernel_weights, pseudo_observations
from .qor import (
    lognormal_qor,
    qor_bandwidth,
    qor_exponential,
    qor_lognormal,
    qor_normal,
)
from .quantiles import sample_quantiles
from ._utils import pairwise_weights
from .validation import validate_levels, validate_sample
