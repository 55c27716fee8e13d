import logging

from pyquest.core import (
    DensityConfig,
    KernelDensityCurve,
    QCovConfig,
    QorConfig,
    Strategy,
    assemble_covariance,
    epanechnikov,
    kernel_weights,
    lognormal_qor,
    pairwise_weights,
    pseudo_observations,
    qcov,
    qor_bandwidth,
    qor_exponential,
    qor_lognormal,
    qor_normal,
    reciprocal_density,
    sample_quantiles,
    validate_levels,
    validate_sample,
)
from pyquest.errors import InvalidLevelError, InvalidSampleError, QuantileCovError
from pyquest.logging_config import configure_logging, get_logger

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
