"""railtypes: optional values, results and either types for Python.

Public API:
    - Maybe: a value that may be absent
    - Result / ValueResult: success or failure, without or with a payload
    - Either / EitherOr: exclusive and inclusive two-sided containers
    - combine_all, combine_sequential, ...: combinators over sequences
    - config_scope / resolve_config: library settings
"""

from __future__ import annotations

import logging

from railtypes.config import FrozenConfig, config_scope, current_config, resolve_config
from railtypes.either import Either, EitherOr
from railtypes.errors import (
    ConfigurationError,
    ContractError,
    ErrorContainer,
    InvalidArgumentError,
    InvalidOperationError,
    MissingArgumentError,
    RailtypesError,
)
from railtypes.maybe import ElseHandle, Maybe
from railtypes.result import Result, ValueResult
from railtypes.sequences import (
    alter_in_place,
    combine_all,
    combine_all_values,
    combine_sequential,
    combine_sequential_calls,
    iter_sequential,
    only_errors,
    only_one_or_maybe,
    only_one_or_none,
    only_one_or_result,
    only_values,
    single_or_maybe,
    tee,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("railtypes")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("railtypes").addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "ContractError",
    "Either",
    "EitherOr",
    "ElseHandle",
    "ErrorContainer",
    "FrozenConfig",
    "InvalidArgumentError",
    "InvalidOperationError",
    "Maybe",
    "MissingArgumentError",
    "RailtypesError",
    "Result",
    "ValueResult",
    "alter_in_place",
    "combine_all",
    "combine_all_values",
    "combine_sequential",
    "combine_sequential_calls",
    "config_scope",
    "current_config",
    "iter_sequential",
    "only_errors",
    "only_one_or_maybe",
    "only_one_or_none",
    "only_one_or_result",
    "only_values",
    "resolve_config",
    "single_or_maybe",
    "tee",
]
