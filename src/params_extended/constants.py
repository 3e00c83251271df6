# topmark:header:start
#
#   project      : ParamsExtended
#   file         : constants.py
#   file_relpath : src/params_extended/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ParamsExtended Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

PARAMS_EXTENDED_DISTRIBUTION: str = "params-extended"

PARAMS_EXTENDED_VERSION: str = get_version(PARAMS_EXTENDED_DISTRIBUTION)

VALUE_NOT_SET: str = "<not set>"
