# topmark:header:start
#
#   project      : ParamsExtended
#   file         : __init__.py
#   file_relpath : src/params_extended/utils/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Internal utilities for ParamsExtended."""
