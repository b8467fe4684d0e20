##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `abstracts` package provides ABC classes that can be used throughout
Recordbase's codebase.

Modules:
    factory: Contains `RecordbaseBaseFactory`, used to manage pluggable components.
"""

from recordbase.abstracts.factory import RecordbaseBaseFactory


__all__ = ["RecordbaseBaseFactory"]
