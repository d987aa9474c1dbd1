### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - API Package -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
CMIS Admin Console API Package

This package contains the FastAPI application behind the county and
national administration console: user/role management and the
registration-application review workflow.
"""

__version__ = "1.0.0"
