"""
ServiceNow Flag
===============

Shows the number of open, unassigned ServiceNow tasks of an assignment group
as a color on one or more Luxafor flags.

This package provides:
- servicenow: a client for the ServiceNow table API
- luxafor: a client for the Luxafor webhook API
- scripts.flag: the polling daemon

For more information, see the README.md file.
"""

__version__ = "0.1.0"
