"""
ServiceNow flag daemon package.

Polls a ServiceNow assignment group for open, unassigned tasks and shows
the queue size as a color on one or more Luxafor flags.
"""
