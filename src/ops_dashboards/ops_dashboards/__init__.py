"""Operational excellence dashboards.

Feature modules (attendance, approvals, incidents, schedules, feedback) each
ship a thin Flask controller over a service and repository layer. Filtering
goes through `filters`, which turns query-string criteria into structured
predicates that repositories compile with bound parameters.
"""
