"""Payroll System package.

Feature modules (employees, attendance, leaves, settings, payroll, ...) with
a thin Flask controller layer on top of service/repository layers. The
payroll engine itself (``payroll.engine``) is pure and does no I/O.
"""
