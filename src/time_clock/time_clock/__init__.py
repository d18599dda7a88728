"""Employee time-clock package.

This package is organized by feature modules (employees, attendance, reports, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
