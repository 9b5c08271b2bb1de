"""HR Assistant package.

This package is organized by feature modules (employees, leave, attendance,
payroll, ...) with a thin Flask controller layer and service/repository
layers backed by MongoDB.
"""
