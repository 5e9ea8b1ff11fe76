"""Geo Attendance package.

Organized by feature modules (geo, attendance, payroll, users) with a thin Flask
JSON controller layer on top of service/repository layers.
"""
