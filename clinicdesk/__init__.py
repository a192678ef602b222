"""ClinicDesk package initializer.

Ensures the local ``clinicdesk`` package is treated as a regular package
instead of falling back to namespace package resolution.
"""
