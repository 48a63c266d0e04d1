"""Shift Tracker package.

Time computation and correction engine for a workplace time clock, organized
by feature modules (timeinput, policies, payroll, corrections, ...) with a
thin Flask controller layer and service/repository layers.
"""
