"""Timeclock package.

Feature modules (attendance, schedules, employees, reports, ...) with a thin
Flask controller layer over service/repository layers. The attendance engine
holds the punch-window rules and worked-hours arithmetic.
"""
