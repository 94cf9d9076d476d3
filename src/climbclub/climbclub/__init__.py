"""Climbing club package.

This package is organized by feature modules (members, sessions, attendance,
reports, ...) with a thin Flask controller layer on top of service and
repository layers. All club data lives in one JSON document.
"""
