"""Attendance Scanner package.

Feature modules (persons, attendance, workflow, stats) each keep a plain data
model, a repository interface with MySQL / in-memory implementations, a service
layer and a thin Flask controller.
"""
