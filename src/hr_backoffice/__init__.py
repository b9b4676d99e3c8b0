"""HR back-office API.

Feature packages (employees, compensation, leaves, attendance) each hold a
domain model, a repository interface with its MySQL implementation, a service
with the business rules and a thin Flask JSON controller.
"""
