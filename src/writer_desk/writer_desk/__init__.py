"""Writer Desk package.

Back office for a freelance-writing brokerage, organized by feature modules
(students, writers, assignments, dashboard, ...) with a thin Flask controller
layer over service/repository layers.
"""
