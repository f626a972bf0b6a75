"""HR admin panel package.

Organized by feature modules (users, attendance, leave, payroll, ...) with a
thin Flask controller layer over service/repository layers. All state is kept
in memory and seeded from static data.
"""
