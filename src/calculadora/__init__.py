"""
Calculadora API

Backend for rental-deposit calculations:
- User accounts with admin/user roles (bcrypt passwords, JWT bearer tokens)
- Client records keyed by CPF
- Calculations derived from rental value, fees and savings rate

The HTTP surface lives in `calculadora.main`; services in
`calculadora.application.services` receive their database session explicitly.
"""

__version__ = "1.0.0"
