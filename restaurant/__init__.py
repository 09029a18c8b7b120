"""Restaurant Order System - REST backend for menu, ordering, company orders and reporting."""

__version__ = "1.0.0"
