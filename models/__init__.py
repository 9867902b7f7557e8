"""
models/ - Domain Layer
======================
Plain dataclasses for recurring expenses, their schedules, and the payment
items materialized from them. No I/O happens here.
"""
