"""Org talent package.

Organised by feature modules (projects, employees, evaluations, potential,
matrix, ...) with a thin Flask controller layer over service/repository layers.
"""
