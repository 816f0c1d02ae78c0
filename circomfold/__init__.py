"""Circom R1CS and witness file readers, NIVC setup data and circuit input preparation."""

__version__ = "0.1.0"