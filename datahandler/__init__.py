"""Experimental measurements: variables, formulas, tables, plot data, storage, reports and a shell."""

__version__ = "0.1.0"