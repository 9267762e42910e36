"""Monthly balance evolution of tax credits and installment plans."""

__version__ = "0.1.0"
