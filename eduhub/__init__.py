"""EduHub: attendance, gradebook, assignments and messaging for K-12 schools."""

__version__ = "1.0.0"
