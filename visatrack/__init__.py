"""visatrack - personal visa application checklist tracker"""

__version__ = "0.1.0"
