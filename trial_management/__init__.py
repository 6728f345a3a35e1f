"""
Trial management data access layer.

SQLAlchemy-backed repository over organizations, clinical trials,
clinical sites, patients, patient data files and patient site history.
"""

__version__ = "0.1.0"
