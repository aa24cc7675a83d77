"""
PrivacyWatch

LGPD compliance assessment, remediation task derivation and security
monitoring engine.
"""

__version__ = "1.0.0"
