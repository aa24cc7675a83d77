"""
PrivacyWatch Services Package

Assessment, remediation and audit services.
"""
