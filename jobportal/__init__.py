"""
Job Portal
Company registration with email + SMS verification, passwordless OTP
login and job postings with invited candidates.

Architecture:
- MongoDB: clients, delivery log, postings
- SMTP: email codes and invitations
- Twilio: SMS codes
"""

__version__ = "1.0.0"
