#!/usr/bin/env python3
"""
Connection Test Script

Run this to verify MongoDB is reachable and the delivery channels are configured.
Usage: python scripts/test_connections.py
"""
import sys
sys.path.insert(0, '.')

from jobportal.db.mongodb import test_mongo_connection
from jobportal.core.config import get_settings
from jobportal.services.delivery import SmtpConfig


def main():
    settings = get_settings()
    print("=" * 50)
    print("JOB PORTAL - CONNECTION TEST")
    print("=" * 50)

    # Test MongoDB
    print("\n[1] Testing MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        print("    ✅ MongoDB: CONNECTED")
    else:
        print("    ❌ MongoDB: FAILED")

    # SMTP (config only, no mail is sent)
    print("\n[2] Checking SMTP settings...")
    smtp = SmtpConfig.from_settings(settings)
    if smtp.complete:
        print(f"    ✅ SMTP: {smtp.user}@{smtp.host}:{smtp.port}")
    else:
        print("    ⚠️  SMTP: incomplete, email codes will be logged as failed")

    # Twilio (config only, no SMS is sent)
    print("\n[3] Checking Twilio settings...")
    if settings.twilio_account_sid and settings.twilio_auth_token and settings.twilio_phone_number:
        print(f"    ✅ Twilio: sending from {settings.twilio_phone_number}")
    else:
        print("    ⚠️  Twilio: incomplete, SMS codes will be logged as failed")

    print("\n" + "=" * 50)
    print("Connection test complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
