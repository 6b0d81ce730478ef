"""Print a long-lived access token for scripted clients.

Usage:
    SECRET_KEY=... python create_token.py [days]
"""
import sys
from datetime import timedelta

from hosting_scheduler_api.app.core.config import settings
from hosting_scheduler_api.app.core.security import create_access_token

days = int(sys.argv[1]) if len(sys.argv) > 1 else 365
print(create_access_token({"authenticated": True}, settings, expires_delta=timedelta(days=days)))
