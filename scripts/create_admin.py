"""Create an administrator account.

Usage: python -m scripts.create_admin <username> <password>
"""
import sys

from app.core.database import SessionLocal
from app.core.exceptions import AppException
from app.services.auth import AuthService

if len(sys.argv) != 3:
    print(__doc__.strip())
    sys.exit(1)

username, password = sys.argv[1], sys.argv[2]

with SessionLocal() as session:
    try:
        admin = AuthService(session).create_admin(username, password)
        session.commit()
    except AppException as e:
        session.rollback()
        print(f"❌ {e.message}")
        sys.exit(1)

print(f"✅ Admin created: {admin.username} (id={admin.id})")
