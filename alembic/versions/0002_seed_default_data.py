"""seed_default_data

Revision ID: 0002_seed_default_data
Revises: 0001_initial_schema
Create Date: 2026-10-19 09:30:00.000000

This migration seeds the required default data:
- Portal settings row (results closed, welcome announcement)
- Admin user (username: admin, password: admin123); change it after first login
- General secondary certificate with its six sections
- Subjects of the scientific section
"""
from typing import Sequence, Union
from datetime import datetime, timezone

from alembic import op
from sqlalchemy.sql import text
from passlib.context import CryptContext


# revision identifiers, used by Alembic.
revision: str = '0002_seed_default_data'
down_revision: Union[str, None] = '0001_initial_schema'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Password hashing for seeding
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

WELCOME_ANNOUNCEMENT = "مرحباً بكم في نظام نتائج الامتحانات"

SECTIONS = [
    "علمي",
    "أدبي",
    "مهني تجاري",
    "مهني نسوي",
    "مهني صناعي",
    "شرعي",
]

# (name, max_grade, min_grade) for the scientific section
SCIENTIFIC_SUBJECTS = [
    ("الرياضيات", 300, 150),
    ("الفيزياء", 200, 100),
    ("الكيمياء", 200, 100),
    ("اللغة العربية", 400, 200),
    ("اللغة الأجنبية", 200, 100),
    ("التربية الوطنية", 100, 50),
    ("التربية الدينية", 100, 50),
]


def upgrade() -> None:
    """Seed default data: settings, admin user, certificate, sections and subjects."""
    conn = op.get_bind()
    now = datetime.now(timezone.utc)

    print("🌱 Seeding default data...")

    # 1. Portal settings (single row, id 1)
    print("   Creating portal settings...")
    conn.execute(text("""
        INSERT INTO portal_settings (id, is_results_open, announcement_text, created_at, updated_at)
        VALUES (1, false, :announcement, :now, :now)
    """), {"announcement": WELCOME_ANNOUNCEMENT, "now": now})

    # 2. Admin user
    print("   Creating Admin user (username: admin, password: admin123)...")
    password_hash = pwd_context.hash("admin123", rounds=12)
    conn.execute(text("""
        INSERT INTO admins (username, password_hash, is_active, created_at, updated_at)
        VALUES ('admin', :password_hash, true, :now, :now)
    """), {"password_hash": password_hash, "now": now})

    # 3. Certificate type
    print("   Creating certificate type...")
    conn.execute(text("""
        INSERT INTO certificate_types (name, year, is_active)
        VALUES ('الثانوية العامة', '2024', true)
    """))
    cert_result = conn.execute(text("SELECT id FROM certificate_types ORDER BY id LIMIT 1"))
    certificate_type_id = cert_result.fetchone()[0]

    # 4. Sections
    print("   Creating sections...")
    for name in SECTIONS:
        conn.execute(text(
            "INSERT INTO sections (name, certificate_type_id) VALUES (:name, :cert_id)"
        ), {"name": name, "cert_id": certificate_type_id})

    section_result = conn.execute(text("SELECT id FROM sections WHERE name = :name"), {"name": SECTIONS[0]})
    scientific_section_id = section_result.fetchone()[0]

    # 5. Subjects of the scientific section
    print("   Creating scientific subjects...")
    for name, max_grade, min_grade in SCIENTIFIC_SUBJECTS:
        conn.execute(text("""
            INSERT INTO subjects (name, section_id, max_grade, min_grade)
            VALUES (:name, :section_id, :max_grade, :min_grade)
        """), {"name": name, "section_id": scientific_section_id, "max_grade": max_grade, "min_grade": min_grade})

    print("✅ Default data seeded")


def downgrade() -> None:
    """Remove all seeded data."""
    conn = op.get_bind()

    # Delete in reverse order to respect foreign keys
    conn.execute(text("DELETE FROM subjects"))
    conn.execute(text("DELETE FROM sections"))
    conn.execute(text("DELETE FROM certificate_types"))
    conn.execute(text("DELETE FROM admins WHERE username = 'admin'"))
    conn.execute(text("DELETE FROM portal_settings WHERE id = 1"))
