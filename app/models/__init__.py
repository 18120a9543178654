"""Database models package."""

from app.models.admin import Admin
from app.models.certificate_type import CertificateType
from app.models.objection import Objection, ObjectionStatus
from app.models.portal_settings import SETTINGS_ROW_ID, PortalSettings
from app.models.result import Result
from app.models.section import Section
from app.models.student import Student
from app.models.subject import Subject

__all__ = [
    # Admin
    "Admin",
    # Exam structure
    "CertificateType",
    "Section",
    "Subject",
    # Students and grades
    "Student",
    "Result",
    # Objections
    "Objection",
    "ObjectionStatus",
    # Settings
    "PortalSettings",
    "SETTINGS_ROW_ID",
]
