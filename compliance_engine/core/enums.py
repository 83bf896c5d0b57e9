"""String enums stored as plain VARCHAR columns."""

from enum import Enum


class VendorStatus(str, Enum):
    NEW = "NEW"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    ACTIVE = "ACTIVE"
    NEEDS_RENEWAL = "NEEDS_RENEWAL"
    REJECTED = "REJECTED"


class DocumentType(str, Enum):
    COMMERCIAL_REGISTRATION = "COMMERCIAL_REGISTRATION"
    ISO_CERTIFICATE = "ISO_CERTIFICATE"
    ZAKAT_CERTIFICATE = "ZAKAT_CERTIFICATE"
    GOSI_CERTIFICATE = "GOSI_CERTIFICATE"
    INSURANCE_CERTIFICATE = "INSURANCE_CERTIFICATE"
    VAT_CERTIFICATE = "VAT_CERTIFICATE"
    BANK_LETTER = "BANK_LETTER"
    COMPANY_PROFILE = "COMPANY_PROFILE"
    OTHER = "OTHER"


class UserRole(str, Enum):
    EXECUTIVE = "EXECUTIVE"
    PROCUREMENT_MANAGER = "PROCUREMENT_MANAGER"
    PROCUREMENT_OFFICER = "PROCUREMENT_OFFICER"
    VENDOR = "VENDOR"
