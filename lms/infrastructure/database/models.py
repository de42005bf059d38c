# lms/infrastructure/database/models.py

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import func

from lms.infrastructure.database.session import Base

JsonType = JSON().with_variant(JSONB(), "postgresql")


class BaseModel(Base):
    """Audit and soft-delete columns shared by every LMS table."""

    __abstract__ = True

    is_active = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    created_by = Column(Integer, nullable=True)
    updated_by = Column(Integer, nullable=True)
    deleted_by = Column(Integer, nullable=True)

    created_ip = Column(String(45), nullable=True)
    updated_ip = Column(String(45), nullable=True)


class TenantScopedModel(BaseModel):
    __abstract__ = True

    @declared_attr
    def tenant_id(cls):
        return Column(Integer, ForeignKey("tenants.tenant_id"), nullable=False, index=True)


class Tenant(BaseModel):
    """A customer organisation. Its primary key doubles as the tenant scope column."""

    __tablename__ = "tenants"

    tenant_id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_name = Column(String(100), nullable=False)
    logo_url_light = Column(String(500), nullable=True)
    logo_url_dark = Column(String(500), nullable=True)
    theme = Column(JsonType, nullable=True)
    tenant_status = Column(String(20), nullable=False, default="ACTIVE")


class Client(TenantScopedModel):
    __tablename__ = "clients"

    client_id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(255), nullable=False)
    email_address = Column(String(255), nullable=False)
    client_status = Column(String(20), nullable=False, default="ACTIVE")


class SystemUser(BaseModel):
    __tablename__ = "system_users"

    system_user_id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.tenant_id"), nullable=True, index=True)
    role_type = Column(String(20), nullable=False)
    username = Column(String(50), nullable=False, unique=True)
    full_name = Column(String(255), nullable=False)
    email_address = Column(String(255), nullable=False)


class Country(BaseModel):
    __tablename__ = "countries"

    country_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    iso_code_2 = Column(String(2), nullable=False, unique=True)


class Specialization(TenantScopedModel):
    __tablename__ = "specializations"

    specialization_id = Column(Integer, primary_key=True, autoincrement=True)
    specialization_name = Column(String(255), nullable=False)
    specialization_thumbnail_url = Column(Text, nullable=True)


class Course(TenantScopedModel):
    __tablename__ = "courses"

    course_id = Column(Integer, primary_key=True, autoincrement=True)
    course_name = Column(String(255), nullable=False)
    course_description = Column(Text, nullable=True)
    course_status = Column(String(20), nullable=False, default="DRAFT")
    course_type = Column(String(20), nullable=False, default="PAID")
    course_price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    specialization_id = Column(
        Integer, ForeignKey("specializations.specialization_id"), nullable=True
    )


class Notification(TenantScopedModel):
    __tablename__ = "notifications"

    notification_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    notification_type = Column(String(30), nullable=False)
    priority = Column(String(20), nullable=False, default="NORMAL")
    metadata_ = Column("metadata", JsonType, nullable=True)


class SystemLog(Base):
    """Append-only audit trail. Never soft-deleted, never tenant-filtered."""

    __tablename__ = "system_logs"

    system_log_id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, nullable=True, index=True)
    actor = Column(String(64), nullable=False)
    action = Column(String(64), nullable=False)
    resource_type = Column(String(64), nullable=False)
    resource_id = Column(String(64), nullable=False)
    reason = Column(Text, nullable=True)
    correlation_id = Column(String(64), nullable=True)
    metadata_ = Column("metadata", JsonType, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
