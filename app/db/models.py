# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import enum
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Enum, Float, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import relationship

from app.db.database import Base


def utcnow():
    return datetime.now(timezone.utc)


class UserRole(str, enum.Enum):
    DONOR = "Donor"
    NGO = "NGO"
    VOLUNTEER = "Volunteer"


class DonationStatus(str, enum.Enum):
    NEW = "New"
    ASSIGNED = "Assigned"
    SCHEDULED = "Scheduled"
    PICKED = "Picked"
    COMPLETED = "Completed"


class DonationRequestStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class NGORequestStatus(str, enum.Enum):
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


def _enum_column(enum_cls, name, **kwargs):
    return Column(
        Enum(enum_cls, name=name, values_callable=lambda members: [m.value for m in members]),
        **kwargs,
    )


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    contact = Column(String(50), nullable=True)
    role = _enum_column(UserRole, "user_role", nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)


class NGOMembership(Base):
    """One row per (NGO, volunteer) pair; both membership views read from it."""

    __tablename__ = "ngo_memberships"

    ngo_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    volunteer_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)


class NGODonation(Base):
    __tablename__ = "ngo_donations"

    ngo_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    donation_id = Column(Integer, ForeignKey("donations.id"), primary_key=True)


class NGOProfile(Base):
    __tablename__ = "ngo_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    organization_name = Column(String(255), nullable=False)
    registration_number = Column(String(100), nullable=True)
    registered_under = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    pincode = Column(String(6), nullable=True)
    about = Column(Text, nullable=True)
    user = relationship("User")
    memberships = relationship(
        "NGOMembership",
        primaryjoin="NGOProfile.user_id == foreign(NGOMembership.ngo_id)",
        viewonly=True,
    )
    handled = relationship(
        "NGODonation",
        primaryjoin="NGOProfile.user_id == foreign(NGODonation.ngo_id)",
        viewonly=True,
    )

    @property
    def volunteers(self):
        return sorted({m.volunteer_id for m in self.memberships})

    @property
    def donations_handled(self):
        return sorted({h.donation_id for h in self.handled})


class VolunteerProfile(Base):
    __tablename__ = "volunteer_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=True)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    pincode = Column(String(6), nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)
    user = relationship("User")
    memberships = relationship(
        "NGOMembership",
        primaryjoin="VolunteerProfile.user_id == foreign(NGOMembership.volunteer_id)",
        viewonly=True,
    )

    @property
    def joined_ngos(self):
        return sorted({m.ngo_id for m in self.memberships})


class Donation(Base):
    __tablename__ = "donations"

    id = Column(Integer, primary_key=True, index=True)
    donor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    source = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    items = Column(JSON, nullable=False, default=list)
    number_of_people_fed = Column(Integer, nullable=True)
    images = Column(JSON, nullable=False, default=list)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    pincode = Column(String(6), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    contact = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    person_name = Column(String(255), nullable=True)
    status = _enum_column(DonationStatus, "donation_status", nullable=False, default=DonationStatus.NEW, index=True)
    assigned_ngo_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    otp_hash = Column(String(255), nullable=True)
    otp_expires_at = Column(DateTime(timezone=True), nullable=True)
    otp_attempts = Column(Integer, nullable=False, default=0)
    proof_images = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    donor = relationship("User", foreign_keys=[donor_id])
    requests = relationship("DonationRequest", back_populates="donation", cascade="all, delete-orphan")
    team = relationship("DonationTeam", back_populates="donation", uselist=False, cascade="all, delete-orphan")


class DonationRequest(Base):
    __tablename__ = "donation_requests"

    id = Column(Integer, primary_key=True, index=True)
    donation_id = Column(Integer, ForeignKey("donations.id"), nullable=False, index=True)
    donor_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    ngo_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    message = Column(Text, nullable=True)
    status = _enum_column(
        DonationRequestStatus, "donation_request_status", nullable=False, default=DonationRequestStatus.PENDING
    )
    created_at = Column(DateTime(timezone=True), default=utcnow)
    donation = relationship("Donation", back_populates="requests")

    # At most one Pending request per (donation, NGO) pair.
    __table_args__ = (
        Index(
            "uq_donation_requests_pending",
            "donation_id",
            "ngo_id",
            unique=True,
            sqlite_where=text("status = 'Pending'"),
            postgresql_where=text("status = 'Pending'"),
        ),
    )


class DonationTeam(Base):
    __tablename__ = "donation_teams"

    id = Column(Integer, primary_key=True, index=True)
    donation_id = Column(Integer, ForeignKey("donations.id"), unique=True, nullable=False)
    leader_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    pickup_schedule = Column(JSON, nullable=False)
    delivery_schedule = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    donation = relationship("Donation", back_populates="team")
    members = relationship("DonationTeamMember", cascade="all, delete-orphan")

    @property
    def volunteers(self):
        return sorted({m.volunteer_id for m in self.members})


class DonationTeamMember(Base):
    __tablename__ = "donation_team_members"

    team_id = Column(Integer, ForeignKey("donation_teams.id"), primary_key=True)
    volunteer_id = Column(Integer, ForeignKey("users.id"), primary_key=True)


class NGORequest(Base):
    __tablename__ = "ngo_requests"

    id = Column(Integer, primary_key=True, index=True)
    ngo_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    volunteer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = _enum_column(NGORequestStatus, "ngo_request_status", nullable=False, default=NGORequestStatus.PENDING)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # At most one Pending or Accepted request per (NGO, volunteer) pair.
    __table_args__ = (
        Index(
            "uq_ngo_requests_open",
            "ngo_id",
            "volunteer_id",
            unique=True,
            sqlite_where=text("status IN ('Pending', 'Accepted')"),
            postgresql_where=text("status IN ('Pending', 'Accepted')"),
        ),
    )
