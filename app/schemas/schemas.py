# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import datetime as dt
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.db.models import DonationRequestStatus, DonationStatus, NGORequestStatus, UserRole


class TokenData(BaseModel):
    user_id: Optional[int] = None
    role: Optional[UserRole] = None


class Actor(BaseModel):
    id: int
    role: UserRole

    model_config = ConfigDict(from_attributes=True)


# --- Donation Schemas ---
class DonationItem(BaseModel):
    name: str = Field(min_length=1)
    quantity: float = Field(gt=0)
    unit: str
    type: str
    condition: str
    cooked_date: Optional[datetime] = None
    cooked_time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    item_images: List[str] = []


class Location(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class DonationBase(BaseModel):
    title: str = Field(min_length=1)
    source: Optional[str] = None
    description: Optional[str] = None
    items: List[DonationItem] = Field(min_length=1)
    number_of_people_fed: Optional[int] = Field(default=None, ge=0)
    images: List[str] = []
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = Field(default=None, pattern=r"^\d{6}$")
    contact: Optional[str] = None
    email: Optional[EmailStr] = None
    person_name: Optional[str] = None


class DonationCreate(DonationBase):
    location: Optional[Location] = None


class Donation(DonationBase):
    id: int
    donor_id: int
    status: DonationStatus
    assigned_ngo_id: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    proof_images: List[str] = []
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# --- Donation Request Schemas ---
class DonationRequestCreate(BaseModel):
    message: Optional[str] = Field(default=None, max_length=1000)


class DonationRequest(BaseModel):
    id: int
    donation_id: int
    donor_id: int
    ngo_id: int
    message: Optional[str] = None
    status: DonationRequestStatus
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# --- Team Schemas ---
class PickupSchedule(BaseModel):
    date: dt.date
    time: str = Field(pattern=r"^\d{2}:\d{2}$")


class DeliverySchedule(PickupSchedule):
    location: Optional[str] = None


class SchedulePickupRequest(BaseModel):
    pickup_schedule: PickupSchedule
    delivery_schedule: DeliverySchedule
    volunteers: List[int]
    leader_id: int


class DonationTeam(BaseModel):
    id: int
    donation_id: int
    leader_id: int
    volunteers: List[int]
    pickup_schedule: PickupSchedule
    delivery_schedule: DeliverySchedule

    model_config = ConfigDict(from_attributes=True)


class ScheduledPickup(BaseModel):
    donation: Donation
    team: DonationTeam


# --- OTP Schemas ---
class OTPSent(BaseModel):
    donation_id: int
    expires_at: datetime
    message: str = "OTP sent to the donor"


class OTPVerifyRequest(BaseModel):
    otp: str = Field(pattern=r"^\d+$")


class CompletionRequest(BaseModel):
    proof_files: List[str] = []


# --- Membership Schemas ---
class NGORequest(BaseModel):
    id: int
    ngo_id: int
    volunteer_id: int
    status: NGORequestStatus
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Membership(BaseModel):
    request: NGORequest
    ngo_volunteers: List[int]
    volunteer_joined_ngos: List[int]
