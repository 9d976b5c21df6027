from sqlalchemy import Column, BigInteger, Integer, String, Boolean, DateTime, Float, Text, JSON
from sqlalchemy.sql import func
from wetreck.database import Base

# ================================
# Bookings
# ================================
class BookingColumns:
    """Columns shared by every booking variant"""
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    package_id = Column(String(255))
    package_title = Column(String(255))
    person_count = Column(Integer)
    date = Column(String(64))
    person_details = Column(JSON, nullable=False, default=list)
    arrival_place = Column(String(255))
    pickup_needed = Column(Boolean, default=False)
    is_member = Column(Boolean, default=False)
    membership_id = Column(String(64))
    final_amount = Column(Float)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class TourBooking(BookingColumns, Base):
    __tablename__ = "tour_bookings"

class TrekBooking(BookingColumns, Base):
    __tablename__ = "trek_bookings"

    health_details = Column(JSON)

class BikeBooking(BookingColumns, Base):
    __tablename__ = "bike_bookings"

    bike_details = Column(JSON)

# ================================
# Memberships
# ================================
class Membership(Base):
    __tablename__ = "memberships"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    name = Column(String(255))
    dob = Column(String(64))
    mobile = Column(String(64))
    email = Column(String(255), index=True)
    occupation = Column(String(255))
    address = Column(Text)
    membership_plan = Column(String(255))
    amount = Column(Float)
    start_date = Column(DateTime)
    end_date = Column(DateTime, index=True)
    unique_code = Column(String(8), index=True)
    expiration_notified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
