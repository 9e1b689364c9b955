from datetime import datetime
from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    Boolean,
    ForeignKey,
    Text,
    Numeric,
    Index,
)
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import UUID
from database.conexion import Base


# ============================================================================
# TABLAS DEL ALMACÉN (Supabase / PostgreSQL)
# Los ids son UUID generados por la base; se manejan como texto.
# ============================================================================

class Apartment(Base):
    """Habitaciones del hotel"""
    __tablename__ = "apartments"

    id = Column(UUID(as_uuid=False), primary_key=True)
    number = Column(String, nullable=False)
    floor = Column(Integer, nullable=False)
    capacity = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=True, default=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    bookings = relationship("Booking", back_populates="apartment")


class Channel(Base):
    """Canales de venta (directo, Booking, Airbnb...)"""
    __tablename__ = "channels"

    id = Column(UUID(as_uuid=False), primary_key=True)
    code = Column(String, nullable=False)
    name = Column(String, nullable=False)
    commission_rate = Column(Numeric(5, 2), nullable=True)
    is_active = Column(Boolean, nullable=True, default=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    bookings = relationship("Booking", back_populates="channel")


class Guest(Base):
    __tablename__ = "guests"
    __table_args__ = (
        Index("idx_guests_full_name", "full_name"),
    )

    id = Column(UUID(as_uuid=False), primary_key=True)
    full_name = Column(String, nullable=False)
    document_type = Column(String, nullable=False, default="CC")
    document_number = Column(String, nullable=False)
    country = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    email = Column(String, nullable=False)
    city = Column(String, nullable=True)
    nationality = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    emergency_contact_name = Column(String, nullable=True)
    emergency_contact_phone = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    bookings = relationship("Booking", back_populates="guest")


class Booking(Base):
    """Reservas. El estado se guarda crudo: PENDING, CONFIRMED, CHECKED_IN, CHECKED_OUT, CANCELLED"""
    __tablename__ = "bookings"
    __table_args__ = (
        Index("idx_bookings_dates", "check_in_date", "check_out_date"),
        Index("idx_bookings_guest", "guest_id"),
    )

    id = Column(UUID(as_uuid=False), primary_key=True)
    booking_reference = Column(String, nullable=True)
    guest_id = Column(UUID(as_uuid=False), ForeignKey("guests.id"), nullable=False)
    apartment_id = Column(UUID(as_uuid=False), ForeignKey("apartments.id"), nullable=False)
    channel_id = Column(UUID(as_uuid=False), ForeignKey("channels.id"), nullable=False)
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    price_per_night = Column(Numeric(12, 2), nullable=False)
    status = Column(String, nullable=False, default="PENDING")
    includes_breakfast = Column(Boolean, nullable=True, default=False)
    breakfast_quantity = Column(Integer, nullable=True, default=0)
    number_of_guests = Column(Integer, nullable=True, default=1)
    observations = Column(Text, nullable=True)
    check_in_completed_at = Column(DateTime(timezone=True), nullable=True)
    check_out_completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    guest = relationship("Guest", back_populates="bookings")
    apartment = relationship("Apartment", back_populates="bookings")
    channel = relationship("Channel", back_populates="bookings")
    payments = relationship("Payment", back_populates="booking")


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = (
        Index("idx_payments_booking", "booking_id"),
    )

    id = Column(UUID(as_uuid=False), primary_key=True)
    booking_id = Column(UUID(as_uuid=False), ForeignKey("bookings.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String, nullable=False)
    payment_date = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    invoice_number = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow)

    booking = relationship("Booking", back_populates="payments")


# ============================================================================
# VISTAS (solo lectura)
# ============================================================================

class BookingSummary(Base):
    """Vista booking_summary: reserva unida con huésped, habitación, canal y saldos"""
    __tablename__ = "booking_summary"

    id = Column(UUID(as_uuid=False), primary_key=True)
    booking_reference = Column(String)
    guest_name = Column(String)
    email = Column(String)
    phone = Column(String)
    document_number = Column(String)
    apartment_number = Column(String)
    floor = Column(Integer)
    channel_name = Column(String)
    check_in_date = Column(Date)
    check_out_date = Column(Date)
    status = Column(String)
    price_per_night = Column(Numeric(12, 2))
    total_nights = Column(Integer)
    taxable_amount = Column(Numeric(12, 2))
    tax_amount = Column(Numeric(12, 2))
    total_amount = Column(Numeric(12, 2))
    total_paid = Column(Numeric(12, 2))
    balance_due = Column(Numeric(12, 2))
    created_at = Column(DateTime(timezone=True))


class MonthlyKpi(Base):
    """Vista monthly_kpis: una fila por mes y canal"""
    __tablename__ = "monthly_kpis"

    month = Column(Date, primary_key=True)
    channel_name = Column(String, primary_key=True)
    total_nights_sold = Column(Integer)
    total_revenue = Column(Numeric(14, 2))
    revenue_without_tax = Column(Numeric(14, 2))
    total_bookings = Column(Integer)
    occupancy_rate = Column(Numeric(6, 2))
    adr = Column(Numeric(12, 2))
