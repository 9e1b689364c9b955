"""
Archivo de inicialización del paquete models.
Expone las tablas y vistas del almacén para que SQLAlchemy
(Base.metadata) las detecte al importar 'models'.
"""

from .core import (
    Apartment,
    Channel,
    Guest,
    Booking,
    Payment,
    BookingSummary,
    MonthlyKpi,
)

__all__ = [
    "Apartment", "Channel", "Guest", "Booking", "Payment",
    "BookingSummary", "MonthlyKpi",
]
