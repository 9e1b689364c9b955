"""
Configuración de la consola de recepción
"""
import os

from dotenv import load_dotenv

load_dotenv()

# Hotel
HOTEL_TIMEZONE_STR = os.getenv("HOTEL_TIMEZONE", "America/Bogota")
ROOMS_TOTAL = int(os.getenv("ROOMS_TOTAL", "28"))
ROOMS_LOOKAHEAD_DAYS = int(os.getenv("ROOMS_LOOKAHEAD_DAYS", "7"))

# Moneda
CURRENCY_SYMBOL = "$"

# Logs
LOG_FILE = os.getenv("LOG_FILE", "console_logs.txt")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS (frontend Vite en desarrollo)
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
    if origin.strip()
]
