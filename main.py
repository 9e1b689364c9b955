from fastapi import FastAPI

import models  # registra las tablas y vistas del almacén en Base.metadata
from fastapi.middleware.cors import CORSMiddleware

from config import CORS_ORIGINS

# Sin create_all: el esquema lo administra el almacén remoto

app = FastAPI(title="Consola de recepcion")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],         # GET, POST, PUT...
    allow_headers=["*"],
)

from endpoints import rooms, bookings, guests, payments, dashboard, catalog
app.include_router(rooms.router)
app.include_router(bookings.router)
app.include_router(guests.router)
app.include_router(payments.router)
app.include_router(dashboard.router)
app.include_router(catalog.router)


@app.get("/")
def read_root():
    return {"message": "Consola de recepcion activa"}
