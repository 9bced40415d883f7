# api/main.py
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.sa import database
from api.routes.books import router as books_router

app = FastAPI(title="Book Catalog")

# CORS configuration
origins = [
    origin.strip()
    for origin in os.getenv(
        "CATALOG_CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost"
    ).split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    database.db.init_db()

@app.get("/")
async def root():
    return {"status": "ok", "message": "Book Catalog API"}

app.include_router(books_router)
